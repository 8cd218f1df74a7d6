"""Datasets, polynomial and combined networks, and the base training flow."""