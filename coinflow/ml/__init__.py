"""Feature collection, default configuration and prediction performance."""