"""A network that combines several networks and predicts only on agreement."""

from __future__ import annotations

from typing import Any

from coinflow.ml.model.schema import Detail, Model
from coinflow.ml.model.vector import Key
from coinflow.ml.net.dataset import last


class MultiNetwork:
    """Trains all its networks and predicts a value only when all agree."""

    kind = "net.MultiNetwork"

    def __init__(self, *networks: Any) -> None:
        self.networks = list(networks)

    @property
    def config(self) -> Model:
        return Model()

    def train(self, x: list[list[float]], y: list[list[float]]) -> None:
        for i, network in enumerate(self.networks):
            try:
                network.train(x, y)
            except ValueError as err:
                raise ValueError(f"error for multi-network at {i} : {err}") from err

    def predict(self, x: list[list[float]]) -> list[list[float]]:
        prediction: list[float] | None = None
        for i, network in enumerate(self.networks):
            try:
                pp = network.predict(x)
            except ValueError as err:
                raise ValueError(f"error for multi-network at {i} : {err}") from err
            this_prediction = last(pp)
            if prediction is None:
                prediction = this_prediction
            elif any(a != b for a, b in zip(prediction, this_prediction)):
                return [[0.0]]
        return [list(prediction) if prediction is not None else []]

    def loss(self, actual: list[list[float]], predicted: list[list[float]]) -> list[float]:
        total: list[float] | None = None
        for network in self.networks:
            loss = network.loss(actual, predicted)
            total = list(loss) if total is None else [a + b for a, b in zip(total, loss)]
        return total or []

    def load(self, key: Key, detail: Detail) -> None:
        """Load the state of every member network."""
        for network in self.networks:
            network.load(key, detail)

    def save(self, key: Key, detail: Detail) -> None:
        """Save the state of every member network."""
        for network in self.networks:
            network.save(key, detail)