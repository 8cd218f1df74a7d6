"""The network interface and the base flow that trains and tracks networks."""

from __future__ import annotations

import logging
import math
import random
import string
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from coinflow.ml.model.schema import Detail, Model, Segments
from coinflow.ml.model.vector import Key, Vector
from coinflow.ml.net.dataset import DataSet
from coinflow.ml.net.multi import MultiNetwork
from coinflow.ml.net.poly import POLY_KEY, Polynomial

GRU_KEY = "net.GRU"
HMM_KEY = "net.HMM"
FOREST_KEY = "net.RandomForest"
NN_KEY = "net.NeuralNet"

_TRACKER_SIZE = 12

_log = logging.getLogger(__name__)


class Network(Protocol):
    """A network trained on input and output tensors."""

    @property
    def config(self) -> Model: ...

    def train(self, x: list[list[float]], y: list[list[float]]) -> None: ...

    def predict(self, x: list[list[float]]) -> list[list[float]]: ...

    def loss(self, actual: list[list[float]], predicted: list[list[float]]) -> list[float]: ...

    def load(self, key: Key, detail: Detail) -> None: ...

    def save(self, key: Key, detail: Detail) -> None: ...


ConstructNetwork = Callable[[], "tuple[Network, Model]"]


def new_network(kind: str, cfg: Model) -> Network:
    """Create a network of the given type."""
    if kind == POLY_KEY:
        return Polynomial(cfg)
    raise ValueError(f"unknown network detail : {kind}")


def _network_type(net: Any) -> str:
    return getattr(net, "kind", f"net.{type(net).__name__}")


def _random_hash(n: int) -> str:
    return "".join(random.choices(string.ascii_letters, k=n))


@dataclass
class Stats:
    """Recent accuracy, losses and the last prediction of a network."""

    size: int
    accuracy: deque = field(init=False)
    loss: deque = field(init=False)
    prediction: list[list[float]] = field(default_factory=list)
    decisions: list[int] = field(init=False)

    def __post_init__(self) -> None:
        self.accuracy = deque(maxlen=self.size)
        self.loss = deque(maxlen=self.size)
        self.decisions = [0] * self.size


@dataclass
class Performance:
    """Counts of how a network's predictions turned out."""

    total: int = 0
    match: int = 0
    false: int = 0
    detail: Detail = field(default_factory=Detail)
    accuracy: float = 0.0
    loss: float = 0.0


class Tracker:
    """Tracks the predictions and performance of one network."""

    def __init__(self, size: int) -> None:
        self.stats = Stats(size)
        self.metrics = Performance()

    def set_last(self, last: list[list[float]]) -> None:
        self.stats.prediction = last


class BaseNetwork:
    """Feeds vectors to a set of networks, training and predicting with each."""

    def __init__(self, key: Key, inp: int, out: int, *generators: ConstructNetwork) -> None:
        self.key = key
        self.dataset = DataSet(in_size=inp, out_size=out)
        self.networks: dict[Detail, Network] = {}
        self.configs: dict[Detail, Model] = {}
        self.trackers: dict[Detail, Tracker] = {}

        multi: list[Network] = []
        multi_types: list[str] = []
        multi_hashes: list[str] = []
        for i, generate in enumerate(generators):
            network, cfg = generate()
            if cfg.multi:
                member, _ = generate()
                multi.append(member)
                multi_types.append(cfg.detail.type)
                multi_hashes.append(cfg.detail.hash)
            detail = Detail(
                type=_network_type(network),
                hash=cfg.detail.hash or _random_hash(5),
                index=i,
            )
            self.networks[detail] = network
            self.configs[detail] = cfg
            self.trackers[detail] = Tracker(_TRACKER_SIZE)

        multi_detail = Detail(
            type=":".join(multi_types),
            hash="|".join(multi_hashes),
            index=len(generators),
        )
        self.networks[multi_detail] = MultiNetwork(*multi)
        self.configs[multi_detail] = Model()
        self.trackers[multi_detail] = Tracker(_TRACKER_SIZE)

    def push(self, key: Key, vector: Vector) -> tuple[dict[Detail, list[list[float]]], bool]:
        """Add a vector; once the window is full train and predict with each network.

        Returns the predictions per network and whether the window was ready.
        """
        inputs, ready = self.dataset.push(key, vector)
        if not ready:
            return {}, False

        out: dict[Detail, list[list[float]]] = {}
        for detail, network in self.networks.items():
            tracker = self.trackers[detail]
            try:
                network.train(self.dataset.inputs, self.dataset.outputs)
            except ValueError as err:
                _log.warning("training failed for %s %s: %s", key.to_string(), detail, err)
                continue

            last_prediction = tracker.stats.prediction
            if last_prediction:
                loss = math.hypot(*network.loss(self.dataset.outputs, last_prediction))
                tracker.stats.loss.append(loss)
                if len(tracker.stats.loss) == tracker.stats.size:
                    tracker.metrics.total += 1
                    last_row = last_prediction[-1]
                    if last_row and abs(last_row[0]) > 0.5:
                        if loss < 0.5:
                            tracker.metrics.match += 1
                        elif loss > 0.5:
                            tracker.metrics.false += 1
                    tracker.metrics.loss = loss

            try:
                this_out = network.predict(inputs)
            except ValueError as err:
                tracker.set_last([])
                _log.warning("prediction failed for %s %s: %s", key.to_string(), detail, err)
                continue
            tracker.set_last(this_out)
            out[detail] = this_out
            if tracker.metrics.loss == 0.0:
                tracker.metrics.loss = 0.01
        return out, True


def base_network_constructor(
    inp: int, out: int
) -> Callable[[Key, Segments], BaseNetwork]:
    """A factory building a base network from a segment's models."""

    def construct(key: Key, segments: Segments) -> BaseNetwork:
        def generator(model: Model) -> ConstructNetwork:
            return lambda: (new_network(model.detail.type, model), model)

        return BaseNetwork(key, inp, out, *(generator(m) for m in segments.stats.model))

    return construct