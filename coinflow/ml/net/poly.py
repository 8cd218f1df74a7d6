"""A network that extrapolates the price trend with a polynomial fit."""

from __future__ import annotations

import logging
import warnings
from collections import deque
from typing import ClassVar

import numpy as np
from numpy.polynomial import polynomial as P

from coinflow.ml.model.schema import Detail, Model
from coinflow.ml.model.vector import Key
from coinflow.ml.net.dataset import last, last_at, quantify, quantify_all, same_or_nothing

POLY_KEY = "net.Polynomial"

_log = logging.getLogger(__name__)


def _fit(xx: list[float], yy: list[float], order: int) -> list[float]:
    """Least-squares polynomial coefficients, lowest degree first."""
    if len(xx) < order + 1:
        raise ValueError(
            f"not enough points ({len(xx)} out of {order + 1}) to fit degree {order}"
        )
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            coefficients = P.polyfit(np.asarray(xx), np.asarray(yy), order)
        except (np.linalg.LinAlgError, ValueError) as err:
            raise ValueError(f"error during fit: {err}") from err
    return [float(c) for c in coefficients]


class Polynomial:
    """Fits the recent trend values and predicts its direction ahead."""

    kind = POLY_KEY
    _snapshots: ClassVar[dict[tuple[str, str], list[float]]] = {}

    def __init__(self, config: Model) -> None:
        if config.buffer_size <= 0:
            raise ValueError(
                "cannot init properly polynomial network with bad config "
                f"[BufferSize > 0] : [{config.buffer_size}]"
            )
        if len(config.features) < 2:
            raise ValueError(
                "cannot init properly polynomial network with bad config "
                f"[features.len > 0] : [{config.features}]"
            )
        self.config = config
        self.order = config.features[0]
        self.horizon = config.features[1]
        self._buffer: deque[float] = deque(maxlen=config.buffer_size)

    def train(self, x: list[list[float]], y: list[list[float]]) -> None:
        """Record the first attribute of the latest output; fail until full."""
        self._buffer.append(last(y)[0])
        if len(self._buffer) < self.config.buffer_size:
            raise ValueError(
                f"buffer not filled: {len(self._buffer)} of {self.config.buffer_size}"
            )

    def predict(self, x: list[list[float]]) -> list[list[float]]:
        """Predict the direction of the trend: 1, -1, or 0 if unclear."""
        size = self.config.buffer_size + 1
        xx = [0.0] * size
        yy = [0.0] * size
        history = list(self._buffer)
        for i, b in enumerate(history):
            xx[i] = float(i)
            yy[i] = b
        n = len(history)
        xx[n] = float(n)
        yy[n] = last_at(0, x)
        a = _fit(xx, yy, self.order)

        r = []
        for step in range(self.horizon):
            x0 = float(len(xx) + step)
            y = a[0] + sum(c * x0**i for i, c in enumerate(a))
            r.append(quantify(y, self.config.spread))
        return [[same_or_nothing(r)]]

    def loss(self, actual: list[list[float]], predicted: list[list[float]]) -> list[float]:
        last_actual = quantify_all(last(actual), self.config.spread)
        return [last_actual[0] - last(predicted)[0]]

    def load(self, key: Key, detail: Detail) -> None:
        """Restore the trend history kept by ``save``, if there is one."""
        snapshot = self._snapshots.get((key.to_string(), detail.to_string()))
        if snapshot is None:
            _log.debug("nothing to load for polynomial network")
            return
        self._buffer = deque(snapshot, maxlen=self.config.buffer_size)

    def save(self, key: Key, detail: Detail) -> None:
        """Keep a copy of the trend history in memory."""
        self._snapshots[(key.to_string(), detail.to_string())] = list(self._buffer)