"""Collects trade statistics into the vectors used to train the networks."""

from __future__ import annotations

import logging
import math
import warnings
from collections import deque
from typing import Callable

import numpy as np
from numpy.polynomial import polynomial as P

from coinflow.ml.model.schema import Config
from coinflow.ml.model.vector import Key, Meta, TradeSignal, Vector

Collect = Callable[[TradeSignal], "list[float]"]

_log = logging.getLogger(__name__)


def _ratio(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def fit(xx: list[float], yy: list[float], *args: int) -> list[float]:
    """For each degree, the leading coefficient of a least-squares fit."""
    result = []
    for d in args:
        if len(yy) < d + 1:
            raise ValueError(
                f"not enough buckets ({len(yy)} out of {d + 1}) "
                f"to apply polynomial regression for {d}"
            )
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            try:
                coefficients = P.polyfit(np.asarray(xx, float), np.asarray(yy, float), d)
            except (np.linalg.LinAlgError, ValueError, TypeError) as err:
                raise ValueError(f"could not fit for degree '{d}': {err}") from err
        if len(coefficients) <= d:
            raise ValueError(f"could not fit for degree '{d}': {list(coefficients)}")
        result.append(float(coefficients[d]))
    return result


class Collector:
    """Joins the previous input of each segment with the next observation.

    Each configured segment keeps a window of look-back plus look-ahead
    inputs; once it is full, every push produces a vector.
    """

    def __init__(self, config: Config, inp: Collect, out: Collect) -> None:
        self.config = config
        self._in = inp
        self._out = out
        self._tracker: dict[Key, deque[list[float]]] = {}
        for k, cfg in config.segments.items():
            self._tracker[k] = deque(maxlen=cfg.stats.look_back + cfg.stats.look_ahead)
            _log.info("init collector for %s", k.to_string())

    def push(self, trade: TradeSignal) -> list[Vector]:
        """Add a trade; return the vectors it completes."""
        vectors = []
        for k, track in self._tracker.items():
            if not k.match(trade.coin):
                continue
            x = self._in(trade)
            prev = track[-1] if track else []
            track.append(x)
            if len(track) == track.maxlen:
                vectors.append(
                    Vector(
                        meta=Meta(key=k, tick=trade.tick),
                        prev_in=prev,
                        prev_out=self._out(trade),
                        new_in=x,
                    )
                )
        return vectors


def trend(trade: TradeSignal) -> list[float]:
    """The price trend as a percentage of the price, and the price."""
    tick = trade.tick
    return [100 * _ratio(tick.stats.trend.price, tick.price), tick.price]


def collect_stats(trade: TradeSignal) -> list[float]:
    """Trend, spread, volume and buy/sell ratios of the tick, then size and price."""
    tick = trade.tick
    stats = tick.stats
    size = float(trade.meta.size)
    return [
        100 * _ratio(stats.trend.price, tick.price),
        _ratio(stats.std.price, tick.price),
        _ratio(stats.std.volume, tick.volume),
        _ratio(stats.buy.volume, tick.volume),
        _ratio(stats.buy.count, size),
        _ratio(stats.sell.volume, tick.volume),
        _ratio(stats.sell.count, size),
        size,
        tick.price,
    ]


def split_on_trend(gap: float) -> Collect:
    """A one-hot output: up, flat or down, by the relative trend against ``gap``."""

    def collect(trade: TradeSignal) -> list[float]:
        value = _ratio(trade.tick.stats.trend.price, trade.tick.price)
        y = [0.0, 0.0, 0.0]
        if value > gap:
            y[0] = 1.0
        elif value < -gap:
            y[2] = 1.0
        else:
            y[1] = 1.0
        return y

    return collect