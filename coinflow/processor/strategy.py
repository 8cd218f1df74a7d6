"""Decides whether a signal is good enough to trade on."""

from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import datetime, timedelta
from typing import Callable

from coinflow.ml.model.schema import Config, Segments, Signal, Trader
from coinflow.ml.model.vector import ALL_COINS, Key, Tick, Type

_log = logging.getLogger(__name__)


class Strategy:
    """Keeps the latest signal per key and acts once it has been confirmed.

    A coin goes live at the first tick no older than ``max_lag``.
    """

    def __init__(self, config: Config, max_lag: timedelta = timedelta(minutes=5)) -> None:
        self._lock = threading.RLock()
        self._signals: dict[Key, Signal] = {}
        self._ticks: dict[Key, Tick] = {}
        self._config = config
        self._live: dict[str, bool] = {}
        self._max_lag = max_lag

    @property
    def config(self) -> Config:
        """A shallow copy of the current configuration."""
        return dataclasses.replace(self._config)

    def set_gap(self, coin: str, gap: float) -> Config:
        with self._lock:
            self._config.set_gap(coin, gap)
            return self.config

    def set_precision_threshold(self, coin: str, network: str, precision: float) -> Config:
        with self._lock:
            self._config.set_precision_threshold(coin, network, precision)
            return self.config

    def _enable(
        self,
        coin: str,
        update: Callable[[Segments], Segments],
        flag: Callable[[Segments], bool],
    ) -> dict[str, bool]:
        with self._lock:
            segments = self._config.segments
            enabled: dict[str, bool] = {}
            for k, cfg in list(segments.items()):
                if coin == ALL_COINS or k.match(coin):
                    segments[k] = update(cfg)
                    enabled[k.to_string()] = flag(segments[k])
            return enabled

    def enable_ml(self, coin: str, enabled: bool) -> dict[str, bool]:
        """Switch the analysis of the coin, or of all coins, on or off."""
        return self._enable(
            coin,
            lambda s: dataclasses.replace(
                s, stats=dataclasses.replace(s.stats, live=enabled)
            ),
            lambda s: s.stats.live,
        )

    def is_enabled_ml(self, key: Key) -> bool:
        with self._lock:
            segment = self._config.segments.get(key)
            return segment.stats.live if segment is not None else False

    def enable_trader(self, coin: str, enabled: bool) -> dict[str, bool]:
        """Switch trading of the coin, or of all coins, on or off."""
        return self._enable(
            coin,
            lambda s: dataclasses.replace(
                s, trader=dataclasses.replace(s.trader, live=enabled)
            ),
            lambda s: s.trader.live,
        )

    def is_enabled_trader(self, key: Key) -> bool:
        with self._lock:
            segment = self._config.segments.get(key)
            return segment.trader.live if segment is not None else False

    def _is_valid_time(self, t: datetime) -> bool:
        now = datetime.now(t.tzinfo) if t.tzinfo is not None else datetime.now()
        return now - t <= self._max_lag

    def is_live(self, coin: str, tick: Tick) -> tuple[bool, bool]:
        """Return whether the coin is live and whether it just went live."""
        if self._live.get(coin):
            return True, False
        if self._is_valid_time(tick.time):
            _log.info("strategy going live for %s at %s", coin, tick.time)
            self._live[coin] = True
            return True, True
        return False, False

    def evaluate(
        self, tick: Tick, signal: Signal, config: Config
    ) -> tuple[Signal, Key, bool] | None:
        """Record the signal and check whether to act on it at this tick.

        Returns the confirmed signal, its key and whether to open a
        position, or None when there is nothing to do.
        """
        if signal.type == Type.NONE:
            _log.error("wrong signal: %s", signal)
            return None
        live, _ = self.is_live(signal.key.coin, tick)
        if not live and not config.option.debug:
            return None
        key = Key(coin=signal.key.coin)
        signal = dataclasses.replace(signal, key=key)
        with self._lock:
            self._signal(key, signal)
            return self._trade(key, tick)

    def _trade(self, k: Key, tick: Tick) -> tuple[Signal, Key, bool] | None:
        with self._lock:
            debug = self._config.option.debug
            for key, signal in list(self._signals.items()):
                segment = self._config.segments.get(key)
                trading = segment.trader.live if segment is not None else False
                if not (key.match(k.coin) and (trading or debug)):
                    continue
                self._ticks[key] = tick
                cfg = self._trader_for(key)
                lag = (tick.time - signal.time).total_seconds() / 3600
                if lag >= cfg.buffer_time:
                    signal = dataclasses.replace(signal, time=tick.time, price=tick.price)
                    self._signals[key] = signal
                    return signal, key, signal.weight > 0
            return None

    def _signal(self, key: Key, signal: Signal) -> bool:
        with self._lock:
            current = self._signals.get(key)
            if current is None or current.type != signal.type:
                _log.debug("replacing signal %s with %s", current, signal)
                self._signals[key] = signal
            else:
                _log.debug("keeping signal %s, ignoring %s", current, signal)
            return signal.weight > 0

    def reset(self, key: Key) -> bool:
        """Drop the signal of the key; tell whether there was one."""
        with self._lock:
            return self._signals.pop(key, None) is not None

    def _trader_for(self, key: Key) -> Trader:
        segment = self._config.segments.get(key)
        if segment is not None:
            return segment.trader
        for k, cfg in self._config.segments.items():
            if k.coin == key.coin:
                return cfg.trader
        return Trader()