"""Trade processors: stages that consume trades and pass them on."""

from __future__ import annotations

import logging
import math
from collections import deque
from datetime import datetime, timezone
from typing import Callable, Iterable, Iterator, Optional

from coinflow.ml.model.vector import Move, TradeSignal

NAME = "void"

Processor = Callable[[Iterable[TradeSignal]], Iterator[TradeSignal]]
Enrich = Callable[[TradeSignal], TradeSignal]

_log = logging.getLogger(__name__)


def void(name: str) -> Processor:
    """A stage that only passes the trades on to the next one."""
    processor_name = f"{name}-{NAME}"

    def run(trades: Iterable[TradeSignal]) -> Iterator[TradeSignal]:
        try:
            yield from trades
        finally:
            _log.info("closing processor %s", processor_name)

    return run


def audit(name: str, msg: str) -> str:
    """An audit line for the user."""
    return f"[{name}] {msg}"


def error(name: str, err: BaseException) -> str:
    """An error line for the user."""
    return f"[{name}] error: {err}"


def process(name: str, p: Callable[[TradeSignal], object]) -> Processor:
    """A stage that applies ``p`` to every trade and passes the trade on."""
    return process_with_close(name, p, lambda: None)


def process_with_close(
    name: str,
    p: Callable[[TradeSignal], object],
    shutdown: Optional[Callable[[], object]],
) -> Processor:
    """Like :func:`process`, calling ``shutdown`` once the input ends.

    An error raised by ``p`` is logged and the trade is still passed on.
    """

    def run(trades: Iterable[TradeSignal]) -> Iterator[TradeSignal]:
        _log.info("started processor %s", name)
        try:
            for trade in trades:
                try:
                    p(trade)
                except Exception:  # one bad trade must not break the pipeline
                    _log.exception("error during processing in %s", name)
                yield trade
        finally:
            _log.info("closing processor %s", name)
            if shutdown is not None:
                shutdown()

    return run


def no_process(name: str) -> Processor:
    """A stage without any logic of its own."""
    return process(name, lambda trade: None)


def _unix(t: datetime) -> int:
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return math.floor(t.timestamp())


def _div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def deriv() -> Enrich:
    """An enrichment setting the velocity and momentum of consecutive trades.

    Velocity is the relative price change per second between the last two
    trades; momentum the same for price times volume.
    """
    window: deque[tuple[float, float, float]] = deque(maxlen=2)

    def enrich(trade: TradeSignal) -> TradeSignal:
        window.append(
            (float(_unix(trade.tick.time)), trade.tick.price, trade.tick.volume)
        )
        if len(window) == window.maxlen:
            (t0, p0, v0), (t1, p1, v1) = window
            velocity = 0.0
            momentum = 0.0
            if t1 != t0:
                dt = t1 - t0
                velocity = (_div(p1, p0) - 1) / dt
                momentum = (_div(p1 * v1, p0 * v0) - 1) / dt
            trade.tick.move = Move(velocity=velocity, momentum=momentum)
        return trade

    return enrich