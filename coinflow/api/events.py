"""Signals between processes and stop conditions for trade streams."""

from __future__ import annotations

import dataclasses
import queue
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

Condition = Callable[[Any, int], bool]


@dataclass
class Signal:
    """A named event that triggers an action in another process."""

    name: str
    id: str = ""
    coin: str = ""
    content: Any = None
    time: datetime = field(default_factory=datetime.now)

    def create(self) -> Signal:
        """Return an independent copy of the signal."""
        return dataclasses.replace(self)

    def for_coin(self, coin: str) -> Signal:
        self.coin = coin
        return self

    def with_id(self, id: str) -> Signal:
        self.id = id
        return self

    def with_content(self, content: Any) -> Signal:
        self.content = content
        return self


@dataclass
class Block:
    """A pair of queues letting two processes synchronise."""

    action: queue.Queue = field(default_factory=queue.Queue)
    reaction: queue.Queue = field(default_factory=queue.Queue)


def new_signal(name: str) -> Signal:
    """Create a signal with a fresh id and the current time."""
    return Signal(name=name, id=str(uuid.uuid4()))


def counter(limit: int) -> Condition:
    """Stop once the given number of trades has been consumed."""

    def condition(trade: Any, number_of_trades: int) -> bool:
        return number_of_trades > 0 and number_of_trades >= limit

    return condition


def until(time: datetime) -> Condition:
    """Stop at the first trade later than the given time."""

    def condition(trade: Any, number_of_trades: int) -> bool:
        return trade.meta.time > time

    return condition


def non_stop(trade: Any, number_of_trades: int) -> bool:
    """Never stop: a count of consumed trades is never negative."""
    return number_of_trades < 0