"""Configuration of the analysis segments, models and signals."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable

from coinflow.ml.model.vector import ALL_COINS, Key, Type

OPEN_MARK = "🟢"
CLOSED_MARK = "🔴"

_EVOLVE_PERC = 0.05


def _round_half_away(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _format_ints(values: list[int]) -> str:
    return "[" + " ".join(str(v) for v in values) + "]"


@dataclass(frozen=True)
class Detail:
    """Distinguishes one network from another."""

    type: str = ""
    hash: str = ""
    index: int = 0

    def to_string(self) -> str:
        return f"{self.type}_{self.hash}"


@dataclass
class Model:
    """Settings of one machine learning model."""

    detail: Detail = field(default_factory=Detail)
    buffer_size: int = 0
    threshold: float = 0.0
    spread: float = 0.0
    size: list[int] = field(default_factory=list)
    features: list[int] = field(default_factory=list)
    max_epochs: int = 0
    learning_rate: float = 0.0
    multi: bool = False

    def format(self) -> str:
        return (
            f"({self.detail.type}:{self.detail.hash})"
            f"[buffer:{self.buffer_size}"
            f"|threshold:{self.threshold:.2f}"
            f"|spread:{self.spread:.2f}.f"
            f"|size:{_format_ints(self.size)}"
            f"|features:{_format_ints(self.features)}]"
        )

    def to_slice(self) -> list[list[float]]:
        """The numeric parameters, in the order that new_config reads them."""
        return [
            [float(self.buffer_size)],
            [self.threshold],
            [float(v) for v in self.size],
            [float(v) for v in self.features],
            [float(self.max_epochs)],
            [self.learning_rate],
        ]


def new_config(*args: list[float]) -> Model:
    """Build a model config from numeric parameter lists."""
    return Model(
        buffer_size=int(args[0][0]),
        threshold=args[1][0],
        size=[int(v) for v in args[2]],
        features=[int(v) for v in args[3]],
        max_epochs=int(args[4][0]),
        learning_rate=args[5][0],
    )


@dataclass
class Performance:
    """A set of numeric parameters and the score it reached."""

    config: list[list[float]] = field(default_factory=list)
    score: float = 0.0


def evolve_as_int(i: int, r: float) -> int:
    """Move an int up or down by a fixed fraction; r=0 picks at random."""
    if r == 0.0:
        r = random.random()
    step = int(i * _EVOLVE_PERC)
    return i + step if r > 0.5 else i - step


def evolve_float(f: float, r: float, limit: float) -> float:
    """Move a float up or down by a fixed fraction, capped at ``limit``.

    ``r`` biases the move: above 0.5 up, otherwise down; 0 picks at random.
    """
    step = f * _EVOLVE_PERC
    if r == 0.0:
        r = random.random()
    f = f + step if r > 0.5 else f - step
    res = _round_half_away(1000 * f) / 1000
    return limit if res > limit else res


@dataclass
class Option:
    """Running options of the algorithm."""

    trace: dict[str, bool] = field(default_factory=dict)
    log: bool = False
    debug: bool = False
    benchmark: bool = False


@dataclass
class Buffer:
    """A grouping interval."""

    interval: timedelta = timedelta(0)
    history: bool = False


@dataclass
class Position:
    """Settings for tracking and closing positions."""

    open_value: float = 0.0
    stop_loss: float = 0.0
    take_profit: float = 0.0
    tracking_config: list[Any] = field(default_factory=list)


@dataclass
class Stats:
    """How many segments to look back and ahead, and the movement gap."""

    look_back: int = 0
    look_ahead: int = 0
    gap: float = 0.0
    live: bool = False
    model: list[Model] = field(default_factory=list)

    def format(self) -> str:
        return f"[{self.look_back}:{self.look_ahead}] {self.gap:.2f}"


@dataclass
class Trader:
    """Trading settings for the signals of a segment."""

    buffer_time: float = 0.0
    price_threshold: float = 0.0
    weight: int = 0
    live: bool = False

    def format(self) -> str:
        return OPEN_MARK if self.live else CLOSED_MARK


@dataclass
class Segments:
    """Statistics and trading settings of one segment."""

    stats: Stats = field(default_factory=Stats)
    trader: Trader = field(default_factory=Trader)


SegmentConfig = dict[Key, Segments]
ConfigSegment = Callable[[str], Callable[[SegmentConfig], SegmentConfig]]


def add_config(
    cfg: SegmentConfig, *args: Callable[[SegmentConfig], SegmentConfig]
) -> SegmentConfig:
    """Apply each function to the segment config in turn."""
    for fn in args:
        cfg = fn(cfg)
    return cfg


@dataclass
class Config:
    """The full configuration of the analysis and trading."""

    segments: SegmentConfig = field(default_factory=dict)
    position: Position = field(default_factory=Position)
    option: Option = field(default_factory=Option)
    buffer: Buffer = field(default_factory=Buffer)
    segment: Buffer = field(default_factory=Buffer)

    def set_gap(self, coin: str, gap: float) -> Config:
        """Set the gap for the coin's segments, or all of them."""
        new_segments: SegmentConfig = {}
        for k, segment in self.segments.items():
            if coin == ALL_COINS or coin == k.coin:
                segment = dataclasses.replace(
                    segment, stats=dataclasses.replace(segment.stats, gap=gap)
                )
            new_segments[k] = segment
        self.segments = new_segments
        return self

    def set_precision_threshold(
        self, coin: str, network: str, precision: float
    ) -> Config:
        """Set the threshold of the named network type, or of "all".

        Models of the coin that do not match are reset to an empty model.
        """
        new_segments: SegmentConfig = {}
        for k, segment in self.segments.items():
            if coin == ALL_COINS or coin == k.coin:
                models = [
                    dataclasses.replace(m, threshold=precision)
                    if m.detail.type == network or network == "all"
                    else Model()
                    for m in segment.stats.model
                ]
                segment = dataclasses.replace(
                    segment, stats=dataclasses.replace(segment.stats, model=models)
                )
            new_segments[k] = segment
        self.segments = new_segments
        return self

    def get_segments(self, coin: str, duration: timedelta) -> SegmentConfig:
        """The segments for the given coin and interval."""
        return {
            k: s
            for k, s in self.segments.items()
            if k.coin == coin and k.duration == duration
        }


@dataclass
class Signal:
    """A signal produced by the analysis."""

    key: Key = field(default_factory=Key)
    detail: Detail = field(default_factory=Detail)
    time: datetime = datetime.min
    price: float = 0.0
    type: Type = Type.NONE
    precision: float = 0.0
    gap: float = 0.0
    trend: float = 0.0
    factor: float = 0.0
    weight: int = 0
    live: bool = False
    buffer: list[float] = field(default_factory=list)
    spectrum: Any = None

    def to_string(self) -> str:
        return f"{self.key.to_string()} | {self.time} : {self.price:f} - {self.type}"

    def __str__(self) -> str:
        return self.to_string()

    def filter(self, threshold: int) -> bool:
        """Tell whether the factor reaches 10 to the minus threshold."""
        return self.factor * math.pow(10, threshold) >= 1.0


def network_type(n: str) -> Detail:
    """A detail carrying only the network type."""
    return Detail(type=n)