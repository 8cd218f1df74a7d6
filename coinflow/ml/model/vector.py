"""Market data records and the input/output vectors fed to the networks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum

NO_COIN = ""
ALL_COINS = "ALL"

BTC = "BTC"
ETH = "ETH"
DOT = "DOT"
LINK = "LINK"
SOL = "SOL"
MATIC = "MATIC"
AAVE = "AAVE"
XRP = "XRP"
KAVA = "KAVA"


class Type(IntEnum):
    """The direction of a trade or signal."""

    NONE = 0
    BUY = 1
    SELL = 2

    def inverse(self) -> Type:
        """Return the opposite direction; no direction stays as it is."""
        if self is Type.BUY:
            return Type.SELL
        if self is Type.SELL:
            return Type.BUY
        return Type.NONE

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Key:
    """Identifies an analysis segment: a coin, an interval and a strategy."""

    coin: str = NO_COIN
    duration: timedelta = timedelta(0)
    strategy: str = ""
    network: str = ""

    def match(self, coin: str) -> bool:
        """Tell whether this key belongs to the given coin."""
        return self.coin == coin

    def to_string(self) -> str:
        minutes = int(self.duration.total_seconds() // 60)
        return f"{self.coin}_{minutes}_{self.strategy}"

    def hash(self) -> str:
        """A string identifying the key, network included."""
        return f"{self.to_string()}_{self.network}"


@dataclass
class Level:
    """A price and volume pair."""

    price: float = 0.0
    volume: float = 0.0


@dataclass
class Depth:
    """A count of events and their total volume."""

    count: float = 0.0
    volume: float = 0.0


@dataclass
class StatsData:
    """Aggregated statistics of a tick."""

    std: Level = field(default_factory=Level)
    trend: Level = field(default_factory=Level)
    buy: Depth = field(default_factory=Depth)
    sell: Depth = field(default_factory=Depth)


@dataclass
class Move:
    """Rate of change of price and of price times volume."""

    velocity: float = 0.0
    momentum: float = 0.0


@dataclass
class Tick:
    """A market observation."""

    level: Level = field(default_factory=Level)
    time: datetime = datetime.min
    active: bool = False
    type: Type = Type.NONE
    stats: StatsData = field(default_factory=StatsData)
    move: Move = field(default_factory=Move)

    @property
    def price(self) -> float:
        return self.level.price

    @property
    def volume(self) -> float:
        return self.level.volume


@dataclass
class TradeMeta:
    """Bookkeeping data of a trade signal."""

    first: datetime = datetime.min
    time: datetime = datetime.min
    init: datetime = datetime.min
    live: bool = False
    size: int = 0


@dataclass
class TradeSignal:
    """A tick for a coin together with its metadata."""

    coin: str = NO_COIN
    tick: Tick = field(default_factory=Tick)
    meta: TradeMeta = field(default_factory=TradeMeta)


@dataclass
class Meta:
    """The segment and tick a vector was built from."""

    key: Key = field(default_factory=Key)
    tick: Tick = field(default_factory=Tick)
    active: bool = False


@dataclass
class Vector:
    """Previous inputs and outputs joined with the newest input."""

    meta: Meta = field(default_factory=Meta)
    prev_in: list[float] = field(default_factory=list)
    prev_out: list[float] = field(default_factory=list)
    new_in: list[float] = field(default_factory=list)

    def __str__(self) -> str:
        def row(values: list[float]) -> str:
            return "".join(f"{v:f}," for v in values)

        return (
            f"{self.meta!r}"
            f"\npreI:{row(self.prev_in)}"
            f"\npreO:{row(self.prev_out)}"
            f"\nnewI:{row(self.new_in)}"
        )