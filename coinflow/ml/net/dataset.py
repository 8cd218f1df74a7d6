"""Training windows of input/output tensors and helpers on them."""

from __future__ import annotations

from dataclasses import dataclass, field

from coinflow.ml.model.vector import Key, Vector

DOT_FIRE = "🔴"
DOT_WATER = "🔵"
DOT_SNOW = "⚪"

_EMOJI_VALUES = {DOT_SNOW: 0.0, DOT_FIRE: 1.0, DOT_WATER: -1.0}


@dataclass
class DataSet:
    """A sliding window of input and output tensors."""

    in_size: int
    out_size: int
    key: Key = field(default_factory=Key)
    inputs: list[list[float]] = field(default_factory=list)
    outputs: list[list[float]] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.in_size}->{self.out_size}\nin :{self.inputs}\nout:{self.outputs}\n"

    def push(self, key: Key, vector: Vector) -> tuple[list[list[float]], bool]:
        """Add a vector; return the inputs with the newest one appended and
        whether both windows are full."""
        if self.key.coin and key.hash() != self.key.hash():
            raise ValueError(f"wrong key ({key}) for tensor ({self.key})")

        filled = False
        self.inputs.append(vector.prev_in)
        if len(self.inputs) > self.in_size:
            self.inputs.pop(0)
            filled = True

        self.outputs.append(vector.prev_out)
        if len(self.outputs) > self.out_size:
            self.outputs.pop(0)
        else:
            filled = False

        return [*self.inputs, vector.new_in], filled


def to_series(
    index: int, x: list[list[float]], y: list[list[float]] | None
) -> list[float]:
    """The column at ``index`` of x, followed by that of y's last row."""
    series = [row[index] for row in x]
    if y is not None:
        series.append(y[-1][index])
    return series


def last_at(index: int, y: list[list[float]]) -> float:
    return y[-1][index]


def last(y: list[list[float]]) -> list[float]:
    return y[-1]


def strip(
    inp: list[list[float]], out: list[list[float]]
) -> tuple[list[list[float]], list[list[float]]]:
    """Trim both to the length of the shorter, keeping the newest rows."""
    n = min(len(inp), len(out))
    return inp[len(inp) - n:], out[len(out) - n:]


def to_emoji(v: float, spread: float) -> str:
    if v > spread:
        return DOT_FIRE
    if v < -spread:
        return DOT_WATER
    return DOT_SNOW


def from_emoji(s: str) -> float:
    return _EMOJI_VALUES.get(s, 0.0)


def to_emojis(v: list[float], spread: float) -> list[str]:
    return [to_emoji(x, spread) for x in v]


def from_emojis(s: list[str]) -> list[float]:
    return [from_emoji(x) for x in s]


def same_or_nothing(v: list[float]) -> float:
    """The common value of all elements, or 0 if they differ."""
    value = v[0]
    return value if all(x == value for x in v) else 0.0


def converge(v: list[float]) -> list[list[float]]:
    """A single-cell tensor with the common value, or 0 if they differ."""
    return [[same_or_nothing(v)]]


def quantify(y: float, gap: float) -> float:
    """Map a value to 1, -1 or 0 depending on whether it leaves the gap."""
    if y > gap:
        return 1.0
    if y < -gap:
        return -1.0
    return 0.0


def quantify_all(v: list[float], gap: float) -> list[float]:
    return [quantify(x, gap) for x in v]