"""Tracks how the predictions of a network turned out."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class Outcome(Enum):
    """How a prediction compared with what happened."""

    LOSS = "loss"
    HIT = "hit"
    FALSE_ALARM = "false_alarm"
    MISSED = "missed"
    NEUTRAL = "neutral"


@dataclass
class Performance:
    """Counts of prediction outcomes for one network."""

    num: int = 0
    total: int = 0
    outcomes: Counter = field(default_factory=Counter)

    def __str__(self) -> str:
        return (
            f"{self.total} / {self.num} | "
            f"{self.value(False):.2f} : {self.value(True):.2f}"
        )

    def value(self, lazy: bool) -> float:
        """Hits per loss; with ``lazy`` false alarms count as losses too."""
        denom = self.outcomes[Outcome.LOSS]
        if lazy:
            denom += self.outcomes[Outcome.FALSE_ALARM]
        hits = self.outcomes[Outcome.HIT]
        if denom == 0:
            return float(hits)
        return hits / denom

    def record(self, reality: float, prediction: float) -> Outcome:
        """Compare the observed value, quantized at ±0.5, with the prediction."""
        if reality > 0.5:
            actual = 1.0
        elif reality < -0.5:
            actual = -1.0
        else:
            actual = 0.0
        result = actual * prediction
        if result < 0:
            outcome = Outcome.LOSS
        elif result > 0:
            outcome = Outcome.HIT
        elif actual == 0 and prediction != 0:
            outcome = Outcome.FALSE_ALARM
        elif prediction == 0 and actual != 0:
            outcome = Outcome.MISSED
        else:
            outcome = Outcome.NEUTRAL
        self.outcomes[outcome] += 1
        if prediction != 0:
            self.total += 1
        self.num += 1
        return outcome


def has_trigger(out: Mapping[Any, list[list[float]]]) -> bool:
    """Tell whether any prediction has a non-zero first value."""
    return any(
        row and (row[0] > 0 or row[0] < 0) for rows in out.values() for row in rows
    )