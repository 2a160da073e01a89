"""Domain models for severity classification."""

from dataclasses import dataclass
from enum import StrEnum


class Severity(StrEnum):
    """Severity bucket used to colour a value."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def color(self) -> str:
        """Display colour for the bucket."""
        return _COLORS[self]


_COLORS = {
    Severity.LOW: "green",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "red",
}


@dataclass(frozen=True)
class Thresholds:
    """Lower and upper bounds for a classification."""

    low: float
    high: float
    inverted: bool = False


CAFFEINE_DOSE = Thresholds(low=200.0, high=400.0)
DAILY_CUPS = Thresholds(low=3.0, high=5.0)
# More liquid is better, so the buckets run the other way.
DAILY_VOLUME = Thresholds(low=20.0, high=50.0, inverted=True)
