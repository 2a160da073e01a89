"""Domain models for complication timelines."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from caffeine_tracker.domain.thresholds import Severity


@dataclass(frozen=True)
class TimelineSnapshot:
    """Values shown on a watch face at a point in time."""

    at: datetime
    caffeine_mg: float
    caffeine_severity: Severity
    cups: float
    cups_severity: Severity
    volume_oz: float
    volume_severity: Severity


class ComplicationKind(StrEnum):
    """Watch-face complications offered by the app."""

    CAFFEINE = "caffeine"
    CUPS = "cups"
    BOTH = "both"
    OUNCES = "ounces"


@dataclass(frozen=True)
class ComplicationValue:
    """One formatted value shown by a complication."""

    unit: str
    text: str
    color: str


@dataclass(frozen=True)
class ComplicationEntry:
    """Content of a complication at a point in time."""

    at: datetime
    kind: ComplicationKind
    values: tuple[ComplicationValue, ...]
