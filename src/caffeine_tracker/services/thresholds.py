"""Threshold classification for display colours."""

from caffeine_tracker.domain.thresholds import (
    CAFFEINE_DOSE,
    DAILY_CUPS,
    DAILY_VOLUME,
    Severity,
    Thresholds,
)


def classify(
    value: float,
    thresholds: Thresholds | tuple[float, float],
    inverted: bool | None = None,
) -> Severity:
    """Map a value to a severity bucket.

    ``inverted`` overrides the polarity stored on a ``Thresholds`` instance.
    """
    if isinstance(thresholds, Thresholds):
        low, high = thresholds.low, thresholds.high
        flip = thresholds.inverted if inverted is None else inverted
    else:
        low, high = thresholds
        flip = bool(inverted)

    if value < low:
        return Severity.HIGH if flip else Severity.LOW
    if value < high:
        return Severity.MEDIUM
    return Severity.LOW if flip else Severity.HIGH


def classify_caffeine_dose(mg: float) -> Severity:
    """Classify a caffeine level in milligrams."""
    return classify(mg, CAFFEINE_DOSE)


def classify_cups(cups: float) -> Severity:
    """Classify the daily number of cup-equivalents."""
    return classify(cups, DAILY_CUPS)


def classify_volume(oz: float) -> Severity:
    """Classify daily fluid volume; low intake is the severe case."""
    return classify(oz, DAILY_VOLUME)
