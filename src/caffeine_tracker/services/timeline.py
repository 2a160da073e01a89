"""Timeline sampling for watch-face complications."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from caffeine_tracker.domain.drinks import DrinkRecord
from caffeine_tracker.domain.timeline import TimelineSnapshot
from caffeine_tracker.services.decay import total_remaining
from caffeine_tracker.services.ledger import DrinkLedger
from caffeine_tracker.services.thresholds import (
    classify_caffeine_dose,
    classify_cups,
    classify_volume,
)
from caffeine_tracker.services.totals import day_totals, volume_in_window

DEFAULT_STRIDE = timedelta(minutes=5)
DEFAULT_SPAN = timedelta(hours=24)


@dataclass(frozen=True)
class Timeline:
    """Finite, restartable sequence of ``(timestamp, snapshot)`` pairs.

    Snapshots are computed from the drinks captured when the timeline was
    created, so iterating twice yields the same entries.
    """

    records: tuple[DrinkRecord, ...]
    start: datetime
    end: datetime
    stride: timedelta
    limit: int
    tz: tzinfo | None = None

    def __iter__(self) -> Iterator[tuple[datetime, TimelineSnapshot]]:
        produced = 0
        current = self.start + self.stride
        while current < self.end and produced < self.limit:
            yield current, snapshot_at(self.records, current, self.tz)
            produced += 1
            current += self.stride


def sample(
    ledger: DrinkLedger,
    start: datetime,
    end: datetime | None = None,
    stride: timedelta = DEFAULT_STRIDE,
    limit: int = 1000,
) -> Timeline:
    """Return timeline entries after ``start`` and before ``end``.

    ``end`` defaults to 24 hours after ``start``.
    """
    if stride <= timedelta(0):
        raise ValueError("stride must be positive")
    return Timeline(
        records=ledger.records,
        start=start,
        end=end if end is not None else start + DEFAULT_SPAN,
        stride=stride,
        limit=max(limit, 0),
        tz=ledger.tz,
    )


def snapshot_at(
    records: tuple[DrinkRecord, ...], at: datetime, tz: tzinfo | None = None
) -> TimelineSnapshot:
    """Compute the values shown on a watch face at ``at``."""
    caffeine_mg = total_remaining(records, at)
    cups = day_totals(records, at, tz).cups
    volume_oz = volume_in_window(records, at)
    return TimelineSnapshot(
        at=at,
        caffeine_mg=caffeine_mg,
        caffeine_severity=classify_caffeine_dose(caffeine_mg),
        cups=cups,
        cups_severity=classify_cups(cups),
        volume_oz=volume_oz,
        volume_severity=classify_volume(volume_oz),
    )
