"""Consumption totals over calendar days and rolling windows."""

from collections.abc import Iterable
from datetime import datetime, timedelta, tzinfo

from caffeine_tracker.domain.drinks import DailyTotals, DrinkRecord

ROLLING_WINDOW = timedelta(hours=24)


def start_of_day(at: datetime, tz: tzinfo | None = None) -> datetime:
    """Return local midnight for the day containing ``at``.

    ``tz=None`` uses the system's local timezone.
    """
    local = at.astimezone(tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def totals_since(
    records: Iterable[DrinkRecord], start: datetime, end: datetime | None = None
) -> DailyTotals:
    """Aggregate drinks with ``start <= timestamp`` (and ``<= end`` if given)."""
    count = 0
    caffeine_mg = 0.0
    volume_oz = 0.0
    for record in records:
        if record.timestamp < start:
            continue
        if end is not None and record.timestamp > end:
            continue
        count += 1
        caffeine_mg += record.caffeine_mg
        volume_oz += record.volume_oz
    return DailyTotals(count=count, caffeine_mg=caffeine_mg, volume_oz=volume_oz)


def day_totals(
    records: Iterable[DrinkRecord], at: datetime, tz: tzinfo | None = None
) -> DailyTotals:
    """Aggregate drinks from local midnight of ``at`` up to ``at``."""
    return totals_since(records, start=start_of_day(at, tz), end=at)


def volume_in_window(records: Iterable[DrinkRecord], at: datetime) -> float:
    """Return fluid ounces drunk during the 24 hours up to ``at``."""
    start = at - ROLLING_WINDOW
    return sum((r.volume_oz for r in records if start < r.timestamp <= at), 0.0)
