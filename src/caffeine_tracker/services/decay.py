"""Caffeine decay model."""

from collections.abc import Iterable
from datetime import datetime, timedelta

from caffeine_tracker.domain.drinks import DrinkRecord

HALF_LIFE = timedelta(hours=5)


def remaining(record: DrinkRecord, at: datetime) -> float:
    """Return the caffeine from a drink still in the body at a given time.

    Times before the drink yield more than the original dose; callers are
    expected to query at or after the drink's timestamp.
    """
    intervals = (at - record.timestamp) / HALF_LIFE
    return record.caffeine_mg * 0.5**intervals


def total_remaining(records: Iterable[DrinkRecord], at: datetime) -> float:
    """Return the summed remaining caffeine across drinks."""
    return sum((remaining(record, at) for record in records), 0.0)
