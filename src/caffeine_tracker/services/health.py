"""Health-store synchronization service."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from caffeine_tracker.domain.drinks import DrinkRecord
from caffeine_tracker.domain.health import HealthSample, HealthSampleKind

_logger = logging.getLogger(__name__)


class HealthStoreError(RuntimeError):
    """Raised when the health store rejects a request or is unavailable."""


class HealthStore(Protocol):
    """Interface for a store of timestamped health samples."""

    def write_sample(self, sample: HealthSample) -> None:
        """Persist a single sample."""

    def read_samples_since(
        self, kind: HealthSampleKind, cursor: int | None
    ) -> tuple[list[HealthSample], int | None]:
        """Return samples newer than the cursor and the cursor to use next."""


@dataclass
class HealthService:
    """Writes drink samples and reads new samples incrementally."""

    store: HealthStore
    _cursors: dict[HealthSampleKind, int | None] = field(
        default_factory=dict, init=False
    )

    def record_drink(self, record: DrinkRecord) -> HealthSample:
        """Write the health sample that corresponds to a drink."""
        sample = sample_for_drink(record)
        try:
            self.store.write_sample(sample)
        except HealthStoreError:
            raise
        except Exception as exc:
            raise HealthStoreError(f"Failed to write {sample.kind} sample") from exc
        _logger.debug(
            "Health sample written: kind=%s value=%s", sample.kind, sample.value
        )
        return sample

    def fetch_new_samples(self, kind: HealthSampleKind) -> list[HealthSample]:
        """Return samples added since the previous fetch for this kind."""
        cursor = self._cursors.get(kind)
        try:
            samples, next_cursor = self.store.read_samples_since(kind, cursor)
        except HealthStoreError:
            raise
        except Exception as exc:
            raise HealthStoreError(f"Failed to read {kind} samples") from exc
        self._cursors[kind] = next_cursor
        _logger.debug(
            "Health samples fetched: kind=%s count=%s cursor=%s",
            kind,
            len(samples),
            next_cursor,
        )
        return samples

    def cursor(self, kind: HealthSampleKind) -> int | None:
        """Return the last cursor seen for a sample kind."""
        return self._cursors.get(kind)


def sample_for_drink(record: DrinkRecord) -> HealthSample:
    """Build the health sample recorded for a drink."""
    kind = HealthSampleKind.for_category(record.category)
    if kind is HealthSampleKind.WATER_OZ:
        value = record.volume_oz
    elif kind is HealthSampleKind.ALCOHOL_COUNT:
        value = 1.0
    else:
        value = record.caffeine_mg
    return HealthSample(
        kind=kind,
        value=value,
        recorded_at=record.timestamp,
        drink_id=record.id,
    )
