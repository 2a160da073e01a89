"""Drink ledger: the in-memory drink list and its persistence."""

import itertools
import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta, tzinfo
from functools import partial
from typing import Protocol
from uuid import uuid4

from caffeine_tracker.domain.drinks import (
    DailyTotals,
    DrinkCategory,
    DrinkRecord,
    DrinkType,
)
from caffeine_tracker.services.codec import (
    DrinkDecodeError,
    decode_drinks,
    encode_drinks,
)
from caffeine_tracker.services.decay import total_remaining
from caffeine_tracker.services.health import HealthService
from caffeine_tracker.services.totals import (
    day_totals,
    start_of_day,
    totals_since,
    volume_in_window,
)

RETENTION_WINDOW = timedelta(hours=24)

_logger = logging.getLogger(__name__)

Listener = Callable[[tuple[DrinkRecord, ...]], None]


class LedgerError(Exception):
    """Base error for ledger failures."""


class DrinkStoreError(LedgerError):
    """Raised when the durable drink store cannot be read or written."""


class DrinkStoreCorruptedError(DrinkStoreError):
    """Raised when the stored drink list cannot be decoded."""


class DrinkStore(Protocol):
    """Blob store holding the serialized drink list."""

    def read(self) -> bytes | None:
        """Return the stored blob, or None when nothing was saved yet."""

    def write(self, data: bytes) -> None:
        """Atomically replace the stored blob."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DrinkLedger:
    """Owns the drinks consumed within the retention window.

    Reads and mutations run on the caller's thread. Loading and saving are
    queued on a single background worker so they run in submission order;
    health-store writes use a separate worker and never delay saving.
    """

    store: DrinkStore
    health: HealthService | None = None
    clock: Callable[[], datetime] = _utc_now
    tz: tzinfo | None = None
    _records: tuple[DrinkRecord, ...] = field(default=(), init=False)
    _last_persisted: tuple[DrinkRecord, ...] = field(default=(), init=False)
    _listeners: dict[int, Listener] = field(default_factory=dict, init=False)
    _tokens: Iterator[int] = field(
        default_factory=lambda: itertools.count(1), init=False
    )
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False)
    _generation: int = field(default=0, init=False)
    _reset_generation: int = field(default=0, init=False)
    _superseded_before: int = field(default=0, init=False)
    _persistence: ThreadPoolExecutor = field(init=False)
    _health_worker: ThreadPoolExecutor = field(init=False)

    def __post_init__(self) -> None:
        self._persistence = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="ledger-persistence"
        )
        self._health_worker = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="ledger-health"
        )

    @property
    def records(self) -> tuple[DrinkRecord, ...]:
        """Return the current drinks in insertion order."""
        with self._lock:
            return self._records

    def subscribe(self, listener: Listener) -> int:
        """Register a listener called with the drinks after every change.

        Listeners run on the thread that made the change: the caller's thread
        for appends and resets, the persistence worker for loads.
        """
        with self._lock:
            token = next(self._tokens)
            self._listeners[token] = listener
        return token

    def unsubscribe(self, token: int) -> None:
        """Remove a previously registered listener."""
        with self._lock:
            self._listeners.pop(token, None)

    def append(
        self,
        caffeine_mg: float,
        category: DrinkCategory,
        volume_oz: float,
        timestamp: datetime,
    ) -> DrinkRecord:
        """Add a drink, evict stale ones and schedule a save."""
        if timestamp.tzinfo is None:
            timestamp = timestamp.astimezone()
        record = DrinkRecord(
            id=uuid4(),
            caffeine_mg=float(caffeine_mg),
            category=DrinkCategory(category),
            volume_oz=float(volume_oz),
            timestamp=timestamp,
        )
        with self._lock:
            self._records = _within_window((*self._records, record), self.clock())
            self._generation += 1
            records = self._records
        _logger.debug("Drink added: category=%s mg=%s", record.category, caffeine_mg)

        self._notify(records)
        self.save()
        if self.health is not None:
            future = self._health_worker.submit(self.health.record_drink, record)
            future.add_done_callback(partial(_log_health_failure, record))
        return record

    def append_drink(
        self, drink_type: DrinkType, timestamp: datetime | None = None
    ) -> DrinkRecord:
        """Add one standard serving of a catalog drink."""
        return self.append(
            caffeine_mg=drink_type.caffeine_mg,
            category=drink_type.category,
            volume_oz=drink_type.volume_oz,
            timestamp=timestamp or self.clock(),
        )

    def load(self) -> "Future[None]":
        """Replace the drinks with the stored list on the background worker.

        Drinks appended while the load is pending are merged with the stored
        ones by id, unless the ledger was reset in the meantime.
        """
        with self._lock:
            generation = self._generation
        return self._submit(self._load_from_store, generation, action="load")

    def save(self) -> "Future[None]":
        """Write the drinks to the store if they changed since the last save."""
        with self._lock:
            snapshot = self._records
            generation = self._generation
        return self._submit(
            self._write_snapshot, snapshot, generation, action="save"
        )

    def reset(self) -> "Future[None]":
        """Discard all drinks and overwrite the stored list."""
        with self._lock:
            self._records = ()
            self._generation += 1
            self._reset_generation = generation = self._generation
        self._notify(())
        return self._submit(
            self._write_snapshot, (), generation, True, action="reset"
        )

    def flush(self) -> None:
        """Block until queued persistence and health work has finished."""
        self._persistence.submit(lambda: None).result()
        self._health_worker.submit(lambda: None).result()

    def close(self) -> None:
        """Finish pending work and stop the background workers."""
        self._persistence.shutdown(wait=True)
        self._health_worker.shutdown(wait=True)

    def caffeine_at(self, at: datetime) -> float:
        """Return the caffeine level in milligrams at a given time."""
        return total_remaining(self.records, at)

    def current_caffeine(self) -> float:
        """Return the caffeine level right now."""
        return self.caffeine_at(self.clock())

    def today_totals(self) -> DailyTotals:
        """Return totals for drinks since local midnight."""
        now = self.clock()
        return totals_since(self.records, start=start_of_day(now, self.tz))

    def totals_for_day(self, at: datetime) -> DailyTotals:
        """Return totals from local midnight of ``at`` up to ``at``."""
        return day_totals(self.records, at, self.tz)

    def volume_in_window(self, at: datetime) -> float:
        """Return fluid ounces drunk during the 24 hours up to ``at``."""
        return volume_in_window(self.records, at)

    def _submit(
        self, fn: Callable[..., None], *args: object, action: str
    ) -> "Future[None]":
        future = self._persistence.submit(fn, *args)
        future.add_done_callback(partial(_log_persistence_failure, action))
        return future

    def _load_from_store(self, generation: int) -> None:
        data = self.store.read()
        if not data:
            _logger.debug("No stored drinks found; starting with an empty list")
            drinks: list[DrinkRecord] = []
        else:
            try:
                drinks = decode_drinks(data)
            except DrinkDecodeError as exc:
                raise DrinkStoreCorruptedError("Stored drink list is corrupt") from exc

        stored = tuple(drinks)
        with self._lock:
            changed = self._generation != generation
            if self._reset_generation > generation:
                merged = self._records
            elif changed:
                merged = _merge(stored, self._records)
            else:
                merged = stored
            self._generation += 1
            self._superseded_before = self._generation
            self._last_persisted = stored
            self._records = _within_window(merged, self.clock())
            records = self._records
            loaded_generation = self._generation
        _logger.info("Loaded %s drinks (%s retained)", len(stored), len(records))
        self._notify(records)
        if changed:
            # Saves queued before this load hold snapshots without the stored
            # drinks; they are skipped and the merged list is written here.
            self._write_snapshot(records, loaded_generation)

    def _write_snapshot(
        self,
        snapshot: tuple[DrinkRecord, ...],
        generation: int,
        force: bool = False,
    ) -> None:
        if generation < self._superseded_before:
            _logger.debug("Drink snapshot superseded by a load; skipping save")
            return
        if not force and snapshot == self._last_persisted:
            _logger.debug("Drink list unchanged; skipping save")
            return
        self.store.write(encode_drinks(snapshot))
        self._last_persisted = snapshot
        _logger.debug("Saved %s drinks", len(snapshot))

    def _notify(self, records: tuple[DrinkRecord, ...]) -> None:
        with self._lock:
            listeners = list(self._listeners.values())
        for listener in listeners:
            try:
                listener(records)
            except Exception:
                _logger.exception("Ledger listener failed")


def _merge(
    stored: Iterable[DrinkRecord], current: Iterable[DrinkRecord]
) -> tuple[DrinkRecord, ...]:
    merged = {record.id: record for record in stored}
    for record in current:
        merged.setdefault(record.id, record)
    return tuple(merged.values())


def _within_window(
    records: Iterable[DrinkRecord], now: datetime
) -> tuple[DrinkRecord, ...]:
    start = now - RETENTION_WINDOW
    return tuple(r for r in records if start <= r.timestamp <= now)


def _log_persistence_failure(action: str, future: "Future[None]") -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        _logger.error("Drink %s failed: %s", action, exc, exc_info=exc)


def _log_health_failure(record: DrinkRecord, future: "Future[object]") -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        _logger.warning("Health sample for drink %s not written: %s", record.id, exc)
