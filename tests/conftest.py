"""Shared test fixtures."""

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from caffeine_tracker.config import Settings
from caffeine_tracker.domain.health import HealthSample, HealthSampleKind
from caffeine_tracker.services.health import (
    HealthService,
    HealthStore,
    HealthStoreError,
)
from caffeine_tracker.services.ledger import DrinkLedger, DrinkStore, DrinkStoreError

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Clock returning a controllable time."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@dataclass
class InMemoryDrinkStore(DrinkStore):
    """In-memory blob store that records every write."""

    data: bytes | None = None
    writes: list[bytes] = field(default_factory=list)

    def read(self) -> bytes | None:
        return self.data

    def write(self, data: bytes) -> None:
        self.writes.append(data)
        self.data = data


@dataclass
class BlockingDrinkStore(InMemoryDrinkStore):
    """In-memory blob store whose reads wait until released."""

    release: threading.Event = field(default_factory=threading.Event)

    def read(self) -> bytes | None:
        self.release.wait(timeout=5)
        return self.data


@dataclass
class FailingDrinkStore(DrinkStore):
    """Blob store whose writes always fail."""

    data: bytes | None = None
    attempts: int = 0

    def read(self) -> bytes | None:
        return self.data

    def write(self, data: bytes) -> None:
        self.attempts += 1
        raise DrinkStoreError("disk full")


@dataclass
class InMemoryHealthStore(HealthStore):
    """In-memory health store; a sample's cursor is its 1-based position."""

    samples: list[HealthSample] = field(default_factory=list)
    available: bool = True

    def write_sample(self, sample: HealthSample) -> None:
        if not self.available:
            raise HealthStoreError("health store unavailable")
        self.samples.append(sample)

    def read_samples_since(
        self, kind: HealthSampleKind, cursor: int | None
    ) -> tuple[list[HealthSample], int | None]:
        if not self.available:
            raise HealthStoreError("health store unavailable")
        start = cursor or 0
        matches = [sample for sample in self.samples[start:] if sample.kind is kind]
        next_cursor = len(self.samples) if len(self.samples) > start else cursor
        return matches, next_cursor


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def drink_store() -> InMemoryDrinkStore:
    return InMemoryDrinkStore()


@pytest.fixture
def health_store() -> InMemoryHealthStore:
    return InMemoryHealthStore()


@pytest.fixture
def ledger(
    drink_store: InMemoryDrinkStore, clock: FakeClock
) -> Iterator[DrinkLedger]:
    ledger = DrinkLedger(store=drink_store, clock=clock, tz=UTC)
    yield ledger
    ledger.close()


@pytest.fixture
def health_ledger(
    drink_store: InMemoryDrinkStore,
    health_store: InMemoryHealthStore,
    clock: FakeClock,
) -> Iterator[DrinkLedger]:
    ledger = DrinkLedger(
        store=drink_store,
        health=HealthService(health_store),
        clock=clock,
        tz=UTC,
    )
    yield ledger
    ledger.close()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_path=tmp_path / "drinks.json", timezone="UTC")
