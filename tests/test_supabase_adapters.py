"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from uuid import uuid4

from caffeine_tracker.adapters.supabase_health_store import SupabaseHealthStore
from caffeine_tracker.domain.health import HealthSample, HealthSampleKind
from tests.conftest import NOW


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        self.last_filters = []
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gt", column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_write_sample_inserts_row() -> None:
    client = FakeSupabaseClient()
    drink_id = uuid4()
    store = SupabaseHealthStore(client)

    store.write_sample(
        HealthSample(HealthSampleKind.WATER_OZ, 8.0, NOW, drink_id=drink_id)
    )

    assert client.table("health_samples").last_payload == {
        "kind": "water_oz",
        "value": 8.0,
        "unit": "fl_oz",
        "recorded_at": NOW.isoformat(),
        "drink_id": str(drink_id),
    }


def test_write_sample_uses_configured_table() -> None:
    client = FakeSupabaseClient()
    store = SupabaseHealthStore(client, table="samples_dev")

    store.write_sample(HealthSample(HealthSampleKind.ALCOHOL_COUNT, 1.0, NOW))

    payload = client.table("samples_dev").last_payload
    assert isinstance(payload, dict)
    assert payload["drink_id"] is None


def test_read_samples_since_returns_rows_and_cursor() -> None:
    client = FakeSupabaseClient()
    table = client.table("health_samples")
    drink_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": 7,
                "kind": "caffeine_mg",
                "value": 96,
                "recorded_at": "2026-10-18T12:00:00+00:00",
                "drink_id": str(drink_id),
            },
            {
                "id": 9,
                "kind": "caffeine_mg",
                "value": 47.0,
                "recorded_at": "2026-10-18T13:00:00+00:00",
                "drink_id": None,
            },
        ],
    )
    store = SupabaseHealthStore(client)

    samples, cursor = store.read_samples_since(HealthSampleKind.CAFFEINE_MG, 5)

    assert cursor == 9
    assert [s.value for s in samples] == [96.0, 47.0]
    assert samples[0].recorded_at == NOW
    assert samples[0].drink_id == drink_id
    assert samples[1].drink_id is None
    assert table.last_filters == [("eq", "kind", "caffeine_mg"), ("gt", "id", 5)]
    assert table.last_order == ("id", False)


def test_read_samples_without_cursor_reads_everything() -> None:
    client = FakeSupabaseClient()
    table = client.table("health_samples")
    store = SupabaseHealthStore(client)

    samples, cursor = store.read_samples_since(HealthSampleKind.WATER_OZ, None)

    assert samples == []
    assert cursor is None
    assert table.last_filters == [("eq", "kind", "water_oz")]
