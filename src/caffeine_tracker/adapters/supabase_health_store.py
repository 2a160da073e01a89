"""Supabase-backed health sample store."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from caffeine_tracker.domain.health import HealthSample, HealthSampleKind
from caffeine_tracker.services.health import HealthStore


@dataclass
class SupabaseHealthStore(HealthStore):
    """Supabase implementation of the health store.

    Rows carry an increasing integer ``id`` that serves as the read cursor.
    """

    client: Client
    table: str = "health_samples"

    def write_sample(self, sample: HealthSample) -> None:
        """Insert a sample row."""
        self.client.table(self.table).insert(
            {
                "kind": sample.kind.value,
                "value": sample.value,
                "unit": sample.kind.unit,
                "recorded_at": sample.recorded_at.isoformat(),
                "drink_id": str(sample.drink_id) if sample.drink_id else None,
            }
        ).execute()

    def read_samples_since(
        self, kind: HealthSampleKind, cursor: int | None
    ) -> tuple[list[HealthSample], int | None]:
        """Return rows of a kind with ids above the cursor, oldest first."""
        query = (
            self.client.table(self.table)
            .select("id, kind, value, recorded_at, drink_id")
            .eq("kind", kind.value)
        )
        if cursor is not None:
            query = query.gt("id", cursor)
        response = query.order("id", desc=False).execute()
        rows = response.data or []
        samples = [_parse_row(row) for row in rows]
        next_cursor = cursor
        for row in rows:
            row_id = int(row["id"])
            if next_cursor is None or row_id > next_cursor:
                next_cursor = row_id
        return samples, next_cursor


def _parse_row(row: dict[str, object]) -> HealthSample:
    drink_id_raw = row.get("drink_id")
    return HealthSample(
        kind=HealthSampleKind(str(row["kind"])),
        value=float(row.get("value", 0.0)),
        recorded_at=datetime.fromisoformat(str(row["recorded_at"])),
        drink_id=UUID(str(drink_id_raw)) if drink_id_raw else None,
    )
