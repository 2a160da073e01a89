"""Domain models for health-store samples."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from caffeine_tracker.domain.drinks import DrinkCategory


class HealthSampleKind(StrEnum):
    """Sample types written to the health store."""

    CAFFEINE_MG = "caffeine_mg"
    WATER_OZ = "water_oz"
    ALCOHOL_COUNT = "alcohol_count"

    @property
    def unit(self) -> str:
        """Unit the sample value is expressed in."""
        return _UNITS[self]

    @classmethod
    def for_category(cls, category: DrinkCategory) -> "HealthSampleKind":
        """Return the sample kind recorded for a drink category."""
        if category is DrinkCategory.WATER:
            return cls.WATER_OZ
        if category is DrinkCategory.ALCOHOL:
            return cls.ALCOHOL_COUNT
        return cls.CAFFEINE_MG


_UNITS = {
    HealthSampleKind.CAFFEINE_MG: "mg",
    HealthSampleKind.WATER_OZ: "fl_oz",
    HealthSampleKind.ALCOHOL_COUNT: "count",
}


@dataclass(frozen=True)
class HealthSample:
    """A timestamped sample stored in the health store."""

    kind: HealthSampleKind
    value: float
    recorded_at: datetime
    drink_id: UUID | None = None
