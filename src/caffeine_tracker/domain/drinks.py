"""Domain models for drinks."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, StrEnum
from uuid import UUID


class DrinkCategory(StrEnum):
    """Category tag stored with every drink."""

    WATER = "water"
    COFFEE = "coffee"
    ESPRESSO = "espresso"
    TEA = "tea"
    SODA = "soda"
    ENERGY_DRINK = "energy_drink"
    CHOCOLATE = "chocolate"
    ALCOHOL = "alcohol"


class DrinkType(Enum):
    """Catalog of drinks with their standard serving values."""

    WATER_CUP = ("8oz of Water", DrinkCategory.WATER, 0.0, 8.0)
    SMALL_COFFEE = ("Small Coffee", DrinkCategory.COFFEE, 96.0, 5.0)
    MEDIUM_COFFEE = ("Medium Coffee", DrinkCategory.COFFEE, 144.0, 8.0)
    LARGE_COFFEE = ("Large Coffee", DrinkCategory.COFFEE, 192.0, 12.0)
    SINGLE_ESPRESSO = ("Single Espresso", DrinkCategory.ESPRESSO, 64.0, 3.0)
    DOUBLE_ESPRESSO = ("Double Espresso", DrinkCategory.ESPRESSO, 128.0, 6.0)
    QUAD_ESPRESSO = ("Quad Espresso", DrinkCategory.ESPRESSO, 256.0, 8.0)
    BLACK_TEA = ("Black Tea", DrinkCategory.TEA, 47.0, 8.0)
    GREEN_TEA = ("Green Tea", DrinkCategory.TEA, 28.0, 8.0)
    SOFT_DRINK = ("Soft Drink", DrinkCategory.SODA, 22.0, 8.0)
    ENERGY_DRINK = ("Energy Drink", DrinkCategory.ENERGY_DRINK, 29.0, 8.0)
    CHOCOLATE = ("Chocolate", DrinkCategory.CHOCOLATE, 18.0, 8.0)
    SHOT_OF_LIQUOR = ("Shot of Liquor", DrinkCategory.ALCOHOL, 0.0, 1.0)

    def __init__(
        self,
        display_name: str,
        category: DrinkCategory,
        caffeine_mg: float,
        volume_oz: float,
    ) -> None:
        self.display_name = display_name
        self.category = category
        self.caffeine_mg = caffeine_mg
        self.volume_oz = volume_oz


# Caffeine in one reference cup, used for cup-equivalents.
CUP_CAFFEINE_MG = DrinkType.SMALL_COFFEE.caffeine_mg


@dataclass(frozen=True)
class DrinkRecord:
    """A single drink consumed by the user."""

    id: UUID
    caffeine_mg: float
    category: DrinkCategory
    volume_oz: float
    timestamp: datetime


@dataclass(frozen=True)
class DailyTotals:
    """Consumption totals for a calendar day."""

    count: int
    caffeine_mg: float
    volume_oz: float

    @property
    def cups(self) -> float:
        """Caffeine expressed in reference coffee cups."""
        return self.caffeine_mg / CUP_CAFFEINE_MG
