"""Serialization of the drink list for durable storage."""

from uuid import UUID

from pydantic import AwareDatetime, BaseModel, TypeAdapter, ValidationError

from caffeine_tracker.domain.drinks import DrinkCategory, DrinkRecord


class StoredDrink(BaseModel):
    """Stored drink payload."""

    id: UUID
    caffeine_mg: float
    category: DrinkCategory
    volume_oz: float
    timestamp: AwareDatetime


_DRINK_LIST = TypeAdapter(list[StoredDrink])


class DrinkDecodeError(ValueError):
    """Raised when stored drink data cannot be decoded."""


def encode_drinks(records: list[DrinkRecord] | tuple[DrinkRecord, ...]) -> bytes:
    """Encode drinks as a UTF-8 JSON list."""
    payload = [
        StoredDrink(
            id=record.id,
            caffeine_mg=record.caffeine_mg,
            category=record.category,
            volume_oz=record.volume_oz,
            timestamp=record.timestamp,
        )
        for record in records
    ]
    return _DRINK_LIST.dump_json(payload, indent=2)


def decode_drinks(data: bytes) -> list[DrinkRecord]:
    """Decode drinks previously written by ``encode_drinks``."""
    try:
        stored = _DRINK_LIST.validate_json(data)
    except ValidationError as exc:
        raise DrinkDecodeError(str(exc)) from exc
    return [
        DrinkRecord(
            id=item.id,
            caffeine_mg=item.caffeine_mg,
            category=item.category,
            volume_oz=item.volume_oz,
            timestamp=item.timestamp,
        )
        for item in stored
    ]
