"""
Data model for the Calorie Tracker.
Food entries, input coercion and the stored JSON format.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Union

Number = Union[int, float]


class ValidationError(ValueError):
    """Raised when user input cannot become a food entry."""


class CorruptDataError(ValueError):
    """Raised when stored tracker data cannot be parsed."""


@dataclass(frozen=True)
class FoodEntry:
    """One food item added by the user."""

    id: int
    name: str
    calories: Number

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'calories': self.calories}

    @classmethod
    def from_dict(cls, data: Any) -> "FoodEntry":
        """Build an entry from a stored object, rejecting anything malformed."""
        if not isinstance(data, dict):
            raise CorruptDataError(f"Expected an object, got {type(data).__name__}")

        missing = [field for field in ('id', 'name', 'calories') if field not in data]
        if missing:
            raise CorruptDataError(f"Entry is missing fields: {', '.join(missing)}")

        entry_id = data['id']
        if isinstance(entry_id, bool) or not isinstance(entry_id, int):
            raise CorruptDataError(f"Entry id must be an integer, got {entry_id!r}")

        name = data['name']
        if not isinstance(name, str) or not name.strip():
            raise CorruptDataError(f"Entry {entry_id} has an invalid name")

        calories = data['calories']
        if isinstance(calories, bool) or not isinstance(calories, (int, float)):
            raise CorruptDataError(f"Entry {entry_id} has non-numeric calories")
        if not _is_finite(calories) or calories < 0:
            raise CorruptDataError(f"Entry {entry_id} has out-of-range calories")

        return cls(id=entry_id, name=name.strip(), calories=_normalize_number(calories))


# ============== Input Coercion ==============

def _is_finite(value: Number) -> bool:
    """False for NaN, infinities and ints too large to become a float."""
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _normalize_number(value: float) -> Number:
    """Keep whole numbers as ints so 95 is stored as 95, not 95.0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def parse_name(raw: Any) -> str:
    """Trim a food name. Raises ValidationError if nothing is left."""
    name = str(raw).strip() if raw is not None else ''
    if not name:
        raise ValidationError("Food name is required")
    return name


def parse_calories(raw: Any) -> Number:
    """Convert a calorie value or numeric string to a non-negative number."""
    if raw is None or isinstance(raw, bool):
        raise ValidationError("Calories must be a number")

    if isinstance(raw, (int, float)):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            raise ValidationError("Calories are required")
        try:
            value = float(text)
        except ValueError:
            raise ValidationError(f"Calories must be a number, got '{text}'") from None

    if not _is_finite(value):
        raise ValidationError("Calories must be a finite number")
    if value < 0:
        raise ValidationError("Calories cannot be negative")

    return _normalize_number(value)


# ============== Serialization ==============

def serialize_entries(entries: Iterable[FoodEntry]) -> str:
    """Serialize entries to the compact JSON array kept in the store."""
    return json.dumps([entry.to_dict() for entry in entries],
                      separators=(',', ':'), ensure_ascii=False)


def parse_entries(raw: str) -> List[FoodEntry]:
    """Parse the stored JSON array back into entries."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise CorruptDataError(f"Stored data is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CorruptDataError("Stored data must be a JSON array")

    entries = [FoodEntry.from_dict(item) for item in data]

    seen = set()
    for entry in entries:
        if entry.id in seen:
            raise CorruptDataError(f"Duplicate entry id {entry.id}")
        seen.add(entry.id)

    return entries
