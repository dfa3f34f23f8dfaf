"""
Tracker state module for the Calorie Tracker.
Holds the ordered food entries, mirrors them to the store on every
mutation and notifies renderers.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple

from models import (
    CorruptDataError, FoodEntry, Number,
    parse_calories, parse_entries, parse_name, serialize_entries,
)
from storage import KeyValueStore, StorageError

logger = logging.getLogger("calorie_tracker.tracker")

STORAGE_KEY = 'foodItems'


class PersistenceError(Exception):
    """Raised when a mutation was applied in memory but could not be stored."""


def total_calories(entries: Iterable[FoodEntry]) -> Number:
    """Sum the calories of the given entries."""
    return sum((entry.calories for entry in entries), 0)


@dataclass(frozen=True)
class TrackerView:
    """Snapshot of the tracker handed to renderers."""

    entries: Tuple[FoodEntry, ...]
    total: Number

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def to_dict(self) -> dict:
        return {
            'items': [entry.to_dict() for entry in self.entries],
            'total': self.total,
            'empty': self.is_empty,
        }


class IdGenerator:
    """Millisecond timestamp ids, forced to be strictly increasing."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self.last_id = 0

    def seed(self, existing_max: int):
        """Make sure future ids are greater than any id already in use."""
        self.last_id = max(self.last_id, existing_max)

    def next_id(self) -> int:
        candidate = int(self.clock() * 1000)
        if candidate <= self.last_id:
            candidate = self.last_id + 1
        self.last_id = candidate
        return candidate


def coerce_id(raw: Any) -> Optional[int]:
    """Turn an id from the UI into an int, or None if it is not exactly one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            try:
                raw = float(text)
            except ValueError:
                return None
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return None


Listener = Callable[[TrackerView], None]


class Tracker:
    """Owns the food entries for one session and keeps the store in sync.

    Every mutation updates memory first, then writes the serialized entries
    (or removes the key on reset), then notifies listeners. A failed write
    leaves the in-memory change in place and raises PersistenceError after
    listeners have been notified.
    """

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY,
                 id_generator: Optional[IdGenerator] = None):
        self.store = store
        self.key = key
        self.id_generator = id_generator or IdGenerator()
        self._entries: List[FoodEntry] = []
        self._listeners: List[Listener] = []

    # ============== Listeners ==============

    def subscribe(self, listener: Listener):
        """Register a callback invoked with a TrackerView after each change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self):
        view = self.view()
        for listener in list(self._listeners):
            listener(view)

    # ============== State ==============

    @property
    def entries(self) -> Tuple[FoodEntry, ...]:
        return tuple(self._entries)

    def total_calories(self) -> Number:
        return total_calories(self._entries)

    def view(self) -> TrackerView:
        return TrackerView(entries=tuple(self._entries), total=self.total_calories())

    def initialize(self):
        """Load entries from the store and trigger the first render."""
        raw = self.store.get(self.key)
        if raw is None:
            self._entries = []
        else:
            try:
                self._entries = parse_entries(raw)
            except CorruptDataError as e:
                logger.warning("Discarding unreadable data under '%s': %s", self.key, e)
                self._entries = []
                try:
                    self._save()
                except PersistenceError as save_error:
                    logger.error("Could not overwrite corrupt data: %s", save_error)

        if self._entries:
            self.id_generator.seed(max(entry.id for entry in self._entries))
        logger.info("Loaded %d food entries", len(self._entries))
        self._notify()

    # ============== Mutations ==============

    def add_food(self, name: Any, calories: Any) -> FoodEntry:
        """Append a new entry. Raises ValidationError for unusable input."""
        name = parse_name(name)
        calories = parse_calories(calories)
        entry = FoodEntry(id=self.id_generator.next_id(), name=name, calories=calories)
        self._entries.append(entry)
        logger.info("Added %s (%s calories)", entry.name, entry.calories)
        self._commit(self._save)
        return entry

    def remove_food(self, entry_id: Any) -> bool:
        """Remove the entry with the given id. Unknown ids are a no-op."""
        target = coerce_id(entry_id)

        remaining = [entry for entry in self._entries if entry.id != target]
        removed = len(remaining) != len(self._entries)
        self._entries = remaining

        if removed:
            logger.info("Removed entry %s", target)
        else:
            logger.debug("No entry with id %r to remove", entry_id)
        self._commit(self._save)
        return removed

    def reset(self, confirm: Callable[[], bool]) -> bool:
        """Clear every entry and the stored key, if the user confirms."""
        if not confirm():
            logger.debug("Reset declined")
            return False

        self._entries = []
        logger.info("Tracker reset")
        self._commit(self._clear)
        return True

    # ============== Persistence ==============

    def _save(self):
        try:
            self.store.set(self.key, serialize_entries(self._entries))
        except StorageError as e:
            raise PersistenceError(f"Could not save food entries: {e}") from e

    def _clear(self):
        try:
            self.store.remove(self.key)
        except StorageError as e:
            raise PersistenceError(f"Could not clear saved food entries: {e}") from e

    def _commit(self, persist: Callable[[], None]):
        try:
            persist()
        except PersistenceError as e:
            logger.error("%s", e)
            self._notify()
            raise
        self._notify()
