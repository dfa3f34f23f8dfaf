"""Shared test fixtures."""

from dataclasses import dataclass, field
from typing import List

import pytest

from storage import MemoryStore, StorageError
from tracker import IdGenerator, Tracker, TrackerView


@dataclass
class FixedClock:
    """Clock that always returns the same instant unless advanced."""

    now: float = 1700000000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingStore(MemoryStore):
    """Memory store whose writes can be switched to fail."""

    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.fail_writes = False

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("quota exceeded")
        super().set(key, value)

    def remove(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError("quota exceeded")
        super().remove(key)


@dataclass
class RecordingListener:
    """Listener that keeps every view it receives."""

    views: List[TrackerView] = field(default_factory=list)

    def __call__(self, view: TrackerView) -> None:
        self.views.append(view)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def tracker(store: MemoryStore, clock: FixedClock) -> Tracker:
    tracker = Tracker(store, id_generator=IdGenerator(clock))
    tracker.initialize()
    return tracker
