"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer, build_container
from calorie_tracker.domain.foods import Food
from calorie_tracker.services.search import FoodSearchService
from calorie_tracker.services.store import PersistedStore, StateStorage, StorageError


@dataclass
class InMemoryStateStorage(StateStorage):
    """In-memory key-value storage for tests."""

    values: dict[str, str] = field(default_factory=dict)

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)

    def keys(self) -> list[str]:
        return list(self.values)


@dataclass
class FailingStateStorage(StateStorage):
    """Storage whose writes always fail, like a full disk."""

    values: dict[str, str] = field(default_factory=dict)
    write_attempts: int = 0

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.write_attempts += 1
        raise StorageError("quota exceeded")

    def delete(self, key: str) -> None:
        raise StorageError("quota exceeded")

    def keys(self) -> list[str]:
        return list(self.values)


@dataclass
class FlakyStateStorage(InMemoryStateStorage):
    """In-memory storage whose Nth write fails."""

    fail_on_write: int = 1
    write_attempts: int = 0

    def write(self, key: str, value: str) -> None:
        self.write_attempts += 1
        if self.write_attempts == self.fail_on_write:
            raise StorageError("disk full")
        super().write(key, value)


@dataclass
class FixedClock:
    """Clock returning a controllable local time."""

    now: datetime = field(default_factory=lambda: datetime(2026, 3, 5, 12, 30))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


CATALOG = [
    Food(name="Chicken Soup", calories_per_100g=36),
    Food(name="Chicken Breast, Raw", calories_per_100g=120),
    Food(name="Rice, white, cooked", calories_per_100g=130),
    Food(name="Milk, whole (3.5%)", calories_per_100g=64),
    Food(name="Oats, rolled", calories_per_100g=379),
    Food(name="Salmon, Atlantic, farmed, raw", calories_per_100g=208),
    Food(name="Yogurt, Greek, plain", calories_per_100g=97),
    Food(name="Bread, rye", calories_per_100g=259),
    Food(name="Apple, raw", calories_per_100g=52),
    Food(name="Banana, raw", calories_per_100g=89),
    Food(name="Butter", calories_per_100g=717),
    Food(name="Egg, whole, boiled", calories_per_100g=155),
]


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def storage() -> InMemoryStateStorage:
    return InMemoryStateStorage()


@pytest.fixture
def store(storage: InMemoryStateStorage, clock: FixedClock) -> PersistedStore:
    return PersistedStore(storage=storage, clock=clock)


@pytest.fixture
def catalog() -> list[Food]:
    return list(CATALOG)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_dir=tmp_path / "data", storage_prefix="kalorie_")


@pytest.fixture
def container(
    settings: Settings,
    storage: InMemoryStateStorage,
    clock: FixedClock,
    catalog: list[Food],
) -> AppContainer:
    built = build_container(settings, storage=storage, clock=clock)
    built.search_service = FoodSearchService(catalog)
    return built
