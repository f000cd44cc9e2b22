"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from calorie_tracker.adapters.file_storage import FileStateStorage
from calorie_tracker.adapters.food_catalog import load_catalog
from calorie_tracker.config import Settings
from calorie_tracker.services.search import FoodSearchService
from calorie_tracker.services.store import PersistedStore, StateStorage


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: StateStorage
    store: PersistedStore
    search_service: FoodSearchService
    clock: Callable[[], datetime]


def build_container(
    settings: Settings | None = None,
    storage: StateStorage | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_storage = storage or FileStateStorage(resolved_settings.data_dir)
    store = PersistedStore(
        storage=resolved_storage,
        prefix=resolved_settings.storage_prefix,
        clock=clock,
    )
    search_service = FoodSearchService(load_catalog(resolved_settings.catalog_path))
    return AppContainer(
        settings=resolved_settings,
        storage=resolved_storage,
        store=store,
        search_service=search_service,
        clock=clock,
    )
