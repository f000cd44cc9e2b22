"""Persisted application state: profile, food log, favorites and weigh-ins."""

import json
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol, TypeVar

from calorie_tracker.domain.dates import format_date, format_time
from calorie_tracker.domain.entries import FoodEntry, MealSlot, WeightLog
from calorie_tracker.domain.foods import Food
from calorie_tracker.domain.profile import (
    DEFAULT_ACTIVITY_LEVEL,
    ActivityLevel,
    Profile,
    ProfileDraft,
)
from calorie_tracker.services.aggregation import suggested_meal_slot
from calorie_tracker.services.energy import bmi, parse_number, round_half_up

DEFAULT_PREFIX = "kalorie_"

PROFILE_KEY = "profile"
ACTIVITY_KEY = "activityLevel"
PROFILE_CONFIRMED_KEY = "profileConfirmed"
ENTRIES_KEY = "entries"
FAVORITES_KEY = "favorites"
RECENT_FOODS_KEY = "recentFoods"
WEIGHT_LOGS_KEY = "weightLogs"

RECENT_LIMIT = 15

MAX_WEIGHT_KG = 500
MIN_HEIGHT_CM = 50
MAX_HEIGHT_CM = 280
MIN_AGE_YEARS = 1
MAX_AGE_YEARS = 130
MIN_PLAUSIBLE_BMI = 5
MAX_PLAUSIBLE_BMI = 100

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageError(RuntimeError):
    """Raised by storage backends when a key cannot be read or written."""


class ProfileValidationError(ValueError):
    """Raised when a profile draft breaks a validation rule."""


class BackupImportError(ValueError):
    """Raised when a backup blob cannot be imported."""

    def __init__(self, message: str = "Invalid backup file") -> None:
        super().__init__(message)


class StateStorage(Protocol):
    """Durable key-value storage holding one JSON text value per key."""

    def read(self, key: str) -> str | None:
        """Return the stored text for a key, if present."""

    def write(self, key: str, value: str) -> None:
        """Replace the stored text for a key."""

    def delete(self, key: str) -> None:
        """Remove a key if present."""

    def keys(self) -> list[str]:
        """Return all stored keys."""


@dataclass
class PersistedStore:
    """Single source of truth for the tracker's mutable state.

    Every mutation updates memory first and then writes the affected key.
    Write failures are logged and ignored, so the in-memory state stays
    authoritative for the rest of the session.
    """

    storage: StateStorage
    prefix: str = DEFAULT_PREFIX
    clock: Callable[[], datetime] = datetime.now

    profile: Profile | None = field(default=None, init=False)
    profile_confirmed: bool = field(default=False, init=False)
    activity_level: str = field(default=DEFAULT_ACTIVITY_LEVEL.value, init=False)
    entries: list[FoodEntry] = field(default_factory=list, init=False)
    favorites: list[str] = field(default_factory=list, init=False)
    recent_foods: list[Food] = field(default_factory=list, init=False)
    weight_logs: list[WeightLog] = field(default_factory=list, init=False)
    _last_id: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.load()

    def load(self) -> None:
        """Read every key from storage, defaulting any key that is unusable."""
        self._reset_memory()
        profile_raw = self._read(PROFILE_KEY)
        if isinstance(profile_raw, dict):
            try:
                self.profile = Profile.from_dict(profile_raw)
            except (KeyError, TypeError, ValueError):
                _logger.warning("Ignoring malformed stored profile")
        self.profile_confirmed = self._read(PROFILE_CONFIRMED_KEY) is True
        activity = self._read(ACTIVITY_KEY)
        if isinstance(activity, str):
            self.activity_level = activity
        self.entries = _parse_items(self._read(ENTRIES_KEY), FoodEntry.from_dict)
        self.favorites = _unique_strings(self._read(FAVORITES_KEY))
        self.recent_foods = _parse_items(self._read(RECENT_FOODS_KEY), Food.from_dict)
        self.weight_logs = _parse_items(
            self._read(WEIGHT_LOGS_KEY), WeightLog.from_dict
        )
        self._last_id = max(
            [entry.id for entry in self.entries]
            + [log.created_at for log in self.weight_logs]
            + [0]
        )

    def today(self) -> str:
        """Return today's date key."""
        return format_date(self.clock().date())

    def save_profile(self, draft: ProfileDraft) -> Profile:
        """Validate and store a profile, raising on the first broken rule."""
        name = draft.name.strip()
        if not name:
            raise ProfileValidationError("Enter your first name")
        weight = parse_number(draft.weight_kg) or 0.0
        if weight <= 0 or weight > MAX_WEIGHT_KG:
            raise ProfileValidationError("Enter a valid weight (1-500 kg)")
        height = parse_number(draft.height_cm) or 0.0
        if height < MIN_HEIGHT_CM or height > MAX_HEIGHT_CM:
            raise ProfileValidationError("Enter a valid height (50-280 cm)")
        age = parse_number(draft.age_years) or 0.0
        if age < MIN_AGE_YEARS or age > MAX_AGE_YEARS:
            raise ProfileValidationError("Enter a valid age (1-130 years)")
        bmi_value = bmi(weight, height)
        if bmi_value is None or not MIN_PLAUSIBLE_BMI <= bmi_value <= MAX_PLAUSIBLE_BMI:
            shown = f"{bmi_value:.1f}" if bmi_value is not None else "?"
            raise ProfileValidationError(
                f"Implausible BMI ({shown}). Check your values, height is in cm."
            )
        profile = Profile(
            name=name,
            weight_kg=weight,
            height_cm=height,
            age_years=age,
            sex=draft.sex,
        )
        self.profile = profile
        self.profile_confirmed = True
        self._persist(PROFILE_KEY, profile.to_dict())
        self._persist(PROFILE_CONFIRMED_KEY, True)
        _logger.info("Profile saved")
        return profile

    def edit_profile(self) -> ProfileDraft:
        """Return the stored profile as an editable draft."""
        if self.profile is None:
            return ProfileDraft()
        return ProfileDraft(
            name=self.profile.name,
            weight_kg=self.profile.weight_kg,
            height_cm=self.profile.height_cm,
            age_years=self.profile.age_years,
            sex=self.profile.sex,
        )

    def set_activity_level(self, level: str) -> ActivityLevel:
        """Select the activity level used for TDEE."""
        selected = ActivityLevel(level)
        self.activity_level = selected.value
        self._persist(ACTIVITY_KEY, selected.value)
        return selected

    def add_entry(
        self,
        food: Food | None,
        amount_grams: float,
        meal_slot: MealSlot | None = None,
    ) -> FoodEntry | None:
        """Log a portion of a food; does nothing without a food or amount."""
        amount = parse_number(amount_grams)
        if food is None or amount is None or amount <= 0:
            return None
        entry = self._append_entry(food, amount, meal_slot)
        if entry is not None:
            self.record_recent(food)
        return entry

    def add_custom_entry(
        self,
        name: str,
        calories_per_100g: float,
        amount_grams: float,
        meal_slot: MealSlot | None = None,
    ) -> FoodEntry | None:
        """Log a food that is not in the catalog."""
        name = name.strip()
        calories = parse_number(calories_per_100g)
        amount = parse_number(amount_grams)
        if not name or calories is None or calories < 0:
            return None
        if amount is None or amount <= 0:
            return None
        food = Food(name=name, calories_per_100g=calories)
        entry = self._append_entry(food, amount, meal_slot)
        if entry is not None:
            self.record_recent(food)
        return entry

    def remove_entry(self, entry_id: int) -> bool:
        """Delete an entry by id."""
        remaining = [entry for entry in self.entries if entry.id != entry_id]
        if len(remaining) == len(self.entries):
            return False
        self.entries = remaining
        self._persist(ENTRIES_KEY, [entry.to_dict() for entry in self.entries])
        return True

    def toggle_favorite(self, food_name: str) -> bool:
        """Flip a food's favorite flag and return the new state."""
        if food_name in self.favorites:
            self.favorites = [name for name in self.favorites if name != food_name]
            favorite = False
        else:
            self.favorites = [*self.favorites, food_name]
            favorite = True
        self._persist(FAVORITES_KEY, self.favorites)
        return favorite

    def is_favorite(self, food_name: str) -> bool:
        """Return True when the food is a favorite."""
        return food_name in self.favorites

    def record_recent(self, food: Food) -> None:
        """Move a food to the front of the recently used list."""
        others = [item for item in self.recent_foods if item.name != food.name]
        self.recent_foods = [food, *others][:RECENT_LIMIT]
        self._persist(RECENT_FOODS_KEY, [item.to_dict() for item in self.recent_foods])

    def log_weight(self, weight_kg: float, day: str | None = None) -> WeightLog | None:
        """Record a weigh-in, replacing any earlier one on the same date."""
        weight = parse_number(weight_kg)
        if weight is None or weight <= 0 or weight > MAX_WEIGHT_KG:
            return None
        weight_kg = weight
        day = day or self.today()
        existing = next((log for log in self.weight_logs if log.date == day), None)
        if existing is not None:
            log = WeightLog(
                date=day, weight_kg=weight_kg, created_at=existing.created_at
            )
            self.weight_logs = [
                log if item.date == day else item for item in self.weight_logs
            ]
        else:
            log = WeightLog(date=day, weight_kg=weight_kg, created_at=self._next_id())
            self.weight_logs = [*self.weight_logs, log]
        self._persist(WEIGHT_LOGS_KEY, [item.to_dict() for item in self.weight_logs])
        if self.profile is not None:
            self.profile = Profile(
                name=self.profile.name,
                weight_kg=weight_kg,
                height_cm=self.profile.height_cm,
                age_years=self.profile.age_years,
                sex=self.profile.sex,
            )
            self._persist(PROFILE_KEY, self.profile.to_dict())
        return log

    def remove_weight_log(self, created_at: int) -> bool:
        """Delete a weigh-in by its creation timestamp."""
        remaining = [log for log in self.weight_logs if log.created_at != created_at]
        if len(remaining) == len(self.weight_logs):
            return False
        self.weight_logs = remaining
        self._persist(WEIGHT_LOGS_KEY, [item.to_dict() for item in self.weight_logs])
        return True

    def export_all(self) -> dict[str, object]:
        """Return every namespaced key with its parsed value."""
        try:
            keys = [key for key in self.storage.keys() if key.startswith(self.prefix)]
            data: dict[str, object] = {}
            for key in sorted(keys):
                raw = self.storage.read(key)
                if raw is None:
                    continue
                try:
                    data[key] = json.loads(raw)
                except ValueError:
                    _logger.warning("Skipping unparseable key in export: %s", key)
        except StorageError:
            _logger.warning("Storage unavailable, exporting in-memory state")
            return self._snapshot()
        return data

    def export_json(self) -> str:
        """Return the export as indented JSON text."""
        return json.dumps(self.export_all(), indent=2, ensure_ascii=False)

    def backup_filename(self, today: date | None = None) -> str:
        """Return a suggested file name for an export."""
        day = today or self.clock().date()
        suffix = f"-{self.profile.name.lower()}" if self.profile else ""
        return f"kalorietaeller-backup{suffix}-{day.isoformat()}.json"

    def import_all(self, blob: str | bytes) -> int:
        """Overwrite namespaced keys from an export.

        Keys outside the namespace are ignored. If a write fails, keys already
        written are put back before raising. Memory is not refreshed; call
        :meth:`load` afterwards.
        """
        try:
            data = json.loads(blob)
        except ValueError as exc:
            _logger.warning("Rejected backup: %s", exc)
            raise BackupImportError() from exc
        if not isinstance(data, dict):
            _logger.warning("Rejected backup: top level is not an object")
            raise BackupImportError()
        payload = {
            key: json.dumps(value, ensure_ascii=False)
            for key, value in data.items()
            if isinstance(key, str) and key.startswith(self.prefix)
        }
        try:
            previous = {key: self.storage.read(key) for key in payload}
        except StorageError as exc:
            _logger.warning("Backup import could not read current state: %s", exc)
            raise BackupImportError() from exc
        attempted: list[str] = []
        try:
            for key, value in payload.items():
                attempted.append(key)
                self.storage.write(key, value)
        except StorageError as exc:
            _logger.warning("Backup import could not be written: %s", exc)
            self._restore(previous, attempted)
            raise BackupImportError() from exc
        _logger.info("Imported %s keys from backup", len(payload))
        return len(payload)

    def reset_all(self, keep_backup: bool) -> str | None:
        """Delete every namespaced key, optionally returning an export first."""
        backup = self.export_json() if keep_backup else None
        try:
            for key in self.storage.keys():
                if key.startswith(self.prefix):
                    self.storage.delete(key)
        except StorageError:
            _logger.warning("Storage unavailable during reset")
        self._reset_memory()
        _logger.info("Application state reset")
        return backup

    def _append_entry(
        self, food: Food, amount_grams: float, meal_slot: MealSlot | None
    ) -> FoodEntry | None:
        calories = food.calories_per_100g * amount_grams / 100
        if not math.isfinite(calories):
            return None
        now = self.clock()
        entry = FoodEntry(
            id=self._next_id(),
            food_name=food.name,
            amount_grams=float(amount_grams),
            calories=round_half_up(calories),
            date=format_date(now.date()),
            meal_slot=meal_slot or suggested_meal_slot(now.hour),
            time=format_time(now),
        )
        self.entries = [*self.entries, entry]
        self._persist(ENTRIES_KEY, [item.to_dict() for item in self.entries])
        return entry

    def _next_id(self) -> int:
        millis = int(self.clock().timestamp() * 1000)
        self._last_id = max(millis, self._last_id + 1)
        return self._last_id

    def _reset_memory(self) -> None:
        self.profile = None
        self.profile_confirmed = False
        self.activity_level = DEFAULT_ACTIVITY_LEVEL.value
        self.entries = []
        self.favorites = []
        self.recent_foods = []
        self.weight_logs = []
        self._last_id = 0

    def _snapshot(self) -> dict[str, object]:
        return {
            self.prefix + PROFILE_KEY: self.profile.to_dict() if self.profile else None,
            self.prefix + PROFILE_CONFIRMED_KEY: self.profile_confirmed,
            self.prefix + ACTIVITY_KEY: self.activity_level,
            self.prefix + ENTRIES_KEY: [entry.to_dict() for entry in self.entries],
            self.prefix + FAVORITES_KEY: list(self.favorites),
            self.prefix + RECENT_FOODS_KEY: [
                food.to_dict() for food in self.recent_foods
            ],
            self.prefix + WEIGHT_LOGS_KEY: [log.to_dict() for log in self.weight_logs],
        }

    def _read(self, name: str) -> object | None:
        key = self.prefix + name
        try:
            raw = self.storage.read(key)
        except StorageError:
            _logger.warning("Could not read %s, using default", key)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            _logger.warning("Ignoring corrupt value for %s", key)
            return None

    def _persist(self, name: str, value: object) -> None:
        key = self.prefix + name
        try:
            self.storage.write(key, json.dumps(value, ensure_ascii=False))
        except StorageError:
            _logger.warning("Could not persist %s; keeping in-memory state", key)

    def _restore(self, previous: dict[str, str | None], keys: list[str]) -> None:
        for key in keys:
            value = previous[key]
            try:
                if value is None:
                    self.storage.delete(key)
                else:
                    self.storage.write(key, value)
            except StorageError:
                _logger.warning("Could not restore %s after failed import", key)


def _parse_items(raw: object, parser: Callable[[dict[str, object]], T]) -> list[T]:
    if not isinstance(raw, list):
        return []
    items: list[T] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            items.append(parser(item))
        except (KeyError, TypeError, ValueError):
            _logger.warning("Skipping malformed stored record: %r", item)
    return items


def _unique_strings(raw: object) -> list[str]:
    if not isinstance(raw, list):
        return []
    seen: list[str] = []
    for item in raw:
        if isinstance(item, str) and item not in seen:
            seen.append(item)
    return seen
