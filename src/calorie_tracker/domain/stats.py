"""Domain models for derived statistics."""

from dataclasses import dataclass, field

from calorie_tracker.domain.entries import FoodEntry
from calorie_tracker.domain.profile import BmiCategory


@dataclass
class MealTotals:
    """Entries and calories logged under one meal slot."""

    entries: list[FoodEntry] = field(default_factory=list)
    calories: int = 0


@dataclass(frozen=True)
class DayGroup:
    """All entries logged on one calendar date."""

    date: str
    entries: list[FoodEntry]
    calories: int


@dataclass(frozen=True)
class WeekDay:
    """Calorie total for one day of the trailing week."""

    date: str
    day_name: str
    day_number: int
    calories: int
    is_today: bool


@dataclass(frozen=True)
class WeeklyStats:
    """Rolling seven-day calorie statistics."""

    days: list[WeekDay]
    average: int
    total: int
    days_with_data: int
    max_calories: int


@dataclass(frozen=True)
class WeightTrendPoint:
    """A weigh-in annotated with that day's intake."""

    date: str
    weight_kg: float
    created_at: int
    calories: int | None
    change_kg: float | None


@dataclass(frozen=True)
class WeightTrend:
    """Weight series in logging order."""

    points: list[WeightTrendPoint]
    delta_kg: float | None
    latest_kg: float | None


@dataclass(frozen=True)
class EnergySummary:
    """Energy figures derived from a saved profile."""

    bmi: float | None
    bmi_category: BmiCategory | None
    bmr: float
    tdee: int
    activity_factor: float


@dataclass(frozen=True)
class CalorieProgress:
    """Today's intake relative to TDEE."""

    consumed: int
    target: int | None
    percent: float
    remaining: int | None


@dataclass(frozen=True)
class EnergyBalance:
    """Average intake against TDEE over the trailing week."""

    daily_difference: int
    weekly_difference: int
    estimated_kg_per_week: float
