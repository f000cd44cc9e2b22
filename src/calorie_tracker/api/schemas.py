"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from calorie_tracker.domain.entries import MealSlot
from calorie_tracker.domain.profile import ActivityLevel, Sex


class ProfileRequest(BaseModel):
    """Profile form values, validated by the store."""

    name: str = ""
    weight_kg: str | float | None = None
    height_cm: str | float | None = None
    age_years: str | float | None = None
    sex: Sex = Sex.MALE


class ActivityRequest(BaseModel):
    """Activity level selection."""

    level: ActivityLevel


class EntryRequest(BaseModel):
    """A portion of a catalog or recently used food."""

    food_name: str
    amount_grams: float = Field(allow_inf_nan=False)
    meal_slot: MealSlot | None = None


class CustomEntryRequest(BaseModel):
    """A portion of a food that is not in the catalog."""

    name: str
    calories_per_100g: float = Field(allow_inf_nan=False)
    amount_grams: float = Field(allow_inf_nan=False)
    meal_slot: MealSlot | None = None


class FavoriteRequest(BaseModel):
    """Favorite toggle for a food name."""

    food_name: str


class WeightRequest(BaseModel):
    """A weigh-in, defaulting to today."""

    weight_kg: float = Field(allow_inf_nan=False)
    date: str | None = None


class ResetRequest(BaseModel):
    """Reset options."""

    keep_backup: bool = True
