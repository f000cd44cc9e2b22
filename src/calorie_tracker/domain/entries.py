"""Domain models for logged food and weight."""

from dataclasses import dataclass
from enum import StrEnum


class MealSlot(StrEnum):
    """Meal categories an entry is logged under."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @classmethod
    def parse(cls, value: object) -> "MealSlot":
        """Return the slot for a raw value, defaulting to snack."""
        try:
            return cls(value)
        except ValueError:
            return cls.SNACK


@dataclass(frozen=True)
class FoodEntry:
    """A logged portion of food."""

    id: int
    food_name: str
    amount_grams: float
    calories: int
    date: str
    meal_slot: MealSlot
    time: str
    unit: str = "g"

    def to_dict(self) -> dict[str, object]:
        """Return the persisted representation."""
        return {
            "id": self.id,
            "foodName": self.food_name,
            "amountGrams": self.amount_grams,
            "unit": self.unit,
            "calories": self.calories,
            "date": self.date,
            "mealSlot": self.meal_slot.value,
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, object]) -> "FoodEntry":
        """Build an entry from its persisted representation."""
        return cls(
            id=int(raw["id"]),
            food_name=str(raw.get("foodName", raw.get("food", ""))),
            amount_grams=float(raw.get("amountGrams", raw.get("amount", 0))),
            calories=int(raw.get("calories", 0)),
            date=str(raw.get("date", "")),
            meal_slot=MealSlot.parse(raw.get("mealSlot", raw.get("meal"))),
            time=str(raw.get("time", "")),
            unit=str(raw.get("unit") or "g"),
        )


@dataclass(frozen=True)
class WeightLog:
    """A weigh-in, at most one per calendar date."""

    date: str
    weight_kg: float
    created_at: int

    def to_dict(self) -> dict[str, object]:
        """Return the persisted representation."""
        return {
            "date": self.date,
            "weightKg": self.weight_kg,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, object]) -> "WeightLog":
        """Build a weight log from its persisted representation."""
        return cls(
            date=str(raw.get("date", "")),
            weight_kg=float(raw.get("weightKg", raw.get("weight", 0))),
            created_at=int(raw.get("createdAt", raw.get("ts", 0))),
        )
