"""Domain models for the food catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Food:
    """A catalog food with its energy density."""

    name: str
    calories_per_100g: float

    def to_dict(self) -> dict[str, object]:
        """Return the persisted representation."""
        return {"name": self.name, "caloriesPer100g": self.calories_per_100g}

    @classmethod
    def from_dict(cls, raw: dict[str, object]) -> "Food":
        """Build a food from either the persisted or the compact catalog shape."""
        name = raw.get("name", raw.get("n"))
        calories = raw.get("caloriesPer100g", raw.get("c"))
        if not isinstance(name, str) or not isinstance(calories, int | float):
            raise ValueError(f"Invalid food record: {raw!r}")
        return cls(name=name, calories_per_100g=float(calories))
