"""Domain models for the body profile and energy settings."""

from dataclasses import dataclass
from enum import StrEnum


class Sex(StrEnum):
    """Biological sex used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Activity levels with their TDEE multipliers."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    EXTREME = "extreme"

    @property
    def factor(self) -> float:
        """Return the multiplier applied to BMR."""
        return _ACTIVITY_DETAILS[self][0]

    @property
    def label(self) -> str:
        """Return a short display label."""
        return _ACTIVITY_DETAILS[self][1]

    @property
    def description(self) -> str:
        """Return a longer display description."""
        return _ACTIVITY_DETAILS[self][2]


_ACTIVITY_DETAILS: dict[ActivityLevel, tuple[float, str, str]] = {
    ActivityLevel.SEDENTARY: (1.2, "Sedentary", "Little or no exercise"),
    ActivityLevel.LIGHT: (1.375, "Lightly active", "Light exercise 1-3 days/week"),
    ActivityLevel.MODERATE: (
        1.55,
        "Moderately active",
        "Moderate exercise 3-5 days/week",
    ),
    ActivityLevel.ACTIVE: (1.725, "Very active", "Hard exercise 6-7 days/week"),
    ActivityLevel.EXTREME: (
        1.9,
        "Extremely active",
        "Very hard exercise or physical job",
    ),
}

DEFAULT_ACTIVITY_LEVEL = ActivityLevel.MODERATE


@dataclass(frozen=True)
class Profile:
    """A saved, validated body profile."""

    name: str
    weight_kg: float
    height_cm: float
    age_years: float
    sex: Sex

    def to_dict(self) -> dict[str, object]:
        """Return the persisted representation."""
        return {
            "name": self.name,
            "weightKg": self.weight_kg,
            "heightCm": self.height_cm,
            "ageYears": self.age_years,
            "sex": self.sex.value,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, object]) -> "Profile":
        """Build a profile from its persisted representation."""
        return cls(
            name=str(raw.get("name") or ""),
            weight_kg=float(raw.get("weightKg", raw.get("weight", 0))),
            height_cm=float(raw.get("heightCm", raw.get("height", 0))),
            age_years=float(raw.get("ageYears", raw.get("age", 0))),
            sex=Sex(raw.get("sex", Sex.MALE.value)),
        )


@dataclass(frozen=True)
class ProfileDraft:
    """Unvalidated profile form values."""

    name: str = ""
    weight_kg: str | float | None = None
    height_cm: str | float | None = None
    age_years: str | float | None = None
    sex: Sex = Sex.MALE


@dataclass(frozen=True)
class BmiCategory:
    """BMI classification band, bounded above by ``threshold``."""

    label: str
    threshold: float
