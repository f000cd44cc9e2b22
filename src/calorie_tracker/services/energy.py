"""Energy and anthropometric calculations."""

import math

from calorie_tracker.domain.profile import (
    DEFAULT_ACTIVITY_LEVEL,
    ActivityLevel,
    BmiCategory,
    Profile,
    Sex,
)
from calorie_tracker.domain.stats import CalorieProgress, EnergyBalance, EnergySummary

BMI_CATEGORIES = (
    BmiCategory(label="underweight", threshold=18.5),
    BmiCategory(label="normal", threshold=25),
    BmiCategory(label="overweight", threshold=30),
    BmiCategory(label="obese", threshold=100),
)

# Rule of thumb for energy stored per kg of body weight. An approximation,
# not a predictor of actual weight change.
KCAL_PER_KG = 7700

PROGRESS_CAP_PERCENT = 120.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def parse_number(value: object) -> float | None:
    """Return a finite float from a number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def bmi(weight_kg: object, height_cm: object) -> float | None:
    """Return body mass index, or None for non-positive or non-numeric input."""
    weight = parse_number(weight_kg)
    height = parse_number(height_cm)
    if weight is None or height is None or weight <= 0 or height <= 0:
        return None
    height_m = height / 100
    return weight / (height_m * height_m)


def bmr(weight_kg: float, height_cm: float, age_years: float, sex: Sex) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    return base + 5 if sex == Sex.MALE else base - 161


def tdee(bmr_value: float, activity_factor: float) -> int:
    """Return total daily energy expenditure in kcal."""
    return round_half_up(bmr_value * activity_factor)


def bmi_category(bmi_value: float) -> BmiCategory:
    """Return the first category whose threshold exceeds the BMI."""
    for category in BMI_CATEGORIES:
        if bmi_value < category.threshold:
            return category
    return BMI_CATEGORIES[-1]


def activity_factor(level: str | None) -> float:
    """Return the multiplier for an activity level id."""
    try:
        return ActivityLevel(level).factor
    except ValueError:
        return DEFAULT_ACTIVITY_LEVEL.factor


def energy_summary(profile: Profile | None, level: str | None) -> EnergySummary | None:
    """Return BMI, BMR and TDEE for a saved profile."""
    if profile is None:
        return None
    bmi_value = bmi(profile.weight_kg, profile.height_cm)
    bmr_value = bmr(
        profile.weight_kg, profile.height_cm, profile.age_years, profile.sex
    )
    factor = activity_factor(level)
    return EnergySummary(
        bmi=bmi_value,
        bmi_category=bmi_category(bmi_value) if bmi_value is not None else None,
        bmr=bmr_value,
        tdee=tdee(bmr_value, factor),
        activity_factor=factor,
    )


def calorie_progress(consumed: int, target: int | None) -> CalorieProgress:
    """Return intake as a share of TDEE, capped for display."""
    if not target:
        return CalorieProgress(
            consumed=consumed, target=None, percent=0.0, remaining=None
        )
    percent = min(consumed / target * 100, PROGRESS_CAP_PERCENT)
    return CalorieProgress(
        consumed=consumed,
        target=target,
        percent=percent,
        remaining=target - consumed,
    )


def weekly_balance(average: int, target: int) -> EnergyBalance:
    """Return the surplus or deficit of an average day against TDEE."""
    daily = average - target
    weekly = daily * 7
    return EnergyBalance(
        daily_difference=daily,
        weekly_difference=weekly,
        estimated_kg_per_week=round(weekly / KCAL_PER_KG, 2),
    )
