"""Tests for energy calculations."""

import pytest

from calorie_tracker.domain.profile import ActivityLevel, Profile, Sex
from calorie_tracker.services import energy


def test_bmi_computes_from_cm() -> None:
    assert energy.bmi(80, 200) == pytest.approx(20.0)
    assert energy.bmi("80", "200") == pytest.approx(20.0)


@pytest.mark.parametrize(
    ("weight", "height"),
    [(0, 180), (80, 0), (-1, 180), ("abc", 180), (None, 180), (80, float("nan"))],
)
def test_bmi_undefined_for_invalid_input(weight, height) -> None:
    assert energy.bmi(weight, height) is None


def test_bmr_sex_offset_is_166() -> None:
    male = energy.bmr(70, 175, 40, Sex.MALE)
    female = energy.bmr(70, 175, 40, Sex.FEMALE)

    assert male - female == 166


def test_bmr_increases_with_weight_and_height() -> None:
    base = energy.bmr(70, 175, 40, Sex.FEMALE)

    assert energy.bmr(71, 175, 40, Sex.FEMALE) > base
    assert energy.bmr(70, 176, 40, Sex.FEMALE) > base


def test_reference_profile_tdee() -> None:
    bmr = energy.bmr(80, 180, 30, Sex.MALE)

    assert bmr == 1780
    assert energy.tdee(bmr, ActivityLevel.MODERATE.factor) == 2759


def test_tdee_rounds_half_up() -> None:
    assert energy.tdee(1000.5, 1.0) == 1001
    assert energy.tdee(1001.5, 1.0) == 1002


@pytest.mark.parametrize(
    ("value", "label"),
    [
        (17.0, "underweight"),
        (18.5, "normal"),
        (24.9, "normal"),
        (25.0, "overweight"),
        (30.0, "obese"),
        (99.9, "obese"),
        (150.0, "obese"),
    ],
)
def test_bmi_category(value, label) -> None:
    assert energy.bmi_category(value).label == label


def test_activity_factor_falls_back_to_moderate() -> None:
    assert energy.activity_factor("extreme") == 1.9
    assert energy.activity_factor("couch") == 1.55
    assert energy.activity_factor(None) == 1.55


def test_energy_summary_for_profile() -> None:
    profile = Profile(
        name="Ana", weight_kg=80, height_cm=180, age_years=30, sex=Sex.MALE
    )

    summary = energy.energy_summary(profile, "moderate")

    assert summary is not None
    assert summary.tdee == 2759
    assert summary.bmi == pytest.approx(24.69, abs=0.01)
    assert summary.bmi_category.label == "normal"
    assert energy.energy_summary(None, "moderate") is None


def test_calorie_progress_caps_percent() -> None:
    progress = energy.calorie_progress(3000, 2000)

    assert progress.percent == 120.0
    assert progress.remaining == -1000
    assert energy.calorie_progress(500, None).percent == 0.0


def test_weekly_balance_estimates_kg() -> None:
    balance = energy.weekly_balance(1900, 2450)

    assert balance.daily_difference == -550
    assert balance.weekly_difference == -3850
    assert balance.estimated_kg_per_week == -0.5


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (80, 80.0),
        ("72.5", 72.5),
        ("abc", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
        ("-inf", None),
        (-3, -3.0),
    ],
)
def test_parse_number_accepts_only_finite_numbers(value, expected) -> None:
    assert energy.parse_number(value) == expected
