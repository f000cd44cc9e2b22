"""Tests for the food catalog loader."""

import json

import pytest

from calorie_tracker.adapters.food_catalog import load_catalog, parse_catalog
from calorie_tracker.domain.foods import Food


def test_parse_catalog_accepts_both_record_shapes() -> None:
    foods = parse_catalog(
        [
            {"name": "Butter", "caloriesPer100g": 717},
            {"n": "Skyr", "c": 63},
            {"name": "Broken"},
            "not a record",
        ]
    )

    assert foods == [
        Food(name="Butter", calories_per_100g=717),
        Food(name="Skyr", calories_per_100g=63),
    ]


def test_parse_catalog_requires_array() -> None:
    with pytest.raises(ValueError):
        parse_catalog({"name": "Butter"})


def test_load_catalog_from_file(tmp_path) -> None:
    path = tmp_path / "foods.json"
    path.write_text(json.dumps([{"name": "Apple", "caloriesPer100g": 52}]))

    assert load_catalog(path) == [Food(name="Apple", calories_per_100g=52)]


def test_bundled_catalog_loads() -> None:
    foods = load_catalog()

    assert len(foods) >= 10
    assert Food(name="Chicken Breast, Raw", calories_per_100g=120) in foods
