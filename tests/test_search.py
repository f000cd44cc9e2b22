"""Tests for food search ranking."""

from calorie_tracker.domain.foods import Food
from calorie_tracker.services.search import FoodSearchService, rank, score, tokenize


def test_tokenize_splits_on_punctuation() -> None:
    assert tokenize("Milk, whole (3.5%)") == ["milk", "whole", "3.5%"]
    assert tokenize("Sweet-and-sour/Chili  sauce") == [
        "sweet",
        "and",
        "sour",
        "chili",
        "sauce",
    ]


def test_empty_query_returns_first_ten_unranked(catalog) -> None:
    assert rank("", catalog) == catalog[:10]
    assert rank("   ", catalog) == catalog[:10]


def test_multi_word_exact_match_ranks_first(catalog) -> None:
    results = rank("chicken breast", catalog)

    assert [food.name for food in results] == ["Chicken Breast, Raw"]


def test_single_word_prefers_exact_then_shorter(catalog) -> None:
    results = rank("chicken", catalog)

    assert [food.name for food in results] == ["Chicken Soup", "Chicken Breast, Raw"]


def test_all_words_must_match(catalog) -> None:
    assert rank("chicken rice", catalog) == []


def test_prefix_match_only_at_token_start(catalog) -> None:
    assert rank("icken", catalog) == []
    assert [food.name for food in rank("sal", catalog)] == [
        "Salmon, Atlantic, farmed, raw"
    ]


def test_every_result_matches_every_word(catalog) -> None:
    for query in ("raw", "r", "a", "whole milk", "b"):
        words = query.split()
        for food in rank(query, catalog):
            tokens = tokenize(food.name)
            assert all(any(t.startswith(w) for t in tokens) for w in words)


def test_dropping_a_word_never_shrinks_results(catalog) -> None:
    narrow = rank("raw chicken", catalog)
    wide = rank("raw", catalog)

    assert {food.name for food in narrow} <= {food.name for food in wide}


def test_score_components() -> None:
    food = Food(name="Chicken Soup", calories_per_100g=36)

    # exact 10 + first token 3 + length bonus 5 - 12 // 15
    assert score(food, ["chicken"]) == 18
    # prefix 5 + first token 3 + length bonus 5
    assert score(food, ["chick"]) == 13
    # exact 10, not first token, length bonus 5
    assert score(food, ["soup"]) == 15
    assert score(food, ["beef"]) is None


def test_ties_keep_catalog_order() -> None:
    catalog = [
        Food(name="Apple red", calories_per_100g=52),
        Food(name="Apple green", calories_per_100g=50),
    ]

    assert rank("apple", catalog) == catalog


def test_results_are_capped() -> None:
    catalog = [Food(name=f"Bean {i}", calories_per_100g=100) for i in range(50)]

    assert len(rank("bean", catalog)) == 30
    assert len(rank("bean", catalog, limit=5)) == 5


def test_food_without_tokens_never_matches() -> None:
    assert rank("a", [Food(name=" , ", calories_per_100g=1)]) == []


def test_search_service_find_and_favorites(catalog) -> None:
    service = FoodSearchService(catalog)

    assert service.find("Butter") == Food(name="Butter", calories_per_100g=717)
    assert service.find("butter") is None
    assert [food.name for food in service.favorites(["Butter", "Apple, raw"])] == [
        "Apple, raw",
        "Butter",
    ]
    assert service.search(None) == catalog[:10]
