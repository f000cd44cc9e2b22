"""Food catalog search and relevance ranking."""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from calorie_tracker.domain.foods import Food

RESULT_LIMIT = 30
BROWSE_LIMIT = 10

EXACT_SCORE = 10
PREFIX_SCORE = 5
FIRST_TOKEN_BONUS = 3
LENGTH_BONUS_MAX = 5
LENGTH_BONUS_STEP = 15

_TOKEN_SEPARATORS = re.compile(r"[\s,()/\-]+")


def tokenize(name: str) -> list[str]:
    """Split a food name into lowercase word tokens."""
    return [token for token in _TOKEN_SEPARATORS.split(name.lower()) if token]


def score(food: Food, search_words: Sequence[str]) -> int | None:
    """Score a food against search words, or None if any word is unmatched."""
    tokens = tokenize(food.name)
    if not tokens:
        return None
    total = 0
    for word in search_words:
        if any(token == word for token in tokens):
            total += EXACT_SCORE
        elif any(token.startswith(word) for token in tokens):
            total += PREFIX_SCORE
        else:
            return None
        if tokens[0].startswith(word):
            total += FIRST_TOKEN_BONUS
    total += max(0, LENGTH_BONUS_MAX - len(food.name) // LENGTH_BONUS_STEP)
    return total


def rank(
    query: str,
    catalog: Sequence[Food],
    limit: int = RESULT_LIMIT,
    browse_limit: int = BROWSE_LIMIT,
) -> list[Food]:
    """Return catalog foods matching every query word, best first.

    An empty query returns the head of the catalog unranked.
    """
    search_words = query.lower().split()
    if not search_words:
        return list(catalog[:browse_limit])
    scored: list[tuple[int, Food]] = []
    for food in catalog:
        food_score = score(food, search_words)
        if food_score is not None:
            scored.append((food_score, food))
    # sorted() is stable, so ties keep catalog order.
    scored.sort(key=lambda item: item[0], reverse=True)
    return [food for _, food in scored[:limit]]


@dataclass
class FoodSearchService:
    """Read-only queries over the food catalog."""

    catalog: list[Food]

    def search(self, query: str | None, limit: int = RESULT_LIMIT) -> list[Food]:
        """Rank catalog foods for a free-text query."""
        return rank(query or "", self.catalog, limit=limit)

    def find(self, name: str) -> Food | None:
        """Return the first catalog food with exactly this name."""
        for food in self.catalog:
            if food.name == name:
                return food
        return None

    def favorites(self, names: Iterable[str]) -> list[Food]:
        """Return catalog foods marked as favorite, in catalog order."""
        wanted = set(names)
        return [food for food in self.catalog if food.name in wanted]
