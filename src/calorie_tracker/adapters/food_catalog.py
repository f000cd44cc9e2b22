"""Loader for the static food catalog."""

import json
import logging
from pathlib import Path

from calorie_tracker.domain.foods import Food

SAMPLE_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "foods.json"

_logger = logging.getLogger(__name__)


def parse_catalog(payload: object) -> list[Food]:
    """Parse catalog records, skipping any that are malformed."""
    if not isinstance(payload, list):
        raise ValueError("Food catalog must be a JSON array")
    foods: list[Food] = []
    for record in payload:
        if not isinstance(record, dict):
            continue
        try:
            foods.append(Food.from_dict(record))
        except ValueError:
            _logger.warning("Skipping malformed catalog record: %r", record)
    return foods


def load_catalog(path: Path | None = None) -> list[Food]:
    """Load the catalog from a JSON file, or the bundled sample catalog."""
    text = (path or SAMPLE_CATALOG_PATH).read_text(encoding="utf-8")
    foods = parse_catalog(json.loads(text))
    _logger.info("Loaded food catalog: foods=%s", len(foods))
    return foods
