"""Infer generation metadata (formality band, warmth, color) for wardrobe items."""

from __future__ import annotations

import logging
import math
from dataclasses import fields
from typing import Iterable, List, Optional, Sequence

from models.color_theory import infer_color
from models.taxonomy import (
    CATEGORY_BASE_WEIGHTS,
    DEFAULT_WEATHER_WEIGHT,
    SEASON_WEIGHT_ADJUSTMENTS,
)
from models.wardrobe_item import EnrichedItem, WardrobeItem

logger = logging.getLogger(__name__)

_BASE_FIELDS = tuple(f.name for f in fields(WardrobeItem))


def classify_formality_band(formality_score: Optional[float]) -> str:
    """Classify a 1-10 formality score into casual, smart-casual or refined.

    Unscored items are treated as smart-casual; out-of-range scores are
    clamped first.
    """

    if formality_score is None:
        return "smart-casual"
    score = max(1, min(10, formality_score))
    if score <= 3:
        return "casual"
    if score <= 6:
        return "smart-casual"
    return "refined"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def infer_weather_weight(category_name: Optional[str], season_tags: Optional[Sequence[str]]) -> int:
    """Infer a 0-3 warmth weight from the category and the item's season tags.

    The category table gives the base weight; recognised season tags shift it
    by their average adjustment (Summer lighter, Winter heavier).
    """

    weight: float = DEFAULT_WEATHER_WEIGHT
    if category_name and category_name in CATEGORY_BASE_WEIGHTS:
        weight = CATEGORY_BASE_WEIGHTS[category_name]

    adjustments = [SEASON_WEIGHT_ADJUSTMENTS[tag] for tag in (season_tags or []) if tag in SEASON_WEIGHT_ADJUSTMENTS]
    if adjustments:
        weight += sum(adjustments) / len(adjustments)

    return max(0, min(3, _round_half_up(weight)))


def enrich_item(item: WardrobeItem) -> EnrichedItem:
    """Return a new :class:`EnrichedItem`; the input is left untouched."""

    base = {name: getattr(item, name) for name in _BASE_FIELDS}
    base["capsule_tags"] = list(item.capsule_tags)
    base["season"] = list(item.season)
    enriched = EnrichedItem(
        **base,
        formality_band=classify_formality_band(item.formality_score),
        weather_weight=infer_weather_weight(item.category, item.season),
        inferred_color=infer_color(item.name),
    )
    logger.debug(
        "Enriched item %s band=%s weight=%s color=%s",
        enriched.id,
        enriched.formality_band,
        enriched.weather_weight,
        enriched.inferred_color,
    )
    return enriched


def enrich_items(items: Iterable[WardrobeItem]) -> List[EnrichedItem]:
    return [enrich_item(item) for item in items]


__all__ = ["classify_formality_band", "infer_weather_weight", "enrich_item", "enrich_items"]
