"""Slot resolution and weather-driven category inclusion."""

from __future__ import annotations

import logging
from typing import AbstractSet, Dict, Iterable, List, Mapping, Optional

from models.taxonomy import REQUIRED_CATEGORIES, slot_for_category
from models.wardrobe_item import EnrichedItem, WardrobeItem
from models.weather import WeatherContext

logger = logging.getLogger(__name__)

BELT_PANTS_FORMALITY = 5
BELT_SHOES_FORMALITY = 6


def has_required_categories(items: Iterable[WardrobeItem]) -> bool:
    """True when the wardrobe holds at least one Shirt, Pants and Shoes item."""

    categories = {item.category for item in items if item.category}
    return set(REQUIRED_CATEGORIES).issubset(categories)


def group_items_by_slot(items: Iterable[EnrichedItem]) -> Dict[str, List[EnrichedItem]]:
    """Bucket items by outfit slot, preserving input order within each slot.

    Items with a missing or unmapped category are dropped.
    """

    grouped: Dict[str, List[EnrichedItem]] = {}
    dropped = 0
    for item in items:
        slot = slot_for_category(item.category)
        if slot is None:
            dropped += 1
            continue
        grouped.setdefault(slot, []).append(item)
    if dropped:
        logger.debug("Dropped %s items without an outfit slot", dropped)
    return grouped


def _formality(item: Optional[EnrichedItem]) -> int:
    if item is None or item.formality_score is None:
        return 0
    return item.formality_score


def determine_included_categories(
    weather_context: WeatherContext,
    available_slots: AbstractSet[str],
    core_selections: Mapping[str, Optional[EnrichedItem]],
) -> List[str]:
    """Decide which slots take part in this outfit.

    Core slots always participate when stocked. A jacket (or, failing that,
    an overshirt) joins when the warmth target is two or more, an undershirt
    unless it is hot, a belt only when the tentatively chosen pants or shoes
    are dressy enough, and a watch whenever one exists.
    """

    included: List[str] = [slot for slot in ("shirt", "pants", "shoes") if slot in available_slots]

    if weather_context.target_weight >= 2:
        if "jacket" in available_slots:
            included.append("jacket")
        elif "overshirt" in available_slots:
            included.append("overshirt")

    if not weather_context.is_hot and "undershirt" in available_slots:
        included.append("undershirt")

    if "belt" in available_slots:
        pants_formal = _formality(core_selections.get("pants")) >= BELT_PANTS_FORMALITY
        shoes_formal = _formality(core_selections.get("shoes")) >= BELT_SHOES_FORMALITY
        if pants_formal or shoes_formal:
            included.append("belt")

    if "watch" in available_slots:
        included.append("watch")

    logger.debug("Included categories for %s weather: %s", weather_context.band, included)
    return included


__all__ = [
    "BELT_PANTS_FORMALITY",
    "BELT_SHOES_FORMALITY",
    "has_required_categories",
    "group_items_by_slot",
    "determine_included_categories",
]
