"""Outfit assembly and single-slot swapping over an enriched wardrobe snapshot."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from logic.contextual_filtering import (
    determine_included_categories,
    group_items_by_slot,
    has_required_categories,
)
from logic.item_enrichment import enrich_items
from logic.item_selection import SelectionContext, SelectionOptions, select_best_item
from logic.outfit_scoring import average_scores, calculate_compatibility_score
from models.outfit import CompatibilityScore, GeneratedOutfit
from models.taxonomy import CORE_SLOTS, REQUIRED_CATEGORIES, SELECTION_ORDER
from models.wardrobe_item import EnrichedItem, WardrobeItem
from models.weather import WeatherContext

logger = logging.getLogger(__name__)


class OutfitGenerationError(ValueError):
    """Raised when a complete outfit cannot be produced."""


class MissingRequiredCategoriesError(OutfitGenerationError):
    """Raised when the wardrobe lacks a shirt, pants or shoes."""


class InvalidSwapTargetError(OutfitGenerationError):
    """Raised when asked to swap a slot the outfit does not contain."""


class NoAlternativesError(OutfitGenerationError):
    """Raised when a slot has nothing to swap to."""


def _active_items(items: Iterable[WardrobeItem]) -> List[WardrobeItem]:
    return [item for item in items if item.active]


def _seed_for(variation_seed: Optional[str], stage: str, slot: str) -> Optional[str]:
    return f"{variation_seed}:{stage}:{slot}" if variation_seed else None


def _select_slots(
    slots: Sequence[str],
    items_by_slot: Mapping[str, List[EnrichedItem]],
    weather_context: WeatherContext,
    exclude_items: frozenset,
    stage: str,
    variation_seed: Optional[str],
    exploration_level: float,
) -> Dict[str, EnrichedItem]:
    """Fill ``slots`` in order, each pick scored against the picks before it."""

    selected: Dict[str, EnrichedItem] = {}
    for slot in slots:
        candidates = items_by_slot.get(slot)
        if not candidates:
            continue
        choice = select_best_item(
            candidates,
            SelectionContext(
                weather_context=weather_context,
                selected_items=dict(selected),
                exclude_items=exclude_items,
                slot=slot,
            ),
            SelectionOptions(
                prefer_shorts=slot == "pants" and weather_context.is_hot,
                variation_seed=_seed_for(variation_seed, stage, slot),
                exploration_level=exploration_level,
            ),
        )
        if choice is not None:
            selected[slot] = choice
    return selected


def calculate_overall_score(
    selected_items: Mapping[str, EnrichedItem], weather_context: WeatherContext
) -> CompatibilityScore:
    """Average of each item scored against all the other selected items."""

    scores = [
        calculate_compatibility_score(
            item,
            weather_context,
            {other_slot: other for other_slot, other in selected_items.items() if other_slot != slot},
        )
        for slot, item in selected_items.items()
    ]
    return average_scores(scores)


def calculate_pairwise_scores(
    selected_items: Mapping[str, EnrichedItem], weather_context: WeatherContext
) -> Dict[str, CompatibilityScore]:
    """One score per unordered slot pair, keyed ``"slotA-slotB"`` in slot order."""

    entries = list(selected_items.items())
    pairwise: Dict[str, CompatibilityScore] = {}
    for index, (slot1, item1) in enumerate(entries):
        for slot2, item2 in entries[index + 1 :]:
            pairwise[f"{slot1}-{slot2}"] = calculate_compatibility_score(item1, weather_context, {slot2: item2})
    return pairwise


def determine_swappable(
    items_by_slot: Mapping[str, List[EnrichedItem]], selected_items: Mapping[str, EnrichedItem]
) -> Dict[str, bool]:
    return {slot: len(items_by_slot.get(slot, [])) > 1 for slot in selected_items}


def _assemble(
    selected_items: Dict[str, EnrichedItem],
    items_by_slot: Mapping[str, List[EnrichedItem]],
    weather_context: WeatherContext,
) -> GeneratedOutfit:
    missing = [slot for slot in CORE_SLOTS if slot not in selected_items]
    if missing:
        raise OutfitGenerationError(f"Could not select required slots: {', '.join(missing)}")

    return GeneratedOutfit(
        items=dict(selected_items),
        item_ids=[item.id for item in selected_items.values()],
        overall=calculate_overall_score(selected_items, weather_context),
        pairwise=calculate_pairwise_scores(selected_items, weather_context),
        swappable=determine_swappable(items_by_slot, selected_items),
        weather_context=weather_context,
    )


def generate_outfit(
    wardrobe_items: Sequence[WardrobeItem],
    weather_context: WeatherContext,
    exclude_items: Optional[Iterable[str]] = None,
    variation_seed: Optional[str] = None,
    exploration_level: float = 0.0,
) -> GeneratedOutfit:
    """Generate a complete outfit for the given weather.

    Selection runs in two passes: a tentative pass over pants, shirt and shoes
    feeds the inclusion policy (belt inclusion depends on how dressy those
    picks are), then a full ordered pass fills every included slot.

    Raises :class:`MissingRequiredCategoriesError` when the active wardrobe
    lacks a shirt, pants or shoes.
    """

    items = _active_items(wardrobe_items)
    if not has_required_categories(items):
        raise MissingRequiredCategoriesError(
            "Missing required categories. Wardrobe must contain at least one item from each: "
            + ", ".join(REQUIRED_CATEGORIES)
        )

    items_by_slot = group_items_by_slot(enrich_items(items))
    available_slots = set(items_by_slot)
    excluded = frozenset(exclude_items or ())

    core_items = _select_slots(
        CORE_SLOTS, items_by_slot, weather_context, excluded, "core", variation_seed, exploration_level
    )
    included = determine_included_categories(weather_context, available_slots, core_items)
    ordered_slots = [slot for slot in SELECTION_ORDER if slot in included]
    selected = _select_slots(
        ordered_slots, items_by_slot, weather_context, excluded, "full", variation_seed, exploration_level
    )

    outfit = _assemble(selected, items_by_slot, weather_context)
    logger.info(
        "Generated outfit with %s items score=%.3f slots=%s",
        len(outfit.item_ids),
        outfit.overall.total,
        list(outfit.items),
    )
    return outfit


def regenerate_outfit(
    wardrobe_items: Sequence[WardrobeItem],
    weather_context: WeatherContext,
    exclude_items: Optional[Iterable[str]] = None,
    variation_seed: Optional[str] = None,
    exploration_level: float = 0.0,
) -> GeneratedOutfit:
    """Generate again, typically with new exclusions or a new seed for variety."""

    return generate_outfit(
        wardrobe_items,
        weather_context,
        exclude_items=exclude_items,
        variation_seed=variation_seed,
        exploration_level=exploration_level,
    )


def swap_item(
    current_outfit: GeneratedOutfit,
    category: str,
    wardrobe_items: Sequence[WardrobeItem],
    weather_context: WeatherContext,
) -> GeneratedOutfit:
    """Replace the item in one slot, holding every other slot fixed.

    The current item is excluded from the candidates. Returns a new outfit;
    ``current_outfit`` is not modified.
    """

    current_item = current_outfit.items.get(category)
    if current_item is None:
        raise InvalidSwapTargetError(f'Category "{category}" is not present in the current outfit')

    items_by_slot = group_items_by_slot(enrich_items(_active_items(wardrobe_items)))
    candidates = items_by_slot.get(category, [])
    if len(candidates) <= 1:
        raise NoAlternativesError(f'No alternative items available for category "{category}"')

    fixed_items = {slot: item for slot, item in current_outfit.items.items() if slot != category}
    replacement = select_best_item(
        candidates,
        SelectionContext(
            weather_context=weather_context,
            selected_items=fixed_items,
            exclude_items=frozenset({current_item.id}),
            slot=category,
        ),
        SelectionOptions(prefer_shorts=category == "pants" and weather_context.is_hot),
    )
    if replacement is None:
        raise NoAlternativesError(f'Failed to find alternative item for category "{category}"')

    selected = {
        slot: (replacement if slot == category else item) for slot, item in current_outfit.items.items()
    }
    outfit = _assemble(selected, items_by_slot, weather_context)
    logger.info("Swapped %s: %s -> %s", category, current_item.id, replacement.id)
    return outfit


__all__ = [
    "OutfitGenerationError",
    "MissingRequiredCategoriesError",
    "InvalidSwapTargetError",
    "NoAlternativesError",
    "calculate_overall_score",
    "calculate_pairwise_scores",
    "determine_swappable",
    "generate_outfit",
    "regenerate_outfit",
    "swap_item",
]
