"""Tests for slot resolution and category inclusion."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.contextual_filtering import (
    determine_included_categories,
    group_items_by_slot,
    has_required_categories,
)
from logic.item_enrichment import enrich_item
from logic.weather_normalization import normalize_weather_context
from models.taxonomy import slot_for_category
from models.wardrobe_item import WardrobeItem

ALL_SLOTS = {"shirt", "pants", "shoes", "jacket", "overshirt", "undershirt", "belt", "watch"}


def _enriched(item_id: str, category, formality=None):
    return enrich_item(WardrobeItem(id=item_id, name=item_id, category=category, formality_score=formality))


def test_slot_for_category():
    assert slot_for_category("Overshirt") == "overshirt"
    assert slot_for_category("Scarf") is None
    assert slot_for_category(None) is None


def test_group_items_by_slot_drops_unmapped_items():
    items = [
        _enriched("s1", "Shirt"),
        _enriched("x1", "Scarf"),
        _enriched("n1", None),
        _enriched("s2", "Shirt"),
        _enriched("p1", "Pants"),
    ]
    grouped = group_items_by_slot(items)
    assert {slot: [item.id for item in bucket] for slot, bucket in grouped.items()} == {
        "shirt": ["s1", "s2"],
        "pants": ["p1"],
    }


def test_has_required_categories():
    wardrobe = [
        WardrobeItem(id="s", name="Shirt", category="Shirt"),
        WardrobeItem(id="p", name="Pants", category="Pants"),
    ]
    assert not has_required_categories(wardrobe)
    wardrobe.append(WardrobeItem(id="f", name="Loafers", category="Shoes"))
    assert has_required_categories(wardrobe)


def test_mild_weather_includes_jacket_before_overshirt_and_undershirt():
    included = determine_included_categories(normalize_weather_context(65), ALL_SLOTS, {})
    assert included == ["shirt", "pants", "shoes", "jacket", "undershirt", "watch"]


def test_overshirt_stands_in_for_missing_jacket():
    slots = ALL_SLOTS - {"jacket"}
    included = determine_included_categories(normalize_weather_context(40), slots, {})
    assert "overshirt" in included
    assert "jacket" not in included


def test_warm_weather_skips_layers():
    included = determine_included_categories(normalize_weather_context(80), ALL_SLOTS, {})
    assert "jacket" not in included
    assert "overshirt" not in included
    assert "undershirt" in included


def test_hot_weather_skips_undershirt():
    included = determine_included_categories(normalize_weather_context(95), ALL_SLOTS, {})
    assert "undershirt" not in included


def test_belt_depends_on_core_formality():
    weather = normalize_weather_context(80)

    def belt_included(pants_formality, shoes_formality):
        core = {
            "pants": _enriched("p", "Pants", pants_formality),
            "shoes": _enriched("f", "Shoes", shoes_formality),
        }
        return "belt" in determine_included_categories(weather, ALL_SLOTS, core)

    assert belt_included(5, 1)
    assert belt_included(4, 6)
    assert not belt_included(4, 5)
    assert not belt_included(None, None)
    assert "belt" not in determine_included_categories(weather, ALL_SLOTS, {})


def test_unstocked_slots_are_never_included():
    included = determine_included_categories(normalize_weather_context(40), {"shirt", "shoes"}, {})
    assert included == ["shirt", "shoes"]
