"""Canonical taxonomy definitions for wardrobe items.

This module centralises the category names the wardrobe store hands us, the
outfit slots they map onto and the lookup tables used by enrichment. Every
table here is built once at import and only ever read afterwards.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

# Outfit slots in the order they are filled during generation.
SELECTION_ORDER: Tuple[str, ...] = (
    "pants",
    "shirt",
    "shoes",
    "jacket",
    "overshirt",
    "undershirt",
    "belt",
    "watch",
)

CORE_SLOTS: Tuple[str, ...] = ("pants", "shirt", "shoes")
REQUIRED_CATEGORIES: Tuple[str, ...] = ("Shirt", "Pants", "Shoes")

CATEGORY_TO_SLOT: Dict[str, str] = {
    "Jacket": "jacket",
    "Overshirt": "overshirt",
    "Shirt": "shirt",
    "Undershirt": "undershirt",
    "Pants": "pants",
    "Shoes": "shoes",
    "Belt": "belt",
    "Watch": "watch",
}

SEASON_TAGS = ["All", "Summer", "Winter", "Spring", "Fall"]

# Warmth contributed by a garment type: 0 minimal, 3 heavy coverage.
CATEGORY_BASE_WEIGHTS: Dict[str, int] = {
    "Jacket": 3,
    "Coat": 3,
    "Blazer": 2,
    "Overshirt": 2,
    "Shirt": 2,
    "T-Shirt": 0,
    "Polo": 1,
    "Sweater": 2,
    "Cardigan": 2,
    "Undershirt": 1,
    "Pants": 2,
    "Jeans": 2,
    "Shorts": 0,
    "Chinos": 2,
    "Shoes": 2,
    "Boots": 3,
    "Sneakers": 1,
    "Sandals": 0,
    "Loafers": 1,
    "Belt": 0,
    "Watch": 0,
    "Tie": 0,
    "Pocket Square": 0,
}
DEFAULT_WEATHER_WEIGHT = 2

SEASON_WEIGHT_ADJUSTMENTS: Dict[str, int] = {
    "Summer": -1,
    "Winter": 1,
    "Spring": 0,
    "Fall": 0,
}

FORMALITY_BANDS = ["casual", "smart-casual", "refined"]

COLOR_KEYWORDS: Tuple[str, ...] = (
    "black",
    "white",
    "grey",
    "gray",
    "navy",
    "blue",
    "cream",
    "khaki",
    "brown",
    "tan",
    "green",
    "red",
    "burgundy",
    "olive",
    "charcoal",
)

# Spelling variants collapse onto one canonical keyword.
COLOR_ALIASES: Dict[str, str] = {"gray": "grey"}

NEUTRAL_COLORS: FrozenSet[str] = frozenset(
    {"black", "white", "grey", "navy", "cream", "khaki", "brown", "tan", "charcoal", "unknown"}
)

CLASHING_COLOR_PAIRS: FrozenSet[FrozenSet[str]] = frozenset(
    frozenset(pair)
    for pair in (
        ("red", "green"),
        ("red", "burgundy"),
        ("blue", "green"),
        ("brown", "black"),
    )
)

BLACK_FAMILY: FrozenSet[str] = frozenset({"black", "charcoal", "grey"})
BROWN_FAMILY: FrozenSet[str] = frozenset(
    {"brown", "tan", "khaki", "camel", "chocolate", "beige", "taupe", "stone", "cream"}
)


def slot_for_category(category_name: Optional[str]) -> Optional[str]:
    """Return the outfit slot for a category name, or ``None`` when unmapped."""

    if not category_name:
        return None
    return CATEGORY_TO_SLOT.get(category_name)


def normalize_color_name(raw_string: str) -> str:
    """Map a raw color string to a canonical lowercase color name."""

    key = raw_string.strip().lower()
    return COLOR_ALIASES.get(key, key)


def normalise_tags(values: Iterable[str], allowed: List[str]) -> List[str]:
    """Deduplicate tags, keeping only those in the allowed set (case-insensitive)."""

    lookup = {tag.lower(): tag for tag in allowed}
    normalised = []
    seen = set()
    for value in values:
        key = lookup.get(str(value).strip().lower())
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "SELECTION_ORDER",
    "CORE_SLOTS",
    "REQUIRED_CATEGORIES",
    "CATEGORY_TO_SLOT",
    "SEASON_TAGS",
    "CATEGORY_BASE_WEIGHTS",
    "DEFAULT_WEATHER_WEIGHT",
    "SEASON_WEIGHT_ADJUSTMENTS",
    "FORMALITY_BANDS",
    "COLOR_KEYWORDS",
    "COLOR_ALIASES",
    "NEUTRAL_COLORS",
    "CLASHING_COLOR_PAIRS",
    "BLACK_FAMILY",
    "BROWN_FAMILY",
    "slot_for_category",
    "normalize_color_name",
    "normalise_tags",
]
