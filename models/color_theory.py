"""Lightweight color helpers for deterministic outfit selection."""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Pattern, Tuple

from models.taxonomy import (
    BLACK_FAMILY,
    BROWN_FAMILY,
    CLASHING_COLOR_PAIRS,
    COLOR_ALIASES,
    COLOR_KEYWORDS,
    NEUTRAL_COLORS,
    normalize_color_name,
)

logger = logging.getLogger(__name__)

UNKNOWN_COLOR = "unknown"

_KEYWORD_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
    (keyword, re.compile(rf"\b{keyword}\b", re.IGNORECASE)) for keyword in COLOR_KEYWORDS
)


def get_supported_color_keywords() -> List[str]:
    """Return every keyword recognised by :func:`infer_color`."""

    return list(COLOR_KEYWORDS)


def infer_color(name: object) -> str:
    """Infer a color keyword from an item name.

    Matching is whole-word and case-insensitive. When several keywords occur,
    the one appearing first in the name wins, so "Navy/White Striped Shirt"
    resolves to navy.
    """

    if not isinstance(name, str) or not name.strip():
        return UNKNOWN_COLOR

    best: Optional[Tuple[int, str]] = None
    for keyword, pattern in _KEYWORD_PATTERNS:
        match = pattern.search(name)
        if match and (best is None or match.start() < best[0]):
            best = (match.start(), keyword)
    if best is None:
        return UNKNOWN_COLOR
    return COLOR_ALIASES.get(best[1], best[1])


def is_neutral_color(color: str) -> bool:
    return normalize_color_name(color) in NEUTRAL_COLORS


def is_clashing_pair(color1: str, color2: str) -> bool:
    return frozenset((color1, color2)) in CLASHING_COLOR_PAIRS


def accessory_color_family(color: Optional[str]) -> str:
    """Classify a color into the black, brown or other accessory family."""

    if not color:
        return "other"
    key = normalize_color_name(color)
    if key in BLACK_FAMILY:
        return "black"
    if key in BROWN_FAMILY:
        return "brown"
    return "other"


def is_belt_shoe_compatible(belt_color: Optional[str], shoe_color: Optional[str]) -> bool:
    """Black leather does not go with brown leather; everything else passes."""

    families = {accessory_color_family(belt_color), accessory_color_family(shoe_color)}
    result = families != {"black", "brown"}
    logger.debug("belt/shoe check (%s, %s) -> %s", belt_color, shoe_color, result)
    return result


__all__ = [
    "UNKNOWN_COLOR",
    "get_supported_color_keywords",
    "infer_color",
    "is_neutral_color",
    "is_clashing_pair",
    "accessory_color_family",
    "is_belt_shoe_compatible",
]
