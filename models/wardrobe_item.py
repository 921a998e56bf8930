"""Wardrobe item data models and helpers."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from models.color_theory import UNKNOWN_COLOR, accessory_color_family, infer_color
from models.taxonomy import SEASON_TAGS, normalise_tags


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _category_name(raw: Any) -> Optional[str]:
    """Accept either a bare category name or a ``{"name": ...}`` mapping."""

    if isinstance(raw, Mapping):
        raw = raw.get("name")
    if raw is None:
        return None
    name = str(raw).strip()
    return name or None


def _whole_formality(raw: Any) -> int:
    """Accept whole numbers 1-10 (``6``, ``6.0`` or ``"6"``); reject fractions."""

    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"formality_score must be a whole number, got {raw!r}") from exc
    if isinstance(raw, bool) or not value.is_integer():
        raise ValueError(f"formality_score must be a whole number, got {raw!r}")
    if not 1 <= value <= 10:
        raise ValueError(f"formality_score must be between 1 and 10, got {raw!r}")
    return int(value)


@dataclass
class WardrobeItem:
    """Represents an item in the user's wardrobe as handed over by the store."""

    id: str
    name: str
    category: Optional[str] = None
    brand: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    formality_score: Optional[int] = None
    capsule_tags: List[str] = field(default_factory=list)
    season: List[str] = field(default_factory=list)
    image_url: Optional[str] = None
    active: bool = True

    def __post_init__(self) -> None:
        self.category = _category_name(self.category)
        self.capsule_tags = [str(tag).strip() for tag in _ensure_list(self.capsule_tags) if str(tag).strip()]
        self.season = normalise_tags(_ensure_list(self.season), SEASON_TAGS)
        if self.formality_score is not None:
            self.formality_score = _whole_formality(self.formality_score)
        self.active = bool(self.active)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EnrichedItem(WardrobeItem):
    """A wardrobe item plus the metadata inferred for one generation call."""

    formality_band: str = "smart-casual"
    weather_weight: int = 2
    inferred_color: str = "unknown"

    @property
    def accessory_color(self) -> Optional[str]:
        """Color used for the belt/shoe rule.

        A declared color wins when it names a known color, even with modifiers
        ("Dark Brown" reads as brown, "Light Camel" as camel). Otherwise the
        color inferred from the name is used.
        """

        if self.color:
            declared = infer_color(self.color)
            if declared != UNKNOWN_COLOR:
                return declared
            for word in re.findall(r"[a-z]+", self.color.lower()):
                if accessory_color_family(word) != "other":
                    return word
        return None if self.inferred_color == UNKNOWN_COLOR else self.inferred_color


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from loose store payloads."""

    required_fields = ["id", "name"]
    missing = [key for key in required_fields if not metadata.get(key)]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    category = metadata.get("category")
    if category is None:
        category = metadata.get("category_name")

    return WardrobeItem(
        id=str(metadata["id"]),
        name=str(metadata["name"]),
        category=category,
        brand=metadata.get("brand"),
        color=metadata.get("color"),
        material=metadata.get("material"),
        formality_score=metadata.get("formality_score"),
        capsule_tags=_ensure_list(metadata.get("capsule_tags")),
        season=_ensure_list(metadata.get("season")),
        image_url=metadata.get("image_url"),
        active=metadata.get("active", True),
    )


__all__ = ["WardrobeItem", "EnrichedItem", "from_raw_metadata"]
