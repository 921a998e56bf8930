"""Generated outfit and compatibility score schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from models.wardrobe_item import EnrichedItem
from models.weather import WeatherContext

SCORE_WEIGHTS = {
    "weather_fit": 0.4,
    "formality_alignment": 0.3,
    "color_harmony": 0.2,
    "capsule_cohesion": 0.1,
}


@dataclass(frozen=True)
class CompatibilityScore:
    weather_fit: float
    formality_alignment: float
    color_harmony: float
    capsule_cohesion: float
    total: float

    @classmethod
    def from_components(
        cls,
        weather_fit: float,
        formality_alignment: float,
        color_harmony: float,
        capsule_cohesion: float,
    ) -> "CompatibilityScore":
        """Build a score whose total is the fixed weighted combination."""

        total = (
            weather_fit * SCORE_WEIGHTS["weather_fit"]
            + formality_alignment * SCORE_WEIGHTS["formality_alignment"]
            + color_harmony * SCORE_WEIGHTS["color_harmony"]
            + capsule_cohesion * SCORE_WEIGHTS["capsule_cohesion"]
        )
        return cls(
            weather_fit=weather_fit,
            formality_alignment=formality_alignment,
            color_harmony=color_harmony,
            capsule_cohesion=capsule_cohesion,
            total=total,
        )

    @classmethod
    def zero(cls) -> "CompatibilityScore":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0)

    def to_dict(self) -> Dict[str, float]:
        return {
            "weather_fit": self.weather_fit,
            "formality_alignment": self.formality_alignment,
            "color_harmony": self.color_harmony,
            "capsule_cohesion": self.capsule_cohesion,
            "total": self.total,
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GeneratedOutfit:
    """A complete outfit keyed by slot, with the scores that justified it.

    ``items`` preserves selection order, which is also the order used for
    ``item_ids`` and pairwise score keys.
    """

    items: Dict[str, EnrichedItem]
    item_ids: List[str]
    overall: CompatibilityScore
    pairwise: Dict[str, CompatibilityScore]
    swappable: Dict[str, bool]
    weather_context: WeatherContext
    generated_at: datetime = field(default_factory=_utcnow, compare=False)

    @property
    def shirt(self) -> EnrichedItem:
        return self.items["shirt"]

    @property
    def pants(self) -> EnrichedItem:
        return self.items["pants"]

    @property
    def shoes(self) -> EnrichedItem:
        return self.items["shoes"]

    def get(self, slot: str) -> Optional[EnrichedItem]:
        return self.items.get(slot)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": {slot: item.to_dict() for slot, item in self.items.items()},
            "item_ids": list(self.item_ids),
            "scores": {
                "overall": self.overall.to_dict(),
                "pairwise": {key: score.to_dict() for key, score in self.pairwise.items()},
            },
            "swappable": dict(self.swappable),
            "weather_context": self.weather_context.to_dict(),
            "generated_at": self.generated_at.isoformat(),
        }


__all__ = ["SCORE_WEIGHTS", "CompatibilityScore", "GeneratedOutfit"]
