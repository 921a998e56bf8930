"""Evaluation scenarios exercising weather bands, exclusions and accessory rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class EvaluationScenario:
    name: str
    description: str
    weather_readings: Dict[str, float]
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]
    exclude_items: List[str] = field(default_factory=list)
    variation_seed: Optional[str] = None
    exploration_level: float = 0.0


def _item(
    item_id: str,
    name: str,
    category: str,
    formality: Optional[int] = None,
    **extra: object,
) -> Dict[str, object]:
    return {
        "id": item_id,
        "name": name,
        "category": category,
        "formality_score": formality,
        "image_url": f"https://example.com/{item_id}.jpg",
        **extra,
    }


def _office_basics() -> List[Dict[str, object]]:
    return [
        _item("shirt_oxford", "White Oxford Shirt", "Shirt", 7, capsule_tags=["office"]),
        _item("pants_wool", "Charcoal Wool Pants", "Pants", 6, capsule_tags=["office"]),
        _item("shoes_derby", "Black Derby Shoes", "Shoes", 6, capsule_tags=["office"]),
    ]


SCENARIOS = [
    EvaluationScenario(
        name="belt_matches_shoes",
        description="Dress pants pull in a belt; black shoes rule out the brown belt.",
        weather_readings={"current_temp": 80, "high_temp": 84, "low_temp": 72, "precip_chance": 0.1},
        wardrobe_items=_office_basics()
        + [
            _item("belt_brown", "Brown Leather Belt", "Belt", 6),
            _item("belt_black", "Black Leather Belt", "Belt", 6),
        ],
        expectations={"expected_items": {"belt": "belt_black"}, "included_slots": ["belt"]},
    ),
    EvaluationScenario(
        name="hot_day_prefers_shorts",
        description="Hot afternoon with otherwise equal chinos and shorts.",
        weather_readings={"current_temp": 95, "high_temp": 99, "low_temp": 80, "precip_chance": 0.0},
        wardrobe_items=[
            _item("shirt_linen", "Linen Camp Shirt", "Shirt", 4),
            _item("pants_chino", "Chino Pants", "Pants", 4),
            _item("pants_shorts", "Linen Shorts", "Pants", 4),
            _item("shoes_canvas", "Canvas Sneakers", "Shoes", 4),
        ],
        expectations={"expected_items": {"pants": "pants_shorts"}, "absent_slots": ["belt", "undershirt"]},
    ),
    EvaluationScenario(
        name="excluded_shirt_rotates",
        description="Yesterday's shirt is excluded, so the only other shirt is worn.",
        weather_readings={"current_temp": 68, "high_temp": 72, "low_temp": 58, "precip_chance": 0.2},
        wardrobe_items=_office_basics()
        + [_item("shirt_flannel", "Red Flannel Shirt", "Shirt", 2, capsule_tags=["weekend"])],
        exclude_items=["shirt_oxford"],
        expectations={"expected_items": {"shirt": "shirt_flannel"}},
    ),
    EvaluationScenario(
        name="cold_rain_layers",
        description="Cold, wet day layering a jacket and undershirt over casual basics.",
        weather_readings={"current_temp": 41, "high_temp": 48, "low_temp": 27, "precip_chance": 0.6},
        wardrobe_items=[
            _item("shirt_flannel", "Green Flannel Shirt", "Shirt", 3, season=["Fall", "Winter"]),
            _item("pants_jeans", "Navy Jeans", "Pants", 4),
            _item("shoes_boots", "Brown Chelsea Boots", "Shoes", 4, season=["Winter"]),
            _item("jacket_parka", "Olive Parka", "Jacket", 3, season=["Winter"]),
            _item("undershirt_tee", "White Undershirt", "Undershirt", 2),
            _item("watch_field", "Field Watch", "Watch", 4),
            _item("belt_tan", "Tan Canvas Belt", "Belt", 3),
        ],
        variation_seed="2024-01-10",
        exploration_level=0.5,
        expectations={"included_slots": ["jacket", "undershirt", "watch"], "absent_slots": ["belt"]},
    ),
    EvaluationScenario(
        name="missing_shoes",
        description="A wardrobe without shoes cannot produce an outfit.",
        weather_readings={"current_temp": 70},
        wardrobe_items=[
            _item("shirt_oxford", "White Oxford Shirt", "Shirt", 7),
            _item("pants_wool", "Charcoal Wool Pants", "Pants", 6),
        ],
        expectations={"status": "error"},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
