"""Deterministic compatibility scoring for candidate items and outfits."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

from models.color_theory import UNKNOWN_COLOR, is_clashing_pair, is_neutral_color
from models.outfit import SCORE_WEIGHTS, CompatibilityScore
from models.wardrobe_item import EnrichedItem
from models.weather import WeatherContext

WEIGHTS = SCORE_WEIGHTS

_FORMALITY_ALIGNMENT = {0: 1.0, 1: 0.9, 2: 0.75, 3: 0.6, 4: 0.4}


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def current_season(weather_context: WeatherContext) -> str:
    if weather_context.is_cold:
        return "Winter"
    if weather_context.is_hot:
        return "Summer"
    if weather_context.current_temp < 65:
        return "Fall"
    return "Spring"


def calculate_weather_fit(item: EnrichedItem, weather_context: WeatherContext) -> float:
    """Score how well an item's warmth matches the day's target weight."""

    score = 0.5
    weight_diff = abs(item.weather_weight - weather_context.target_weight)
    if weight_diff == 0:
        score += 0.4
    elif weight_diff == 1:
        score += 0.2
    elif weight_diff == 2:
        score -= 0.1
    else:
        score -= 0.3

    if item.season and current_season(weather_context) in item.season:
        score += 0.1
    return _clamp(score)


def calculate_formality_alignment(item1: EnrichedItem, item2: EnrichedItem) -> float:
    score1 = item1.formality_score if item1.formality_score is not None else 5
    score2 = item2.formality_score if item2.formality_score is not None else 5
    diff = abs(score1 - score2)
    if diff in _FORMALITY_ALIGNMENT:
        return _FORMALITY_ALIGNMENT[diff]
    return max(0.0, 0.3 - (diff - 5) * 0.1)


def calculate_color_harmony(color1: str, color2: str) -> float:
    """Neutral pairings score highest, known clashes lowest."""

    if color1 == UNKNOWN_COLOR or color2 == UNKNOWN_COLOR:
        return 0.7
    if color1 == color2:
        return 0.85
    if is_clashing_pair(color1, color2):
        return 0.3
    neutral1, neutral2 = is_neutral_color(color1), is_neutral_color(color2)
    if neutral1 and neutral2:
        return 1.0
    if neutral1 or neutral2:
        return 0.85
    return 0.6


def calculate_capsule_cohesion(item1: EnrichedItem, item2: EnrichedItem) -> float:
    tags1 = item1.capsule_tags or []
    tags2 = item2.capsule_tags or []
    if not tags1 or not tags2:
        return 0.7
    shared = [tag for tag in tags1 if tag in tags2]
    if not shared:
        return 0.5
    if len(shared) == 1:
        return 0.8
    return 0.95


def _mean(values: Sequence[float], default: float) -> float:
    if not values:
        return default
    return sum(values) / len(values)


def calculate_compatibility_score(
    item: EnrichedItem,
    weather_context: WeatherContext,
    selected_items: Optional[Mapping[str, Optional[EnrichedItem]]] = None,
) -> CompatibilityScore:
    """Score ``item`` against the weather and every already-selected item.

    Pairwise dimensions are averaged over the selected items and default to a
    perfect 1.0 when nothing has been selected yet.
    """

    others: List[EnrichedItem] = [other for other in (selected_items or {}).values() if other is not None]
    return CompatibilityScore.from_components(
        weather_fit=calculate_weather_fit(item, weather_context),
        formality_alignment=_mean([calculate_formality_alignment(item, other) for other in others], 1.0),
        color_harmony=_mean(
            [calculate_color_harmony(item.inferred_color, other.inferred_color) for other in others], 1.0
        ),
        capsule_cohesion=_mean([calculate_capsule_cohesion(item, other) for other in others], 1.0),
    )


def average_scores(scores: Iterable[CompatibilityScore]) -> CompatibilityScore:
    """Average each dimension and re-derive the weighted total."""

    collected = list(scores)
    if not collected:
        return CompatibilityScore.zero()
    count = len(collected)
    return CompatibilityScore.from_components(
        weather_fit=sum(score.weather_fit for score in collected) / count,
        formality_alignment=sum(score.formality_alignment for score in collected) / count,
        color_harmony=sum(score.color_harmony for score in collected) / count,
        capsule_cohesion=sum(score.capsule_cohesion for score in collected) / count,
    )


__all__ = [
    "WEIGHTS",
    "current_season",
    "calculate_weather_fit",
    "calculate_formality_alignment",
    "calculate_color_harmony",
    "calculate_capsule_cohesion",
    "calculate_compatibility_score",
    "average_scores",
]
