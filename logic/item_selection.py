"""Constrained best-item selection with seeded exploration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Callable, Iterator, List, Mapping, Optional, Sequence

from logic.outfit_scoring import calculate_compatibility_score
from models.color_theory import is_belt_shoe_compatible
from models.outfit import CompatibilityScore
from models.wardrobe_item import EnrichedItem
from models.weather import WeatherContext

logger = logging.getLogger(__name__)

STRICT_THRESHOLD = 0.7
MODERATE_THRESHOLD = 0.5
SHORTS_BONUS = 0.15
SHORTLIST_SIZE = 6

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_UINT32_MAX = 0xFFFFFFFF


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _utf16_units(text: str) -> Iterator[int]:
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def hash_to_unit_interval(text: str) -> float:
    """Stable 32-bit FNV-1a hash of ``text`` mapped onto [0, 1]."""

    value = _FNV_OFFSET
    for unit in _utf16_units(text):
        value ^= unit
        value = (value * _FNV_PRIME) & _UINT32_MAX
    return value / _UINT32_MAX


Hasher = Callable[[str], float]


@dataclass(frozen=True)
class SelectionContext:
    weather_context: WeatherContext
    selected_items: Mapping[str, Optional[EnrichedItem]] = field(default_factory=dict)
    exclude_items: AbstractSet[str] = frozenset()
    slot: Optional[str] = None


@dataclass(frozen=True)
class SelectionOptions:
    prefer_shorts: bool = False
    variation_seed: Optional[str] = None
    exploration_level: float = 0.0
    hasher: Hasher = hash_to_unit_interval


@dataclass(frozen=True)
class ScoredCandidate:
    item: EnrichedItem
    score: float
    compatibility: CompatibilityScore


def apply_belt_shoe_constraint(
    candidates: Sequence[EnrichedItem],
    selected_items: Mapping[str, Optional[EnrichedItem]],
    slot: Optional[str],
) -> List[EnrichedItem]:
    """Drop belts that clash with the chosen shoes, or shoes that clash with the chosen belt."""

    if slot == "belt":
        shoes = selected_items.get("shoes")
        if shoes is None:
            return list(candidates)
        return [belt for belt in candidates if is_belt_shoe_compatible(belt.accessory_color, shoes.accessory_color)]
    if slot == "shoes":
        belt = selected_items.get("belt")
        if belt is None:
            return list(candidates)
        return [shoes for shoes in candidates if is_belt_shoe_compatible(belt.accessory_color, shoes.accessory_color)]
    return list(candidates)


def score_candidates(
    candidates: Sequence[EnrichedItem],
    context: SelectionContext,
    prefer_shorts: bool = False,
) -> List[ScoredCandidate]:
    """Score and sort candidates best-first; ties keep their input order."""

    scored: List[ScoredCandidate] = []
    for item in candidates:
        compatibility = calculate_compatibility_score(item, context.weather_context, context.selected_items)
        score = compatibility.total
        if prefer_shorts and context.slot == "pants" and "shorts" in item.name.lower():
            score += SHORTS_BONUS
        scored.append(ScoredCandidate(item=item, score=_clamp(score), compatibility=compatibility))
    scored.sort(key=lambda candidate: -candidate.score)
    return scored


def _weighted_pick(
    strict_matches: List[ScoredCandidate],
    slot: Optional[str],
    options: SelectionOptions,
    exploration: float,
) -> EnrichedItem:
    seed = options.variation_seed
    slot_key = slot or "slot"
    best_score = strict_matches[0].score
    diversity_margin = 0.04 + exploration * 0.18
    shortlist = [c for c in strict_matches if best_score - c.score <= diversity_margin][:SHORTLIST_SIZE]
    if len(shortlist) == 1:
        return shortlist[0].item

    exponent = 2.2 - exploration * 1.3
    weights = []
    for index, candidate in enumerate(shortlist):
        jitter = 0.95 + options.hasher(f"{seed}:{slot_key}:{candidate.item.id}:{index}") * 0.1
        weights.append(max(0.0001, (candidate.score**exponent) * jitter))

    roll = options.hasher(f"{seed}:{slot_key}:roll")
    cursor = roll * sum(weights)
    for candidate, weight in zip(shortlist, weights):
        cursor -= weight
        if cursor <= 0:
            return candidate.item
    return shortlist[-1].item


def select_best_item(
    candidates: Sequence[EnrichedItem],
    context: SelectionContext,
    options: Optional[SelectionOptions] = None,
) -> Optional[EnrichedItem]:
    """Pick the best candidate for ``context.slot``.

    Hard constraints run first (belt/shoe color families, then recently-used
    exclusions, which are ignored if they would leave nothing). Survivors are
    scored and taken from the strict tier (>= 0.7), then the moderate tier
    (>= 0.5), then whatever scores highest. With a variation seed and a
    non-zero exploration level, near-tied strict matches are chosen by a
    seeded weighted draw so the same seed always yields the same pick.
    """

    options = options or SelectionOptions()
    if not candidates:
        return None

    constrained = apply_belt_shoe_constraint(candidates, context.selected_items, context.slot)
    if not constrained:
        logger.debug("No %s candidates survive the belt/shoe constraint", context.slot)
        return None
    if len(constrained) == 1:
        return constrained[0]

    available = [item for item in constrained if item.id not in context.exclude_items]
    to_score = available or constrained

    scored = score_candidates(to_score, context, prefer_shorts=options.prefer_shorts)
    exploration = _clamp(options.exploration_level or 0.0)

    strict_matches = [c for c in scored if c.score >= STRICT_THRESHOLD]
    if strict_matches:
        if not options.variation_seed or exploration == 0 or len(strict_matches) == 1:
            choice = strict_matches[0].item
        else:
            choice = _weighted_pick(strict_matches, context.slot, options, exploration)
        logger.debug("Selected %s for %s from %s strict matches", choice.id, context.slot, len(strict_matches))
        return choice

    moderate_matches = [c for c in scored if c.score >= MODERATE_THRESHOLD]
    if moderate_matches:
        logger.debug("Relaxed to moderate tier for %s", context.slot)
        return moderate_matches[0].item

    logger.debug("Falling back to best available %s (score=%.3f)", context.slot, scored[0].score)
    return scored[0].item


__all__ = [
    "STRICT_THRESHOLD",
    "MODERATE_THRESHOLD",
    "SHORTS_BONUS",
    "SelectionContext",
    "SelectionOptions",
    "ScoredCandidate",
    "hash_to_unit_interval",
    "apply_belt_shoe_constraint",
    "score_candidates",
    "select_best_item",
]
