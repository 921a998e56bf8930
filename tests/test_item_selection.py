"""Tests for constrained best-item selection."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic import item_selection
from logic.item_enrichment import enrich_item
from logic.item_selection import (
    SHORTS_BONUS,
    ScoredCandidate,
    SelectionContext,
    SelectionOptions,
    apply_belt_shoe_constraint,
    hash_to_unit_interval,
    score_candidates,
    select_best_item,
)
from logic.weather_normalization import normalize_weather_context
from models.outfit import CompatibilityScore
from models.wardrobe_item import WardrobeItem

MILD = normalize_weather_context(68)
HOT = normalize_weather_context(95)


def _enriched(item_id: str, name: str, category: str = "Shirt", **kwargs):
    return enrich_item(WardrobeItem(id=item_id, name=name, category=category, **kwargs))


def test_hash_matches_fnv1a_and_is_stable():
    assert hash_to_unit_interval("a") == 0xE40C292C / 0xFFFFFFFF
    assert hash_to_unit_interval("") == 2166136261 / 0xFFFFFFFF
    assert hash_to_unit_interval("seed:full:shirt") == hash_to_unit_interval("seed:full:shirt")
    assert 0.0 <= hash_to_unit_interval("😀 emoji") <= 1.0


def test_empty_candidates_return_none():
    assert select_best_item([], SelectionContext(weather_context=MILD, slot="shirt")) is None


def test_single_candidate_short_circuits_even_when_excluded():
    only = _enriched("s1", "Oxford Shirt")
    context = SelectionContext(weather_context=MILD, exclude_items=frozenset({"s1"}), slot="shirt")
    assert select_best_item([only], context) is only


def test_exclusion_skipped_when_it_would_empty_the_pool():
    first = _enriched("s1", "Oxford Shirt")
    second = _enriched("s2", "Poplin Shirt")
    context = SelectionContext(weather_context=MILD, exclude_items=frozenset({"s1", "s2"}), slot="shirt")
    assert select_best_item([first, second], context) is first


def test_excluded_item_loses_to_weaker_alternative():
    best = _enriched("s1", "Oxford Shirt", season=["Fall"])
    weaker = _enriched("s2", "Red Flannel Shirt", formality_score=1)
    context = SelectionContext(weather_context=MILD, exclude_items=frozenset({"s1"}), slot="shirt")
    assert select_best_item([best, weaker], context) is weaker


def test_belt_constraint_follows_selected_shoes():
    black_belt = _enriched("b1", "Black Leather Belt", "Belt")
    brown_belt = _enriched("b2", "Brown Leather Belt", "Belt")
    brown_shoes = _enriched("f1", "Brown Suede Loafers", "Shoes")
    context = SelectionContext(weather_context=MILD, selected_items={"shoes": brown_shoes}, slot="belt")

    assert apply_belt_shoe_constraint([black_belt, brown_belt], {"shoes": brown_shoes}, "belt") == [brown_belt]
    assert select_best_item([black_belt, brown_belt], context) is brown_belt


def test_shoe_constraint_follows_selected_belt():
    black_belt = _enriched("b1", "Black Leather Belt", "Belt")
    brown_shoes = _enriched("f1", "Brown Loafers", "Shoes")
    navy_shoes = _enriched("f2", "Navy Sneakers", "Shoes")
    remaining = apply_belt_shoe_constraint([brown_shoes, navy_shoes], {"belt": black_belt}, "shoes")
    assert remaining == [navy_shoes]


def test_constraint_leaving_nothing_returns_none():
    black_belt = _enriched("b1", "Black Belt", "Belt")
    charcoal_belt = _enriched("b2", "Charcoal Belt", "Belt")
    brown_shoes = _enriched("f1", "Brown Boots", "Shoes")
    context = SelectionContext(weather_context=MILD, selected_items={"shoes": brown_shoes}, slot="belt")
    assert select_best_item([black_belt, charcoal_belt], context) is None


def test_declared_color_beats_name_for_accessories():
    belt = _enriched("b1", "Black Belt", "Belt", color="brown")
    shoes = _enriched("f1", "Brown Boots", "Shoes")
    assert apply_belt_shoe_constraint([belt], {"shoes": shoes}, "belt") == [belt]


def test_score_candidates_sorts_best_first_and_keeps_tie_order():
    twin_a = _enriched("a", "Oxford Shirt")
    twin_b = _enriched("b", "Poplin Shirt")
    cold_weight = _enriched("c", "Wool Shirt", "Jacket")
    scored = score_candidates([cold_weight, twin_a, twin_b], SelectionContext(weather_context=HOT, slot="shirt"))
    assert [candidate.item.id for candidate in scored] == ["a", "b", "c"]
    assert scored[0].score == scored[1].score


def test_shorts_bonus_applies_only_to_pants():
    chinos = _enriched("p1", "Chino Pants", "Pants", formality_score=4)
    shorts = _enriched("p2", "Linen Shorts", "Pants", formality_score=4)
    pants_context = SelectionContext(weather_context=HOT, slot="pants")

    scored = score_candidates([chinos, shorts], pants_context, prefer_shorts=True)
    assert scored[0].item is shorts
    assert scored[0].score == pytest.approx(scored[1].score + SHORTS_BONUS)
    assert select_best_item([chinos, shorts], pants_context, SelectionOptions(prefer_shorts=True)) is shorts
    assert select_best_item([chinos, shorts], pants_context) is chinos

    shirt_context = SelectionContext(weather_context=HOT, slot="shirt")
    unaffected = score_candidates([chinos, shorts], shirt_context, prefer_shorts=True)
    assert unaffected[0].score == unaffected[1].score


def test_greedy_without_seed_or_exploration():
    first = _enriched("s1", "Oxford Shirt")
    second = _enriched("s2", "Poplin Shirt")
    context = SelectionContext(weather_context=MILD, slot="shirt")
    assert select_best_item([first, second], context, SelectionOptions(exploration_level=1.0)) is first
    assert select_best_item([first, second], context, SelectionOptions(variation_seed="x")) is first


def test_seeded_exploration_uses_injected_hasher():
    first = _enriched("s1", "Oxford Shirt")
    second = _enriched("s2", "Poplin Shirt")
    context = SelectionContext(weather_context=MILD, slot="shirt")

    low_roll = SelectionOptions(variation_seed="seed", exploration_level=0.5, hasher=lambda _: 0.0)
    high_roll = SelectionOptions(variation_seed="seed", exploration_level=0.5, hasher=lambda _: 1.0)
    assert select_best_item([first, second], context, low_roll) is first
    assert select_best_item([first, second], context, high_roll) is second


def test_seeded_exploration_is_reproducible():
    shirts = [_enriched(f"s{index}", f"Shirt {index}") for index in range(5)]
    context = SelectionContext(weather_context=MILD, slot="shirt")
    options = SelectionOptions(variation_seed="2024-05-01", exploration_level=0.8)
    picks = {select_best_item(shirts, context, options).id for _ in range(5)}
    assert len(picks) == 1


def _ranked(*scores: float) -> List[ScoredCandidate]:
    return [
        ScoredCandidate(
            item=_enriched(chr(ord("a") + index), f"Shirt {index}"),
            score=score,
            compatibility=CompatibilityScore.zero(),
        )
        for index, score in enumerate(scores)
    ]


def _fixed_roll(roll: float, jitter: float = 0.5):
    return lambda key: roll if key.endswith(":roll") else jitter


ROLLS = [step / 20 for step in range(21)]


def test_diversity_margin_keeps_distant_strict_matches_out():
    # exploration 0.5 -> margin 0.13: "c" is 0.12 behind the best, "d" 0.14
    ranked = _ranked(0.95, 0.90, 0.83, 0.81)
    picks = {
        item_selection._weighted_pick(ranked, "shirt", SelectionOptions(variation_seed="s", hasher=_fixed_roll(roll)), 0.5).id
        for roll in ROLLS
    }
    assert "d" not in picks
    assert picks == {"a", "b", "c"}

    # exploration 1.0 -> margin 0.22 admits "d"
    widest = SelectionOptions(variation_seed="s", hasher=_fixed_roll(1.0))
    assert item_selection._weighted_pick(ranked, "shirt", widest, 1.0).id == "d"


def test_shortlist_is_capped_at_six_candidates():
    shirts = [_enriched(f"s{index}", "Oxford Shirt") for index in range(8)]
    context = SelectionContext(weather_context=MILD, slot="shirt")
    picks = [
        select_best_item(
            shirts, context, SelectionOptions(variation_seed="seed", exploration_level=1.0, hasher=_fixed_roll(roll))
        ).id
        for roll in ROLLS
    ]
    assert picks[0] == "s0"
    assert picks[-1] == "s5"
    assert set(picks) == {f"s{index}" for index in range(6)}


@pytest.mark.parametrize("exploration, runner_up, exponent", [(1.0, 0.72, 0.9), (0.5, 0.78, 1.55)])
def test_draw_weights_follow_exploration_exponent(exploration, runner_up, exponent):
    ranked = _ranked(0.9, runner_up)
    first_share = 0.9**exponent / (0.9**exponent + runner_up**exponent)

    def pick(roll: float) -> str:
        options = SelectionOptions(variation_seed="s", hasher=_fixed_roll(roll))
        return item_selection._weighted_pick(ranked, "shirt", options, exploration).id

    assert pick(first_share - 0.002) == "a"
    assert pick(first_share + 0.002) == "b"
