"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

from typing import Any, Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from logic.weather_normalization import normalize_weather_context
from models.taxonomy import CORE_SLOTS
from stylist_app.app import OutfitStylistApp
from stylist_app.config import StylistConfig
from tools.wardrobe_store import InMemoryWardrobeStore


def _evaluate_expectations(expectations: Dict[str, object], payload: Dict[str, Any]) -> Dict[str, bool]:
    checks: Dict[str, bool] = {}
    expected_status = expectations.get("status", "ok")
    checks["status"] = payload.get("status") == expected_status
    if expected_status != "ok" or not checks["status"]:
        return checks

    items = payload["outfit"]["items"]
    slots = list(items)
    checks["core_slots"] = all(slot in items for slot in CORE_SLOTS)
    checks["pairwise_count"] = len(payload["outfit"]["scores"]["pairwise"]) == len(slots) * (len(slots) - 1) // 2

    for slot, item_id in dict(expectations.get("expected_items", {})).items():
        checks[f"expected_{slot}"] = items.get(slot, {}).get("id") == item_id
    for slot in expectations.get("included_slots", []):
        checks[f"includes_{slot}"] = slot in items
    for slot in expectations.get("absent_slots", []):
        checks[f"omits_{slot}"] = slot not in items
    return checks


def run_scenario(scenario: EvaluationScenario, user_id: str = "eval_user") -> Dict[str, object]:
    store = InMemoryWardrobeStore({user_id: scenario.wardrobe_items})
    app = OutfitStylistApp(config=StylistConfig(), store=store)
    weather = normalize_weather_context(**scenario.weather_readings)

    def generate() -> Dict[str, Any]:
        return app.generate_for_user(
            user_id=user_id,
            weather=weather,
            exclude_items=scenario.exclude_items,
            variation_seed=scenario.variation_seed,
            exploration_level=scenario.exploration_level,
        )

    response = generate()
    checks = _evaluate_expectations(scenario.expectations, response)
    if response.get("status") == "ok":
        checks["deterministic"] = generate()["outfit"]["item_ids"] == response["outfit"]["item_ids"]

    return {
        "scenario": scenario.name,
        "passed": all(checks.values()),
        "checks": checks,
        "item_ids": response.get("outfit", {}).get("item_ids", []),
        "response": response,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
