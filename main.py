"""Entrypoint to run the outfit stylist locally.

Without arguments the evaluation smoke checks run; with ``--wardrobe`` an
outfit is generated from a JSON list of items and printed as JSON.
"""

import argparse
import json
import sys
from typing import List, Optional

from evaluation.harness import run_smoke_checks
from logic.weather_normalization import normalize_weather_context
from stylist_app.app import OutfitStylistApp
from stylist_app.config import StylistConfig
from tools.wardrobe_store import InMemoryWardrobeStore

CLI_USER = "local"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate an outfit from a wardrobe snapshot")
    parser.add_argument("--wardrobe", help="Path to a JSON list of wardrobe items.")
    parser.add_argument("--temp", type=float, help="Current temperature in Fahrenheit.")
    parser.add_argument("--high", type=float, help="Forecast high in Fahrenheit.")
    parser.add_argument("--low", type=float, help="Forecast low in Fahrenheit.")
    parser.add_argument("--precip", type=float, help="Chance of precipitation between 0 and 1.")
    parser.add_argument("--seed", help="Variation seed for reproducible variety.")
    parser.add_argument("--exploration", type=float, help="Exploration level between 0 and 1.")
    parser.add_argument("--exclude", nargs="*", default=[], metavar="ID", help="Item ids to avoid.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if not args.wardrobe:
        for line in run_smoke_checks():
            print(line)
        return 0

    store = InMemoryWardrobeStore.from_json_file(args.wardrobe, CLI_USER)
    app = OutfitStylistApp(config=StylistConfig.from_env(), store=store)
    weather = normalize_weather_context(args.temp, args.high, args.low, args.precip)
    response = app.generate_for_user(
        user_id=CLI_USER,
        weather=weather,
        exclude_items=args.exclude,
        variation_seed=args.seed,
        exploration_level=args.exploration,
    )
    response.pop("generated", None)
    print(json.dumps(response, indent=2, default=str))
    return 0 if response.get("status") == "ok" else 1


if __name__ == "__main__":
    sys.exit(main())
