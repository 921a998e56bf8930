"""Outfit stylist app bootstrap and request entry points."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from logic.outfit_builder import OutfitGenerationError, regenerate_outfit, swap_item
from logic.validation import GenerationRequest, SwapRequest, WeatherContextPayload, validation_failure
from logic.weather_normalization import describe_weather_context
from models.outfit import GeneratedOutfit
from models.weather import WeatherContext
from stylist_app.config import StylistConfig
from stylist_app.logging_config import configure_logging, get_logger, log_event, operation_context
from tools.observability import instrument_tool
from tools.wardrobe_store import InMemoryWardrobeStore, WardrobeStore

LOGGER = get_logger(__name__)


def _generation_invalid(exc) -> Dict[str, Any]:
    return validation_failure("Invalid outfit generation request", exc)


def _swap_invalid(exc) -> Dict[str, Any]:
    return validation_failure("Invalid outfit swap request", exc)


class OutfitStylistApp:
    """Wires config, logging and the wardrobe store to the outfit generator."""

    def __init__(self, config: StylistConfig | None = None, store: WardrobeStore | None = None) -> None:
        self.config = config or StylistConfig.from_env()
        configure_logging(self.config.log_level)
        self.store = store or InMemoryWardrobeStore()

    def _ok(self, outfit: GeneratedOutfit) -> Dict[str, Any]:
        return {
            "status": "ok",
            "outfit": outfit.to_dict(),
            "generated": outfit,
            "weather_summary": describe_weather_context(outfit.weather_context),
        }

    def _error(self, method: str, user_id: str, exc: OutfitGenerationError) -> Dict[str, Any]:
        log_event(
            LOGGER,
            level=logging.WARNING,
            event="app_call_rejected",
            method=method,
            user_id=user_id,
            error_type=type(exc).__name__,
            details=str(exc),
        )
        return {"status": "error", "error_type": type(exc).__name__, "message": str(exc)}

    @instrument_tool("generate_for_user", input_model=GenerationRequest, on_validation_error=_generation_invalid)
    def generate_for_user(
        self,
        *,
        user_id: str,
        weather: WeatherContextPayload | WeatherContext | Dict[str, Any],
        exclude_items: Optional[List[str]] = None,
        variation_seed: Optional[str] = None,
        exploration_level: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Generate an outfit from the user's active wardrobe.

        ``exploration_level`` falls back to the configured default when unset.
        """

        if exploration_level is None:
            exploration_level = self.config.default_exploration_level
        weather_context = weather.to_context()

        with operation_context("app:generate_for_user", LOGGER, user_id=user_id):
            items = self.store.list_items_for_user(user_id, active_only=True)
            try:
                outfit = regenerate_outfit(
                    items,
                    weather_context,
                    exclude_items=exclude_items,
                    variation_seed=variation_seed,
                    exploration_level=exploration_level,
                )
            except OutfitGenerationError as exc:
                return self._error("generate_for_user", user_id, exc)

            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                method="generate_for_user",
                user_id=user_id,
                item_ids=outfit.item_ids,
                score=round(outfit.overall.total, 4),
            )
            return self._ok(outfit)

    @instrument_tool("swap_for_user", input_model=SwapRequest, on_validation_error=_swap_invalid)
    def swap_for_user(
        self,
        *,
        user_id: str,
        outfit: GeneratedOutfit,
        category: str,
        weather: WeatherContextPayload | WeatherContext | Dict[str, Any],
    ) -> Dict[str, Any]:
        """Swap one slot of ``outfit`` for the next best item in the user's wardrobe."""

        weather_context = weather.to_context()

        with operation_context("app:swap_for_user", LOGGER, user_id=user_id, category=category):
            items = self.store.list_items_for_user(user_id, active_only=True)
            try:
                swapped = swap_item(outfit, category, items, weather_context)
            except OutfitGenerationError as exc:
                return self._error("swap_for_user", user_id, exc)

            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                method="swap_for_user",
                user_id=user_id,
                category=category,
                replaced=outfit.items[category].id,
                replacement=swapped.items[category].id,
            )
            return self._ok(swapped)


__all__ = ["OutfitStylistApp"]
