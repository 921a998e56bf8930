"""Deterministic weather normaliser producing a :class:`WeatherContext`."""

from __future__ import annotations

import math
from typing import Dict, Optional

from models.weather import WeatherContext

# Exclusive Fahrenheit upper bounds per band; at or above "warm" is hot.
TEMP_THRESHOLDS = {"cold": 55, "mild": 75, "warm": 90}
PRECIP_THRESHOLD = 0.35
LARGE_SWING_THRESHOLD = 20

_TARGET_WEIGHTS = {"cold": 3, "mild": 2, "warm": 1, "hot": 0}


def classify_temperature(temp: float) -> Dict[str, bool]:
    """Return the four band flags with exactly one set."""

    if temp < TEMP_THRESHOLDS["cold"]:
        band = "cold"
    elif temp < TEMP_THRESHOLDS["mild"]:
        band = "mild"
    elif temp < TEMP_THRESHOLDS["warm"]:
        band = "warm"
    else:
        band = "hot"
    return {f"is_{name}": name == band for name in ("cold", "mild", "warm", "hot")}


def is_rain_likely(precip_chance: float) -> bool:
    return precip_chance >= PRECIP_THRESHOLD


def calculate_daily_swing(high: float, low: float) -> float:
    if not (math.isfinite(high) and math.isfinite(low)):
        return 0.0
    return abs(high - low)


def has_large_swing(swing: float) -> bool:
    return swing >= LARGE_SWING_THRESHOLD


def map_temperature_to_weight(bands: Dict[str, bool]) -> int:
    for name, weight in _TARGET_WEIGHTS.items():
        if bands.get(f"is_{name}"):
            return weight
    return 1


def _default_context() -> WeatherContext:
    return WeatherContext(
        is_cold=False,
        is_mild=True,
        is_warm=False,
        is_hot=False,
        is_rain_likely=False,
        daily_swing=0.0,
        has_large_swing=False,
        target_weight=1,
        current_temp=65.0,
        high_temp=70.0,
        low_temp=60.0,
        precip_chance=0.0,
    )


def normalize_weather_context(
    current_temp: Optional[float],
    high_temp: Optional[float] = None,
    low_temp: Optional[float] = None,
    precip_chance: Optional[float] = None,
) -> WeatherContext:
    """Turn raw readings into the fixed-shape context used by the generator.

    Missing readings fall back to neutral values: no current temperature at
    all yields a mild day, missing highs and lows are estimated as five
    degrees either side of the current temperature.
    """

    if current_temp is None:
        return _default_context()

    high = high_temp if high_temp is not None else current_temp + 5
    low = low_temp if low_temp is not None else current_temp - 5
    if high < low:
        high, low = low, high
    precip = max(0.0, min(1.0, precip_chance if precip_chance is not None else 0.0))

    bands = classify_temperature(current_temp)
    swing = calculate_daily_swing(high, low)
    return WeatherContext(
        **bands,
        is_rain_likely=is_rain_likely(precip),
        daily_swing=swing,
        has_large_swing=has_large_swing(swing),
        target_weight=map_temperature_to_weight(bands),
        current_temp=float(current_temp),
        high_temp=float(high),
        low_temp=float(low),
        precip_chance=float(precip),
    )


def describe_weather_context(context: WeatherContext) -> str:
    """Human-readable summary, e.g. for logs and CLI output."""

    swing = (
        f" with a large temperature swing ({round(context.daily_swing)}°F)" if context.has_large_swing else ""
    )
    rain = f" and rain likely ({round(context.precip_chance * 100)}%)" if context.is_rain_likely else ""
    return f"{context.band} weather{swing}{rain}"


__all__ = [
    "TEMP_THRESHOLDS",
    "PRECIP_THRESHOLD",
    "LARGE_SWING_THRESHOLD",
    "classify_temperature",
    "is_rain_likely",
    "calculate_daily_swing",
    "has_large_swing",
    "map_temperature_to_weight",
    "normalize_weather_context",
    "describe_weather_context",
]
