"""Tests for turning raw readings into a weather context."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.weather_normalization import (
    classify_temperature,
    describe_weather_context,
    has_large_swing,
    is_rain_likely,
    normalize_weather_context,
)
from models.weather import WeatherContext


@pytest.mark.parametrize(
    "temp, band",
    [(20, "is_cold"), (54.9, "is_cold"), (55, "is_mild"), (74.9, "is_mild"), (75, "is_warm"), (89.9, "is_warm"), (90, "is_hot")],
)
def test_classify_temperature_sets_exactly_one_band(temp, band):
    bands = classify_temperature(temp)
    assert bands[band] is True
    assert sum(bands.values()) == 1


def test_rain_and_swing_thresholds():
    assert is_rain_likely(0.35)
    assert not is_rain_likely(0.34)
    assert has_large_swing(20)
    assert not has_large_swing(19.9)


def test_normalize_targets_weight_by_band():
    assert normalize_weather_context(40).target_weight == 3
    assert normalize_weather_context(65).target_weight == 2
    assert normalize_weather_context(80).target_weight == 1
    assert normalize_weather_context(95).target_weight == 0


def test_normalize_fills_missing_readings():
    context = normalize_weather_context(70)
    assert context.high_temp == 75
    assert context.low_temp == 65
    assert context.precip_chance == 0
    assert context.daily_swing == 10
    assert not context.has_large_swing


def test_normalize_without_current_temperature_is_mild():
    context = normalize_weather_context(None)
    assert context.is_mild
    assert context.target_weight == 1
    assert context.current_temp == 65


def test_normalize_swaps_inverted_range_and_clamps_precipitation():
    context = normalize_weather_context(60, high_temp=50, low_temp=80, precip_chance=1.4)
    assert (context.high_temp, context.low_temp) == (80, 50)
    assert context.daily_swing == 30
    assert context.has_large_swing
    assert context.precip_chance == 1.0
    assert context.is_rain_likely


def test_describe_weather_context():
    cold_and_wet = normalize_weather_context(45, high_temp=60, low_temp=35, precip_chance=0.5)
    assert describe_weather_context(cold_and_wet) == (
        "cold weather with a large temperature swing (25°F) and rain likely (50%)"
    )
    assert describe_weather_context(normalize_weather_context(80)) == "warm weather"


def test_weather_context_rejects_inconsistent_bands():
    fields = normalize_weather_context(65).to_dict()
    fields["is_hot"] = True
    with pytest.raises(ValueError):
        WeatherContext(**fields)


def test_weather_context_rejects_out_of_range_target():
    fields = normalize_weather_context(65).to_dict()
    fields["target_weight"] = 4
    with pytest.raises(ValueError):
        WeatherContext(**fields)
