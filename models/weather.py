"""Normalised weather context consumed by outfit generation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class WeatherContext:
    """Fixed-shape weather descriptor.

    Exactly one temperature band flag is set. Temperatures are Fahrenheit and
    ``target_weight`` is the overall warmth target on the 0-3 weather-weight
    scale used by enrichment.
    """

    is_cold: bool
    is_mild: bool
    is_warm: bool
    is_hot: bool
    is_rain_likely: bool
    daily_swing: float
    has_large_swing: bool
    target_weight: int
    current_temp: float
    high_temp: float
    low_temp: float
    precip_chance: float

    def __post_init__(self) -> None:
        bands = [self.is_cold, self.is_mild, self.is_warm, self.is_hot]
        if sum(1 for band in bands if band) != 1:
            raise ValueError("Exactly one temperature band (is_cold, is_mild, is_warm, is_hot) must be true")
        if self.daily_swing < 0:
            raise ValueError("daily_swing cannot be negative")
        if isinstance(self.target_weight, bool) or int(self.target_weight) != self.target_weight:
            raise ValueError("target_weight must be an integer")
        if not 0 <= self.target_weight <= 3:
            raise ValueError("target_weight must be between 0 and 3")
        if self.high_temp < self.low_temp:
            raise ValueError("high_temp must be greater than or equal to low_temp")
        if not 0 <= self.precip_chance <= 1:
            raise ValueError("precip_chance must be between 0 and 1")

    @property
    def band(self) -> str:
        if self.is_cold:
            return "cold"
        if self.is_mild:
            return "mild"
        if self.is_warm:
            return "warm"
        return "hot"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["WeatherContext"]
