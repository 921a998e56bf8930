"""Pydantic schemas and helpers for validating generation requests."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models.outfit import GeneratedOutfit
from models.taxonomy import SELECTION_ORDER
from models.weather import WeatherContext


class WeatherContextPayload(BaseModel):
    """Wire shape of a normalised weather context (snake_case or camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    is_cold: bool
    is_mild: bool
    is_warm: bool
    is_hot: bool
    is_rain_likely: bool
    daily_swing: float = Field(ge=0)
    has_large_swing: bool
    target_weight: int = Field(ge=0, le=3)
    current_temp: float
    high_temp: float
    low_temp: float
    precip_chance: float = Field(ge=0, le=1)

    @model_validator(mode="after")
    def _check_bands(self) -> "WeatherContextPayload":
        bands = [self.is_cold, self.is_mild, self.is_warm, self.is_hot]
        if sum(1 for band in bands if band) != 1:
            raise ValueError("Exactly one temperature band (is_cold, is_mild, is_warm, is_hot) must be true")
        if self.high_temp < self.low_temp:
            raise ValueError("high_temp must be greater than or equal to low_temp")
        return self

    def to_context(self) -> WeatherContext:
        return WeatherContext(**self.model_dump())


class GenerationRequest(BaseModel):
    """Input contract for generating (or regenerating) an outfit for a user."""

    user_id: str = Field(min_length=1)
    weather: WeatherContextPayload
    exclude_items: List[str] = Field(default_factory=list)
    variation_seed: Optional[str] = None
    exploration_level: Optional[float] = Field(default=None, ge=0, le=1)

    @field_validator("weather", mode="before")
    @classmethod
    def _coerce_weather(cls, value: Any) -> Any:
        if isinstance(value, WeatherContext):
            return value.to_dict()
        return value


class SwapRequest(BaseModel):
    """Input contract for swapping one slot of an existing outfit."""

    user_id: str = Field(min_length=1)
    outfit: Any
    category: str
    weather: WeatherContextPayload

    @field_validator("weather", mode="before")
    @classmethod
    def _coerce_weather(cls, value: Any) -> Any:
        if isinstance(value, WeatherContext):
            return value.to_dict()
        return value

    @field_validator("outfit")
    @classmethod
    def _is_outfit(cls, outfit: Any) -> GeneratedOutfit:
        if not isinstance(outfit, GeneratedOutfit):
            raise ValueError("outfit must be a GeneratedOutfit")
        return outfit

    @field_validator("category")
    @classmethod
    def _known_slot(cls, category: str) -> str:
        slot = category.strip().lower()
        if slot not in SELECTION_ORDER:
            raise ValueError(f"Unknown outfit slot '{category}'. Allowed: {list(SELECTION_ORDER)}")
        return slot


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = exc.errors(include_url=False, include_context=False)
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "WeatherContextPayload",
    "GenerationRequest",
    "SwapRequest",
    "ValidationResult",
    "validation_failure",
]
