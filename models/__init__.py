"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.outfit import CompatibilityScore, GeneratedOutfit
from models.wardrobe_item import EnrichedItem, WardrobeItem, from_raw_metadata
from models.weather import WeatherContext

__all__ = [
    "CompatibilityScore",
    "EnrichedItem",
    "GeneratedOutfit",
    "WardrobeItem",
    "WeatherContext",
    "from_raw_metadata",
]
