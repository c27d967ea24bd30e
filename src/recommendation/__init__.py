"""
Clothing recommendation engine.

Combines a comfort-temperature model with weighted matching against the
user's own history to recommend what to wear for an outdoor activity.

Usage:
    from recommendation import recommend, WeatherObservation

    weather = WeatherObservation(temperature_c=4.0, feels_like_c=1.0, wind_speed_mps=3.0)
    rec = recommend(weather, history, "running", "average")
    rec.clothing["tops"], rec.confidence, rec.source

The module-level functions use a shared engine built from ``get_settings()``.
Build a ``RecommendationEngine`` directly to use other settings.
"""

from typing import Mapping, Optional, Sequence, Union

from recommendation.clothing import ClothingItems
from recommendation.confidence import ConfidenceTier, confidence_tier
from recommendation.constants.clothing_categories import CategoryKey
from recommendation.context import (
    ActivityLevel,
    ActivityType,
    ClothingSuggestion,
    ComfortBreakdown,
    ComfortOutcome,
    DebugInfo,
    ForecastPoint,
    Hazard,
    HistoricalRecord,
    Intensity,
    RecommendationSource,
    RecordSource,
    SessionDuration,
    SuggestionContext,
    TempBand,
    ThermalPreference,
    WeatherObservation,
)
from recommendation.engine import (
    ActivityLike,
    PreferenceLike,
    Recommendation,
    RecommendationEngine,
    get_engine,
)
from recommendation.safety import SafetyOverrideEngine, is_dark_outside, is_sunny
from recommendation.units import TemperatureUnit, UnitLike


def compute_comfort_temperature(
    weather: WeatherObservation,
    activity: ActivityLike,
    preference: PreferenceLike = None,
    activity_level: Optional[ActivityLevel] = None,
) -> ComfortBreakdown:
    return get_engine().compute_comfort_temperature(weather, activity, preference, activity_level)


def recommend(
    weather: WeatherObservation,
    history: Sequence[HistoricalRecord],
    activity: ActivityLike,
    preference: PreferenceLike = None,
    activity_level: Optional[ActivityLevel] = None,
) -> Recommendation:
    return get_engine().recommend(weather, history, activity, preference, activity_level)


def fallback(
    weather: WeatherObservation,
    activity: ActivityLike,
    preference: PreferenceLike = None,
    activity_level: Optional[ActivityLevel] = None,
) -> ClothingItems:
    return get_engine().fallback(weather, activity, preference, activity_level)


def suggest(
    current: Union[ClothingItems, Mapping[str, str]],
    weather: WeatherObservation,
    activity: ActivityLike,
    preference: PreferenceLike = None,
    activity_level: Optional[ActivityLevel] = None,
    confidence: Optional[int] = None,
    matching_runs: Optional[int] = None,
    similar_conditions: Sequence[HistoricalRecord] = (),
    unit: Optional[UnitLike] = None,
) -> Optional[SuggestionContext]:
    return get_engine().suggest(
        current, weather, activity, preference, activity_level,
        confidence, matching_runs, similar_conditions, unit,
    )


__all__ = [
    "ActivityLevel",
    "ActivityType",
    "CategoryKey",
    "ClothingItems",
    "ClothingSuggestion",
    "ComfortBreakdown",
    "ComfortOutcome",
    "ConfidenceTier",
    "DebugInfo",
    "ForecastPoint",
    "Hazard",
    "HistoricalRecord",
    "Intensity",
    "Recommendation",
    "RecommendationEngine",
    "RecommendationSource",
    "RecordSource",
    "SafetyOverrideEngine",
    "SessionDuration",
    "SuggestionContext",
    "TempBand",
    "TemperatureUnit",
    "ThermalPreference",
    "WeatherObservation",
    "compute_comfort_temperature",
    "confidence_tier",
    "fallback",
    "get_engine",
    "is_dark_outside",
    "is_sunny",
    "recommend",
    "suggest",
]
