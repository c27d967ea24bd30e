"""
Fallback recommender: banded defaults with safety overrides applied.

Used when there is no history, when history yields no qualifying match,
and as the baseline the suggestion generator compares against.
"""

from typing import Optional, Tuple

from core.logging import get_logger
from recommendation.constants.activity_defaults import get_band_defaults
from recommendation.context import (
    ActivityLevel,
    ActivityType,
    ComfortBreakdown,
    WeatherObservation,
)
from recommendation.safety import SafetyOverrideEngine, SafetyResult

logger = get_logger(__name__)


def fallback_outfit(
    weather: WeatherObservation,
    activity: ActivityType,
    comfort: ComfortBreakdown,
    activity_level: Optional[ActivityLevel] = None,
    safety: Optional[SafetyOverrideEngine] = None,
) -> Tuple[dict, SafetyResult]:
    """
    Return ``(raw band defaults, safety result)`` for the comfort band.

    The final outfit is ``result.clothing``; the raw defaults are kept so
    the voter can fill categories from the same table.
    """
    safety = safety or SafetyOverrideEngine()
    defaults = get_band_defaults(activity, comfort.band)
    result = safety.apply(defaults, weather, activity, comfort, activity_level)
    logger.debug(
        "fallback_outfit",
        activity=activity.value,
        band=comfort.band.value,
        overrides=list(result.fired),
    )
    return defaults, result
