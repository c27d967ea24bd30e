"""
Comfort-temperature transform.

Collapses weather, activity and the user's preference into a single
temperature (T_comfort) that is used both for matching history and for
picking a default band:

    delta     = clamp(feels_like - actual, -15, +8)
    T_comfort = actual + B + wDelta * delta + thermal_offset + level_offset

Historical records go through the exact same function so that matching
compares like with like.
"""

from typing import Optional

from recommendation.constants.thermal_params import (
    ACTIVITY_THERMAL_PARAMS,
    BAND_UPPER_BOUNDS_F,
    DELTA_MAX_C,
    DELTA_MIN_C,
    DURATION_OFFSETS,
    INTENSITY_OFFSETS,
    THERMAL_OFFSETS,
)
from recommendation.context import (
    ActivityLevel,
    ActivityType,
    ComfortBreakdown,
    TempBand,
    ThermalPreference,
    WeatherObservation,
)
from recommendation.units import celsius_to_fahrenheit


def activity_level_offset(activity_level: Optional[ActivityLevel]) -> float:
    if activity_level is None:
        return 0.0
    return INTENSITY_OFFSETS[activity_level.intensity] + DURATION_OFFSETS[activity_level.duration]


def band_for(comfort_temp_f: float) -> TempBand:
    for band, upper in BAND_UPPER_BOUNDS_F:
        if comfort_temp_f < upper:
            return band
    return TempBand.HOT


def compute_comfort(
    weather: WeatherObservation,
    activity: ActivityType,
    preference: ThermalPreference,
    activity_level: Optional[ActivityLevel] = None,
) -> ComfortBreakdown:
    params = ACTIVITY_THERMAL_PARAMS[activity]
    actual = weather.temperature_c
    feels_like = actual if weather.feels_like_c is None else weather.feels_like_c

    delta = max(DELTA_MIN_C, min(DELTA_MAX_C, feels_like - actual))
    thermal_offset = THERMAL_OFFSETS[preference]
    level_offset = activity_level_offset(activity_level)

    comfort_c = actual + params.B + params.w_delta * delta + thermal_offset + level_offset
    comfort_f = celsius_to_fahrenheit(comfort_c)

    return ComfortBreakdown(
        activity=activity,
        actual_temp_c=actual,
        feels_like_temp_c=feels_like,
        delta=delta,
        B=params.B,
        w_delta=params.w_delta,
        thermal_offset=thermal_offset,
        activity_level_offset=level_offset,
        comfort_temp_c=comfort_c,
        comfort_temp_f=comfort_f,
        band=band_for(comfort_f),
    )
