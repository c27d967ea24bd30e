"""
Comfort-transform parameters and engine thresholds.

T_comfort = T_actual + B(activity) + wDelta(activity) * clamp(FeelsLike - Actual, -15, +8)
            + thermal_offset(preference) + activity_level_offset

B is the heat an activity generates, expressed as degrees C the body
effectively gains. wDelta is how much wind chill / heat index matters
for that activity (slow activities feel the wind more).
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from recommendation.context import (
    ActivityType,
    Intensity,
    SessionDuration,
    TempBand,
    ThermalPreference,
)


@dataclass(frozen=True)
class ActivityThermalParams:
    B: float
    w_delta: float
    match_threshold_c: float    # full comfort score within this, zero at 2x


ACTIVITY_THERMAL_PARAMS: Dict[ActivityType, ActivityThermalParams] = {
    ActivityType.WALKING: ActivityThermalParams(B=0.5, w_delta=0.80, match_threshold_c=1.5),
    ActivityType.HIKING: ActivityThermalParams(B=2.0, w_delta=0.65, match_threshold_c=2.0),
    ActivityType.SNOWSHOEING: ActivityThermalParams(B=3.0, w_delta=0.60, match_threshold_c=2.5),
    ActivityType.CYCLING: ActivityThermalParams(B=4.0, w_delta=0.50, match_threshold_c=3.0),
    ActivityType.CROSS_COUNTRY_SKIING: ActivityThermalParams(B=4.5, w_delta=0.50, match_threshold_c=3.0),
    ActivityType.TRAIL_RUNNING: ActivityThermalParams(B=5.5, w_delta=0.40, match_threshold_c=3.5),
    ActivityType.RUNNING: ActivityThermalParams(B=6.0, w_delta=0.35, match_threshold_c=3.5),
}

THERMAL_OFFSETS: Dict[ThermalPreference, float] = {
    ThermalPreference.COLD: 4.4,
    ThermalPreference.AVERAGE: 0.0,
    ThermalPreference.WARM: -4.4,
}

INTENSITY_OFFSETS: Dict[Intensity, float] = {
    Intensity.LOW: -1.5,
    Intensity.MODERATE: 0.0,
    Intensity.HIGH: 1.5,
}

DURATION_OFFSETS: Dict[SessionDuration, float] = {
    SessionDuration.SHORT: 0.0,
    SessionDuration.LONG: 1.0,
}

DELTA_MIN_C = -15.0
DELTA_MAX_C = 8.0

# Upper bounds (exclusive, in F) of each band; HOT is open-ended.
BAND_UPPER_BOUNDS_F: Tuple[Tuple[TempBand, float], ...] = (
    (TempBand.EXTREME_COLD, 5.0),
    (TempBand.FREEZING, 15.0),
    (TempBand.VERY_COLD, 25.0),
    (TempBand.COLD, 40.0),
    (TempBand.COOL, 55.0),
    (TempBand.MILD, 65.0),
    (TempBand.WARM, 75.0),
)

COLD_BANDS = frozenset({
    TempBand.EXTREME_COLD, TempBand.FREEZING, TempBand.VERY_COLD, TempBand.COLD,
})

# ── Safety thresholds (on T_comfort, C) ───────────────────────────
EXTREME_COLD_C = -9.4       # ~15F, fires at or below
DANGEROUS_COLD_C = -15.0    # fires strictly below
EXTREME_HEAT_C = 29.4       # ~85F, fires strictly above

WINDY_MPS = 4.47            # 10 mph

# ── Suggestion wording thresholds (on T_comfort, F) ───────────────
COLD_CONDITIONS_F = 40.0        # ~4.4C
VERY_COLD_CONDITIONS_F = 25.0   # ~-3.9C
