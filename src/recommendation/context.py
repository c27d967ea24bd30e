"""
Core types for the clothing recommendation engine.

Weather observations and historical records are produced outside the
engine (weather client, persistence layer) and handed in as immutable
snapshots. Everything the engine returns is built from these types.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


class ActivityType(str, Enum):
    RUNNING = "running"
    TRAIL_RUNNING = "trail_running"
    HIKING = "hiking"
    WALKING = "walking"
    CYCLING = "cycling"
    SNOWSHOEING = "snowshoeing"
    CROSS_COUNTRY_SKIING = "cross_country_skiing"


class ThermalPreference(str, Enum):
    """User's self-reported tendency to run cold or hot."""
    COLD = "cold"
    AVERAGE = "average"
    WARM = "warm"


class Intensity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class SessionDuration(str, Enum):
    SHORT = "short"    # < 1 hour
    LONG = "long"      # >= 1 hour


class ComfortOutcome(str, Enum):
    """How the user felt in what they wore."""
    TOO_COLD = "too_cold"
    JUST_RIGHT = "just_right"
    TOO_HOT = "too_hot"
    SATISFIED = "satisfied"
    ADJUSTED = "adjusted"


class RecordSource(str, Enum):
    IMPORTED = "imported"    # bulk file import
    FEEDBACK = "feedback"    # recorded at the end of a session


class TempBand(str, Enum):
    """Comfort-temperature bands, coldest first."""
    EXTREME_COLD = "extremeCold"    # < 5F
    FREEZING = "freezing"           # 5-15F
    VERY_COLD = "veryCold"          # 15-25F
    COLD = "cold"                   # 25-40F
    COOL = "cool"                   # 40-55F
    MILD = "mild"                   # 55-65F
    WARM = "warm"                   # 65-75F
    HOT = "hot"                     # >= 75F


class RecommendationSource(str, Enum):
    RECENT_MATCH = "recent_match"
    SIMILAR_SESSIONS = "similar_sessions"
    FALLBACK_DEFAULTS = "fallback_defaults"


class Hazard(str, Enum):
    WET = "wet"
    SNOW = "snow"
    WIND = "wind"
    EXTREME_COLD = "extreme_cold"
    DANGEROUS_COLD = "dangerous_cold"
    EXTREME_HEAT = "extreme_heat"
    DARK = "dark"
    SUN = "sun"


@dataclass(frozen=True)
class ActivityLevel:
    """Expert-mode intensity and duration for a session."""
    intensity: Intensity = Intensity.MODERATE
    duration: SessionDuration = SessionDuration.SHORT


@dataclass(frozen=True)
class ForecastPoint:
    """One short-range forecast step, relative to the observation."""
    hours_ahead: float
    temperature_c: Optional[float] = None
    precipitation_mm: float = 0.0


@dataclass(frozen=True)
class WeatherObservation:
    """
    Current (or historical) weather at the activity location.

    Canonical units: Celsius, m/s, millimetres. ``feels_like_c`` may be
    missing, in which case the comfort transform uses the air temperature.
    """
    temperature_c: float
    feels_like_c: Optional[float] = None
    humidity: float = 50.0                 # 0-100
    wind_speed_mps: float = 0.0
    precipitation_mm: float = 0.0
    cloud_cover: float = 0.0               # 0-100
    uv_index: float = 0.0
    observed_at: Optional[datetime] = None
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    forecast: Tuple[ForecastPoint, ...] = ()

    @property
    def has_precipitation(self) -> bool:
        return self.precipitation_mm > 0

    @classmethod
    def from_imperial(
        cls,
        temperature_f: float,
        feels_like_f: Optional[float] = None,
        wind_speed_mph: float = 0.0,
        precipitation_in: float = 0.0,
        **kwargs,
    ) -> "WeatherObservation":
        """Build an observation from Fahrenheit / mph / inches source data."""
        return cls(
            temperature_c=(temperature_f - 32) * 5 / 9,
            feels_like_c=None if feels_like_f is None else (feels_like_f - 32) * 5 / 9,
            wind_speed_mps=wind_speed_mph * 0.44704,
            precipitation_mm=precipitation_in * 25.4,
            **kwargs,
        )


@dataclass(frozen=True)
class HistoricalRecord:
    """
    One past session: an imported record or recorded feedback.

    ``clothing`` is kept as the raw category -> value mapping that was
    stored, since historical values may be custom or belong to keys that
    a later configuration no longer uses.
    """
    date: date
    weather: WeatherObservation
    clothing: Dict[str, str] = field(default_factory=dict)
    source: RecordSource = RecordSource.IMPORTED
    activity: Optional[ActivityType] = None
    outcome: Optional[ComfortOutcome] = None
    notes: Optional[str] = None
    activity_level: Optional[ActivityLevel] = None
    recorded_at: Optional[datetime] = None
    record_id: Optional[str] = None

    @property
    def is_feedback(self) -> bool:
        return self.source == RecordSource.FEEDBACK

    @property
    def recency_key(self) -> Tuple[int, int]:
        """Sortable (day, second-of-day); records without a time sort first within a day."""
        seconds = -1
        if self.recorded_at is not None:
            t = self.recorded_at
            seconds = t.hour * 3600 + t.minute * 60 + t.second
        return (self.date.toordinal(), seconds)


@dataclass(frozen=True)
class ComfortBreakdown:
    """Every term of the comfort-temperature transform."""
    activity: ActivityType
    actual_temp_c: float
    feels_like_temp_c: float
    delta: float
    B: float
    w_delta: float
    thermal_offset: float
    activity_level_offset: float
    comfort_temp_c: float
    comfort_temp_f: float
    band: TempBand

    def to_dict(self) -> dict:
        return {
            "activity": self.activity.value,
            "actual_temp_c": round(self.actual_temp_c, 2),
            "feels_like_temp_c": round(self.feels_like_temp_c, 2),
            "delta": round(self.delta, 2),
            "B": self.B,
            "w_delta": self.w_delta,
            "thermal_offset": self.thermal_offset,
            "activity_level_offset": self.activity_level_offset,
            "comfort_temp_c": round(self.comfort_temp_c, 2),
            "comfort_temp_f": round(self.comfort_temp_f, 1),
            "band": self.band.value,
        }


@dataclass(frozen=True)
class MatchScore:
    """One historical record scored against the current conditions."""
    record: HistoricalRecord
    score: float
    comfort_temp_c: float
    comfort_diff_c: float
    recency_weight: float
    vote_weight: float
    index: int = 0    # position in the input history, last resort for ordering


@dataclass(frozen=True)
class CategoryVote:
    """Vote tally for one clothing category."""
    category: str
    winner: Optional[str]
    tallies: Dict[str, float]
    from_fallback: bool = False


@dataclass(frozen=True)
class OverrideRecord:
    """One safety rule evaluation: whether it fired and what it changed."""
    name: str
    fired: bool
    changes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ClothingSuggestion:
    category: str
    category_label: str
    current: str
    suggested: str
    reason: str


@dataclass(frozen=True)
class SuggestionContext:
    suggestions: Tuple[ClothingSuggestion, ...]
    explanation: str
    confidence: int
    matching_runs: int


@dataclass(frozen=True)
class DebugInfo:
    """
    Intermediate values of one recommendation.

    Built from the very objects the recommendation was assembled from,
    never recomputed.
    """
    weather: WeatherObservation
    activity: ActivityType
    preference: ThermalPreference
    activity_level: Optional[ActivityLevel]
    comfort: ComfortBreakdown
    feedback_offset_c: float
    matches: Tuple[MatchScore, ...]
    votes: Dict[str, CategoryVote]
    overrides: Tuple[OverrideRecord, ...]
    hazards: FrozenSet[Hazard]
    source: RecommendationSource
    confidence: int

    @property
    def fired_overrides(self) -> Tuple[str, ...]:
        return tuple(o.name for o in self.overrides if o.fired)

    def to_dict(self) -> dict:
        """Plain-dict view for logging or an admin screen."""
        return {
            "activity": self.activity.value,
            "preference": self.preference.value,
            "activity_level": (
                None if self.activity_level is None else {
                    "intensity": self.activity_level.intensity.value,
                    "duration": self.activity_level.duration.value,
                }
            ),
            "comfort": self.comfort.to_dict(),
            "feedback_offset_c": round(self.feedback_offset_c, 2),
            "matches": [
                {
                    "date": m.record.date.isoformat(),
                    "source": m.record.source.value,
                    "score": round(m.score, 4),
                    "comfort_temp_c": round(m.comfort_temp_c, 2),
                    "comfort_diff_c": round(m.comfort_diff_c, 2),
                    "recency_weight": round(m.recency_weight, 4),
                    "vote_weight": round(m.vote_weight, 4),
                }
                for m in self.matches
            ],
            "votes": {
                key: {
                    "winner": v.winner,
                    "from_fallback": v.from_fallback,
                    "tallies": {k: round(w, 4) for k, w in v.tallies.items()},
                }
                for key, v in self.votes.items()
            },
            "overrides": {o.name: {"fired": o.fired, "changes": dict(o.changes)} for o in self.overrides},
            "hazards": sorted(h.value for h in self.hazards),
            "source": self.source.value,
            "confidence": self.confidence,
        }
