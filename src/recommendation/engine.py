"""
Recommendation engine.

Wires the stages together:

    comfort transform -> history matcher -> voter -> confidence
        -> safety overrides -> (fallback defaults) -> suggestions

The engine holds configuration only. Every call is a pure function of
its inputs, so one instance can serve any number of callers.
"""

import threading
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple, Union

from config.settings import Settings, get_settings
from core.logging import LoggerMixin, configure_logging_from_settings
from recommendation.clothing import ClothingItems
from recommendation.comfort import compute_comfort
from recommendation.confidence import (
    EXACT_MATCH_CONFIDENCE,
    ConfidenceTier,
    confidence_tier,
    score_confidence,
)
from recommendation.constants.activity_defaults import get_band_defaults
from recommendation.constants.clothing_categories import category_keys, get_category
from recommendation.context import (
    ActivityLevel,
    ActivityType,
    CategoryVote,
    ComfortBreakdown,
    DebugInfo,
    Hazard,
    HistoricalRecord,
    RecommendationSource,
    SuggestionContext,
    ThermalPreference,
    WeatherObservation,
)
from recommendation.fallback import fallback_outfit
from recommendation.matcher import HistoryMatcher
from recommendation.safety import SafetyOverrideEngine
from recommendation.suggestions import SuggestionGenerator
from recommendation.units import UnitLike, parse_unit
from recommendation.voter import vote

ActivityLike = Union[ActivityType, str]
PreferenceLike = Union[ThermalPreference, str, None]


@dataclass(frozen=True)
class Recommendation:
    """What to wear, how sure we are, and where it came from."""
    clothing: ClothingItems
    confidence: int
    matching_runs: int
    total_runs: int
    similar_conditions: Tuple[HistoricalRecord, ...]
    source: RecommendationSource
    hazards: FrozenSet[Hazard]
    debug: DebugInfo

    @property
    def confidence_tier(self) -> ConfidenceTier:
        return confidence_tier(self.confidence)

    @property
    def is_dangerous_cold(self) -> bool:
        return Hazard.DANGEROUS_COLD in self.hazards

    @property
    def is_extreme_heat(self) -> bool:
        return Hazard.EXTREME_HEAT in self.hazards


def _custom_values(activity: ActivityType, items: Mapping[str, str]) -> FrozenSet[str]:
    """Values that are not listed options (custom or imported spellings)."""
    custom = set()
    for key, value in items.items():
        category = get_category(activity, key)
        if category is not None and category.find_option(value) is None:
            custom.add(value)
    return frozenset(custom)


def _to_items(activity: ActivityType, items: Mapping[str, str]) -> ClothingItems:
    return ClothingItems.build(activity, items, _custom_values(activity, items))


class RecommendationEngine(LoggerMixin):
    """
    Entry point for comfort temperature, recommendations, fallback outfits
    and suggestions.

    Tuning values come from ``Settings``; pass ``get_settings_for_testing()``
    (or any ``Settings``) to override them.
    """

    def __init__(self, settings: Optional[Settings] = None, disabled_rules: Iterable[str] = ()):
        self.settings = settings or get_settings()
        self.safety = SafetyOverrideEngine(disabled=disabled_rules)
        self.matcher = HistoryMatcher(
            min_similarity=self.settings.min_similarity,
            feedback_adjustment=self.settings.feedback_adjustment_enabled,
            recent_match=self.settings.recent_match_enabled,
        )
        self.suggester = SuggestionGenerator(
            confidence_ceiling=self.settings.suggestion_confidence_ceiling,
            comfort_diff_threshold_c=self.settings.comfort_diff_threshold_c,
            safety=self.safety,
        )

    # ── Input coercion ────────────────────────────────────────────

    @staticmethod
    def _activity(activity: ActivityLike) -> ActivityType:
        return activity if isinstance(activity, ActivityType) else ActivityType(activity)

    def _preference(self, preference: PreferenceLike) -> ThermalPreference:
        if preference is None:
            return ThermalPreference(self.settings.thermal_preference)
        return preference if isinstance(preference, ThermalPreference) else ThermalPreference(preference)

    # ── Public API ────────────────────────────────────────────────

    def compute_comfort_temperature(
        self,
        weather: WeatherObservation,
        activity: ActivityLike,
        preference: PreferenceLike = None,
        activity_level: Optional[ActivityLevel] = None,
    ) -> ComfortBreakdown:
        return compute_comfort(weather, self._activity(activity), self._preference(preference), activity_level)

    def fallback(
        self,
        weather: WeatherObservation,
        activity: ActivityLike,
        preference: PreferenceLike = None,
        activity_level: Optional[ActivityLevel] = None,
    ) -> ClothingItems:
        activity = self._activity(activity)
        comfort = compute_comfort(weather, activity, self._preference(preference), activity_level)
        _, result = fallback_outfit(weather, activity, comfort, activity_level, self.safety)
        return _to_items(activity, result.clothing)

    def recommend(
        self,
        weather: WeatherObservation,
        history: Sequence[HistoricalRecord],
        activity: ActivityLike,
        preference: PreferenceLike = None,
        activity_level: Optional[ActivityLevel] = None,
    ) -> Recommendation:
        activity = self._activity(activity)
        preference = self._preference(preference)
        comfort = compute_comfort(weather, activity, preference, activity_level)
        defaults = get_band_defaults(activity, comfort.band)

        result = self.matcher.match(comfort, weather, history, activity, preference)

        if result.exact_match is not None:
            source = RecommendationSource.RECENT_MATCH
            voting = (result.exact_match,)
            voted, votes = vote(activity, voting, defaults)
            confidence = EXACT_MATCH_CONFIDENCE
            similar = (result.exact_match.record,)
        elif result.matches:
            source = RecommendationSource.SIMILAR_SESSIONS
            voted, votes = vote(activity, result.matches, defaults)
            confidence = score_confidence(result.matches)
            similar = tuple(m.record for m in result.matches[: self.settings.similar_conditions_limit])
        else:
            source = RecommendationSource.FALLBACK_DEFAULTS
            voted = defaults
            votes = {
                key: CategoryVote(category=key, winner=defaults[key], tallies={}, from_fallback=True)
                for key in category_keys(activity)
            }
            confidence = 0
            similar = ()

        safety = self.safety.apply(voted, weather, activity, comfort, activity_level)
        clothing = _to_items(activity, safety.clothing)
        matching_runs = len(similar) if source == RecommendationSource.RECENT_MATCH else len(result.matches)

        debug = DebugInfo(
            weather=weather,
            activity=activity,
            preference=preference,
            activity_level=activity_level,
            comfort=comfort,
            feedback_offset_c=result.feedback_offset_c,
            matches=result.matches,
            votes=votes,
            overrides=safety.overrides,
            hazards=safety.hazards,
            source=source,
            confidence=confidence,
        )

        self.logger.debug(
            "recommendation_built",
            activity=activity.value,
            comfort_c=round(comfort.comfort_temp_c, 1),
            band=comfort.band.value,
            source=source.value,
            confidence=confidence,
            matching_runs=matching_runs,
            total_runs=result.considered,
            overrides=list(safety.fired),
        )

        return Recommendation(
            clothing=clothing,
            confidence=confidence,
            matching_runs=matching_runs,
            total_runs=result.considered,
            similar_conditions=similar,
            source=source,
            hazards=safety.hazards,
            debug=debug,
        )

    def suggest(
        self,
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
        items = current.as_dict() if isinstance(current, ClothingItems) else dict(current)
        return self.suggester.generate(
            items,
            weather,
            self._activity(activity),
            self._preference(preference),
            activity_level,
            confidence,
            matching_runs,
            tuple(similar_conditions),
            parse_unit(unit or self.settings.temperature_unit),
        )

    def explain(
        self,
        weather: WeatherObservation,
        history: Sequence[HistoricalRecord],
        activity: ActivityLike,
        preference: PreferenceLike = None,
        activity_level: Optional[ActivityLevel] = None,
    ) -> dict:
        """Plain-dict diagnostics for one recommendation."""
        return self.recommend(weather, history, activity, preference, activity_level).debug.to_dict()


# =============================================================================
# SINGLETON
# =============================================================================

_engine: Optional[RecommendationEngine] = None
_engine_lock = threading.Lock()


def get_engine() -> RecommendationEngine:
    """Get or create the RecommendationEngine singleton (thread-safe)."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                settings = get_settings()
                configure_logging_from_settings(settings)
                _engine = RecommendationEngine(settings)
    return _engine
