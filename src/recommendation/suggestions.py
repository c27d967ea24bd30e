"""
Suggestion generator for low and medium confidence recommendations.

Each category is checked in two steps:

- Historical comparison: when similar sessions are available, the mean of
  their comfort temperatures is compared with today's. A difference of at
  least 2C produces warmer / cooler advice for the categories that can
  actually add or shed warmth for the activity.
- Absolute: any category the first step left without advice (no
  sessions, a small difference, or a non-layering category) is checked
  against the fallback defaults and explained with cold / rain
  thresholds.

Wording is directive ("Add", "Use", "Remove") at low confidence or when
the difference is at least 5 display degrees, tentative ("Consider")
otherwise. High confidence recommendations get no suggestions at all.
"""

from typing import List, Mapping, Optional, Sequence

from core.logging import LoggerMixin
from recommendation.comfort import compute_comfort
from recommendation.constants.clothing_categories import (
    LAYERING_CATEGORIES,
    CategoryConfig,
    get_categories,
)
from recommendation.constants.thermal_params import COLD_CONDITIONS_F, VERY_COLD_CONDITIONS_F
from recommendation.constants.warmth_terms import LONG_BOTTOM_TERMS, LONG_TERMS
from recommendation.confidence import HIGH_CONFIDENCE_FROM, LOW_CONFIDENCE_BELOW
from recommendation.context import (
    ActivityLevel,
    ActivityType,
    ClothingSuggestion,
    ComfortBreakdown,
    HistoricalRecord,
    SuggestionContext,
    ThermalPreference,
    WeatherObservation,
)
from recommendation.fallback import fallback_outfit
from recommendation.safety import SafetyOverrideEngine, expects_precipitation
from recommendation.units import UnitLike, delta_c_to_display, format_temperature_delta
from recommendation.warmth import cooler_option, has_term, is_cooler, is_warmer, warmer_option

DIRECTIVE_MAGNITUDE = 5.0  # display degrees

_LAYERS = ("midLayer", "outerLayer")
_TOPS = ("tops", "baseLayer")
_EXTREMITIES = ("headCover", "gloves")


def _is_none(value: str) -> bool:
    return value.strip().lower() == "none"


class SuggestionGenerator(LoggerMixin):
    """Builds per-category nudges and an explanation for one outfit."""

    def __init__(
        self,
        confidence_ceiling: int = HIGH_CONFIDENCE_FROM,
        comfort_diff_threshold_c: float = 2.0,
        safety: Optional[SafetyOverrideEngine] = None,
    ):
        self.confidence_ceiling = confidence_ceiling
        self.comfort_diff_threshold_c = comfort_diff_threshold_c
        self.safety = safety or SafetyOverrideEngine()

    def generate(
        self,
        current: Mapping[str, str],
        weather: WeatherObservation,
        activity: ActivityType,
        preference: ThermalPreference,
        activity_level: Optional[ActivityLevel],
        confidence: Optional[int],
        matching_runs: Optional[int],
        similar_conditions: Sequence[HistoricalRecord],
        unit: UnitLike,
    ) -> Optional[SuggestionContext]:
        if confidence is not None and confidence >= self.confidence_ceiling:
            return None

        comfort = compute_comfort(weather, activity, preference, activity_level)

        diff_c: Optional[float] = None
        if similar_conditions:
            total = sum(
                compute_comfort(r.weather, activity, preference, r.activity_level).comfort_temp_c
                for r in similar_conditions
            )
            diff_c = comfort.comfort_temp_c - total / len(similar_conditions)

        significant = diff_c is not None and abs(diff_c) >= self.comfort_diff_threshold_c
        needs_warmer = significant and diff_c < 0
        directive = self._is_directive(confidence, diff_c, unit)

        _, baseline = fallback_outfit(weather, activity, comfort, activity_level, self.safety)
        defaults = baseline.clothing
        wet = expects_precipitation(weather, activity_level)
        layering = LAYERING_CATEGORIES[activity]

        suggestions: List[ClothingSuggestion] = []
        for cat in get_categories(activity):
            current_value = current.get(cat.key) or "None"
            default_value = defaults[cat.key]

            reason: Optional[str] = None
            if significant and cat.key in layering:
                suggested = self._comfort_choice(cat, current_value, default_value, needs_warmer)
                if suggested.lower() != current_value.lower():
                    reason = self._comfort_reason(cat, current_value, suggested, needs_warmer, diff_c, unit, directive)

            # Everything the comparison with history did not cover is
            # checked against the fallback outfit.
            if reason is None:
                if current_value.lower() == default_value.lower():
                    continue
                suggested = default_value
                reason = self._absolute_reason(cat.key, current_value, suggested, comfort, wet)
                if reason is None:
                    continue
            suggested = cat.find_option(suggested) or suggested
            if self._reverted_by_safety(current, cat.key, suggested, weather, activity, comfort, activity_level):
                continue
            suggestions.append(ClothingSuggestion(
                category=cat.key,
                category_label=cat.label,
                current=current_value,
                suggested=suggested,
                reason=reason,
            ))

        explanation = self._explanation(confidence, matching_runs, diff_c, unit, directive)
        self.logger.debug(
            "suggestions_generated",
            activity=activity.value,
            confidence=confidence,
            comfort_diff_c=None if diff_c is None else round(diff_c, 2),
            count=len(suggestions),
        )
        return SuggestionContext(
            suggestions=tuple(suggestions),
            explanation=explanation,
            confidence=confidence or 0,
            matching_runs=matching_runs or 0,
        )

    # ── Strength ──────────────────────────────────────────────────

    @staticmethod
    def _is_directive(confidence: Optional[int], diff_c: Optional[float], unit: UnitLike) -> bool:
        if confidence is not None and confidence < LOW_CONFIDENCE_BELOW:
            return True
        if diff_c is None:
            return False
        return round(abs(delta_c_to_display(diff_c, unit)), 1) >= DIRECTIVE_MAGNITUDE

    # ── Historical comparison ─────────────────────────────────────

    @staticmethod
    def _comfort_choice(cat: CategoryConfig, current: str, default: str, needs_warmer: bool) -> str:
        """Prefer the default when it is clearly warmer (cooler), else the nearest option."""
        if needs_warmer:
            if not _is_none(default) and is_warmer(cat, default, current):
                return default
            return warmer_option(cat, current)
        if is_cooler(cat, default, current):
            return default
        return cooler_option(cat, current)

    @staticmethod
    def _comfort_reason(
        cat: CategoryConfig,
        current: str,
        suggested: str,
        needs_warmer: bool,
        diff_c: float,
        unit: UnitLike,
        directive: bool,
    ) -> Optional[str]:
        key = cat.key
        diff = format_temperature_delta(diff_c, unit)
        direction = "colder" if needs_warmer else "warmer"
        short = f"Current conditions are {diff} {direction}."
        full = f"Current conditions are {diff} {direction} than your historical sessions."

        def pick(strong: str, soft: str) -> str:
            return strong if directive else soft

        if needs_warmer:
            if not is_warmer(cat, suggested, current):
                return None
            if key in _LAYERS:
                if _is_none(current):
                    return f"{full} {pick('Add a layer for warmth.', 'Consider adding a layer.')}"
                return f"{full} {pick('Use a warmer layer.', 'Consider a warmer layer.')}"
            if key in _TOPS:
                return f"{short} {pick('Use a warmer top.', 'Consider a warmer top.')}"
            if key in _EXTREMITIES:
                if _is_none(current):
                    return f"{short} {pick('Wear this to protect extremities.', 'Consider wearing this for warmth.')}"
                return f"{short} {pick('Use a warmer option.', 'Consider a warmer option.')}"
            if key == "bottoms":
                if "short" in current.lower():
                    return f"{short} {pick('Wear long bottoms.', 'Consider long bottoms.')}"
                return f"{short} {pick('Use warmer bottoms.', 'Consider warmer bottoms.')}"
            return None

        if not is_cooler(cat, suggested, current):
            return None
        if key in _LAYERS:
            if _is_none(suggested):
                return f"{full} {pick('Remove this layer.', 'Consider removing this layer.')}"
            return f"{full} {pick('Use a lighter layer.', 'Consider a lighter layer.')}"
        if key in _TOPS:
            return f"{short} {pick('Use a lighter top.', 'Consider a lighter top.')}"
        if key in _EXTREMITIES:
            if _is_none(suggested):
                return f"{short} {pick('Remove this to avoid overheating.', 'Consider leaving this off.')}"
            return f"{short} {pick('Use a lighter option.', 'Consider a lighter option.')}"
        if key == "bottoms":
            return f"{short} {pick('Use lighter bottoms.', 'Consider lighter bottoms.')}"
        return None

    # ── Absolute thresholds ───────────────────────────────────────

    @staticmethod
    def _absolute_reason(
        key: str,
        current: str,
        suggested: str,
        comfort: ComfortBreakdown,
        wet: bool,
    ) -> Optional[str]:
        is_cold = comfort.comfort_temp_f < COLD_CONDITIONS_F
        is_very_cold = comfort.comfort_temp_f < VERY_COLD_CONDITIONS_F
        current_l = current.lower()

        if key in _LAYERS and _is_none(current) and not _is_none(suggested):
            if is_very_cold:
                return "Very cold conditions typically require an additional layer"
            if is_cold:
                return "Cold conditions often benefit from an extra layer"

        if key in _TOPS and "short" in current_l and has_term(suggested, LONG_TERMS):
            return "Long sleeves are more appropriate for this temperature"

        if key in _EXTREMITIES and _is_none(current) and not _is_none(suggested):
            if is_very_cold:
                return "Essential for protecting extremities in very cold weather"
            if is_cold:
                return "Recommended for cold conditions"

        if key == "bottoms" and "short" in current_l and has_term(suggested, LONG_BOTTOM_TERMS):
            if is_cold:
                return "Long bottoms are more appropriate for this temperature"

        if key == "rainGear" and wet and _is_none(current) and not _is_none(suggested):
            return "Rain protection is recommended when precipitation is expected"

        if _is_none(current) and not _is_none(suggested):
            return "Consider adding this item based on typical recommendations"

        # No removals without a comfort comparison behind them.
        if _is_none(suggested):
            return None

        return "Default recommendation differs from your current selection"

    # ── Explanation ───────────────────────────────────────────────

    def _explanation(
        self,
        confidence: Optional[int],
        matching_runs: Optional[int],
        diff_c: Optional[float],
        unit: UnitLike,
        directive: bool,
    ) -> str:
        if confidence is None or matching_runs is None:
            return "Comparing with typical recommendations for these conditions"

        if matching_runs == 0:
            text = "No similar sessions found. These suggestions are based on typical recommendations for these conditions."
        elif matching_runs == 1:
            text = "Based on only 1 similar session."
        elif confidence < LOW_CONFIDENCE_BELOW:
            text = f"Low confidence ({confidence}%) from {matching_runs} sessions."
        else:
            text = f"Medium confidence ({confidence}%) from {matching_runs} sessions."

        if diff_c is not None and abs(diff_c) >= self.comfort_diff_threshold_c:
            diff = format_temperature_delta(diff_c, unit)
            if diff_c < 0:
                advice = "Add layers for warmth." if directive else "Consider adding layers."
                text += f" Current conditions are {diff} colder than your historical sessions. {advice}"
            else:
                advice = "Remove layers to avoid overheating." if directive else "Consider removing layers."
                text += f" Current conditions are {diff} warmer than your historical sessions. {advice}"
        elif matching_runs > 0:
            text += " Follow these recommendations:" if confidence < LOW_CONFIDENCE_BELOW else " Consider these recommendations:"
        return text

    # ── Safety consistency ────────────────────────────────────────

    def _reverted_by_safety(
        self,
        current: Mapping[str, str],
        key: str,
        suggested: str,
        weather: WeatherObservation,
        activity: ActivityType,
        comfort: ComfortBreakdown,
        activity_level: Optional[ActivityLevel],
    ) -> bool:
        """True when the safety rules would immediately change the suggested value."""
        outfit = {cat.key: current.get(cat.key) or "None" for cat in get_categories(activity)}
        outfit[key] = suggested
        result = self.safety.apply(outfit, weather, activity, comfort, activity_level, log_hazards=False)
        return result.clothing[key].lower() != suggested.lower()
