"""
History matcher.

Scores every historical record against the current conditions:

    similarity = (5.0 * comfort + 2.5 * precipitation + 1.0 * wind + 0.5 * uv) / 9.0

comfort:        1 within the activity's match threshold, linear to 0 at 2x,
                beyond that the record is not a candidate at all
precipitation:  1.0 when both dry or both wet, 0.3 otherwise
wind:           max(0, 1 - |dWind| / 4.5 m/s)
uv:             max(0, 1 - |dUV| / 4)

Satisfied / just-right feedback gets a +0.1 bonus (capped at 1.0).
Records under the similarity floor are dropped. The survivors are ranked
by similarity, newest first on ties.

Comfort feedback (too cold / too hot) from sessions close to the current
conditions shifts the matching target before scoring, so a user who was
cold last time is matched against colder sessions.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from core.logging import LoggerMixin
from recommendation.comfort import compute_comfort
from recommendation.constants.thermal_params import ACTIVITY_THERMAL_PARAMS
from recommendation.context import (
    ActivityType,
    ComfortBreakdown,
    ComfortOutcome,
    HistoricalRecord,
    MatchScore,
    ThermalPreference,
    WeatherObservation,
)

# ── Weights ───────────────────────────────────────────────────────
COMFORT_WEIGHT = 5.0
PRECIP_WEIGHT = 2.5
WIND_WEIGHT = 1.0
UV_WEIGHT = 0.5
TOTAL_WEIGHT = COMFORT_WEIGHT + PRECIP_WEIGHT + WIND_WEIGHT + UV_WEIGHT

PRECIP_SAME = 1.0
PRECIP_DIFFERENT = 0.3
WIND_SCALE_MPS = 4.5
UV_SCALE = 4.0

SATISFIED_BONUS = 0.1
FEEDBACK_VOTE_MULTIPLIER = 2.0

# ── Recency ───────────────────────────────────────────────────────
RECENCY_HORIZON_DAYS = 365
RECENCY_FLOOR = 0.3

# ── Feedback comfort adjustment ───────────────────────────────────
FEEDBACK_SHIFT_C = 4.4

_SATISFIED = frozenset({ComfortOutcome.JUST_RIGHT, ComfortOutcome.SATISFIED})


@dataclass(frozen=True)
class MatchResult:
    """Output of one matching pass."""
    target_comfort_c: float
    feedback_offset_c: float
    matches: Tuple[MatchScore, ...]
    exact_match: Optional[MatchScore]
    considered: int


def comfort_score(diff_c: float, threshold_c: float) -> Optional[float]:
    """1.0 inside the threshold, linear to 0 at twice it, None beyond."""
    if diff_c <= threshold_c:
        return 1.0
    if diff_c < 2 * threshold_c:
        return 2.0 - diff_c / threshold_c
    return None


def recency_weight(record_date: date, reference: Optional[date]) -> float:
    if reference is None:
        return 1.0
    days = max(0, (reference - record_date).days)
    return max(RECENCY_FLOOR, 1.0 - days / RECENCY_HORIZON_DAYS)


class HistoryMatcher(LoggerMixin):
    """Ranks historical records by similarity to the current conditions."""

    def __init__(
        self,
        min_similarity: float = 0.4,
        feedback_adjustment: bool = True,
        recent_match: bool = True,
    ):
        self.min_similarity = min_similarity
        self.feedback_adjustment = feedback_adjustment
        self.recent_match = recent_match

    def match(
        self,
        comfort: ComfortBreakdown,
        weather: WeatherObservation,
        history: Sequence[HistoricalRecord],
        activity: ActivityType,
        preference: ThermalPreference,
    ) -> MatchResult:
        threshold = ACTIVITY_THERMAL_PARAMS[activity].match_threshold_c

        candidates = [
            (i, r) for i, r in enumerate(history)
            if r.activity is None or r.activity == activity
        ]
        if not candidates:
            self.logger.debug("history_empty", activity=activity.value, total=len(history))
            return MatchResult(comfort.comfort_temp_c, 0.0, (), None, 0)

        if weather.observed_at is not None:
            reference = weather.observed_at.date()
        else:
            reference = max(r.date for _, r in candidates)

        scored = []
        for i, record in candidates:
            record_comfort = compute_comfort(record.weather, activity, preference, record.activity_level)
            scored.append((i, record, record_comfort.comfort_temp_c, recency_weight(record.date, reference)))

        offset = 0.0
        if self.feedback_adjustment:
            offset = self._feedback_offset(comfort.comfort_temp_c, scored, threshold)
        target = comfort.comfort_temp_c + offset

        matches: List[MatchScore] = []
        for i, record, record_c, recency in scored:
            diff = abs(target - record_c)
            c_score = comfort_score(diff, threshold)
            if c_score is None:
                continue
            similarity = self._similarity(c_score, weather, record)
            if similarity < self.min_similarity:
                continue
            multiplier = FEEDBACK_VOTE_MULTIPLIER if record.is_feedback else 1.0
            matches.append(MatchScore(
                record=record,
                score=similarity,
                comfort_temp_c=record_c,
                comfort_diff_c=diff,
                recency_weight=recency,
                vote_weight=similarity * recency * multiplier,
                index=i,
            ))

        matches.sort(key=lambda m: (m.score, m.record.recency_key, m.index), reverse=True)

        exact = None
        if self.recent_match and weather.observed_at is not None:
            today = weather.observed_at.date()
            exact = next((m for m in matches if m.record.date == today), None)

        self.logger.debug(
            "history_matched",
            activity=activity.value,
            considered=len(candidates),
            matched=len(matches),
            target_comfort_c=round(target, 2),
            feedback_offset_c=round(offset, 2),
            exact_match=exact is not None,
        )
        return MatchResult(
            target_comfort_c=target,
            feedback_offset_c=offset,
            matches=tuple(matches),
            exact_match=exact,
            considered=len(candidates),
        )

    @staticmethod
    def _similarity(c_score: float, weather: WeatherObservation, record: HistoricalRecord) -> float:
        past = record.weather
        precip = PRECIP_SAME if weather.has_precipitation == past.has_precipitation else PRECIP_DIFFERENT
        wind = max(0.0, 1.0 - abs(weather.wind_speed_mps - past.wind_speed_mps) / WIND_SCALE_MPS)
        uv = max(0.0, 1.0 - abs(weather.uv_index - past.uv_index) / UV_SCALE)

        similarity = (
            COMFORT_WEIGHT * c_score
            + PRECIP_WEIGHT * precip
            + WIND_WEIGHT * wind
            + UV_WEIGHT * uv
        ) / TOTAL_WEIGHT

        if record.is_feedback and record.outcome in _SATISFIED:
            similarity = min(1.0, similarity + SATISFIED_BONUS)
        return similarity

    @staticmethod
    def _feedback_offset(current_c: float, scored, threshold: float) -> float:
        """
        Weighted mean shift from comfort feedback near the current conditions.

        too_cold pulls the target colder, too_hot warmer; other outcomes
        count toward the weight with no shift.
        """
        total_weight = 0.0
        total_shift = 0.0
        for _, record, record_c, recency in scored:
            if not record.is_feedback or record.outcome is None:
                continue
            closeness = comfort_score(abs(current_c - record_c), threshold)
            if closeness is None or closeness <= 0:
                continue
            weight = closeness * recency
            total_weight += weight
            if record.outcome == ComfortOutcome.TOO_COLD:
                total_shift -= weight * FEEDBACK_SHIFT_C
            elif record.outcome == ComfortOutcome.TOO_HOT:
                total_shift += weight * FEEDBACK_SHIFT_C
        if total_weight == 0:
            return 0.0
        return total_shift / total_weight
