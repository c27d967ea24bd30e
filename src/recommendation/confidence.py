"""
Confidence score for a set of matches.

    confidence = round(100 * (1 - exp(-n / 2.5)) * mean_similarity)

One perfect match gives 33, three give 70, and it only approaches 100
with many tight matches.
"""

import math
from enum import Enum
from typing import Sequence

from recommendation.context import MatchScore

SATURATION_SCALE = 2.5
EXACT_MATCH_CONFIDENCE = 100

LOW_CONFIDENCE_BELOW = 40
HIGH_CONFIDENCE_FROM = 70


class ConfidenceTier(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def score_confidence(matches: Sequence[MatchScore]) -> int:
    n = len(matches)
    if n == 0:
        return 0
    mean = sum(m.score for m in matches) / n
    value = round(100 * (1 - math.exp(-n / SATURATION_SCALE)) * mean)
    return max(0, min(100, value))


def confidence_tier(confidence: int) -> ConfidenceTier:
    if confidence < LOW_CONFIDENCE_BELOW:
        return ConfidenceTier.LOW
    if confidence < HIGH_CONFIDENCE_FROM:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.HIGH
