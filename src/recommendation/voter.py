"""
Per-category clothing vote over ranked matches.

Each match votes its worn value with weight similarity x recency
(doubled for recorded feedback). Values are compared case-insensitively.
The winner is the heaviest value, ties going to the value worn most
recently; it keeps the spelling of that most recent occurrence.
"""

from typing import Dict, Mapping, Sequence, Tuple

from core.logging import get_logger
from recommendation.constants.clothing_categories import category_keys
from recommendation.context import ActivityType, CategoryVote, MatchScore

logger = get_logger(__name__)

# (record recency key, input index): larger is more recent
_Recency = Tuple[Tuple[int, int], int]


def _recency(match: MatchScore) -> _Recency:
    return (match.record.recency_key, match.index)


def vote_category(category: str, matches: Sequence[MatchScore]) -> CategoryVote:
    weights: Dict[str, float] = {}
    latest: Dict[str, _Recency] = {}
    spelling: Dict[str, str] = {}

    for match in matches:
        raw = (match.record.clothing.get(category) or "").strip()
        if not raw:
            continue
        key = raw.lower()
        weights[key] = weights.get(key, 0.0) + match.vote_weight
        when = _recency(match)
        if key not in latest or when > latest[key]:
            latest[key] = when
            spelling[key] = raw

    if not weights:
        return CategoryVote(category=category, winner=None, tallies={})

    winner_key = max(weights, key=lambda k: (weights[k], latest[k]))
    tallies = {spelling[k]: w for k, w in weights.items()}
    return CategoryVote(category=category, winner=spelling[winner_key], tallies=tallies)


def vote(
    activity: ActivityType,
    matches: Sequence[MatchScore],
    defaults: Mapping[str, str],
) -> Tuple[Dict[str, str], Dict[str, CategoryVote]]:
    """
    Vote every category of ``activity``.

    Categories nobody voted on take the value from ``defaults`` and are
    marked ``from_fallback``.
    """
    clothing: Dict[str, str] = {}
    votes: Dict[str, CategoryVote] = {}

    for key in category_keys(activity):
        result = vote_category(key, matches)
        if result.winner is None:
            result = CategoryVote(category=key, winner=defaults[key], tallies={}, from_fallback=True)
        clothing[key] = result.winner
        votes[key] = result

    filled = [k for k, v in votes.items() if v.from_fallback]
    if filled:
        logger.debug("vote_filled_from_defaults", activity=activity.value, categories=filled)
    return clothing, votes
