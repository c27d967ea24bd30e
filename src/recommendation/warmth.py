"""
Warmth comparison between clothing values.

Listed options of an ordinal category compare by rank. Anything else
(custom values, non-ordinal categories) falls back to the lexical
heuristic over ``WARM_TERMS`` / ``COLD_TERMS``, kept exactly as users
have come to expect it, including its blind spots.
"""

from typing import Iterable, Optional

from recommendation.constants.clothing_categories import CategoryConfig
from recommendation.constants.warmth_terms import (
    COLD_TERMS,
    UPGRADE_FROM_TERMS,
    WARM_TERMS,
)


def has_term(value: str, terms: Iterable[str]) -> bool:
    lowered = value.lower()
    return any(term in lowered for term in terms)


def is_warmer_lexical(option1: str, option2: str) -> bool:
    """
    True when ``option1`` reads as warmer than ``option2``.

    option1 must carry a warm term, and option2 must either carry none
    or carry a cold term.
    """
    opt1_warm = has_term(option1, WARM_TERMS)
    opt2_warm = has_term(option2, WARM_TERMS)
    opt2_cold = has_term(option2, COLD_TERMS)
    return (opt1_warm and not opt2_warm) or (opt1_warm and opt2_cold)


def compare_warmth(category: Optional[CategoryConfig], a: str, b: str) -> int:
    """
    Return 1 if ``a`` is warmer than ``b``, -1 if cooler, 0 if neither.
    """
    if category is not None:
        rank_a = category.warmth_rank(a)
        rank_b = category.warmth_rank(b)
        if rank_a is not None and rank_b is not None:
            return (rank_a > rank_b) - (rank_a < rank_b)
    if is_warmer_lexical(a, b):
        return 1
    if is_warmer_lexical(b, a):
        return -1
    return 0


def is_warmer(category: Optional[CategoryConfig], a: str, b: str) -> bool:
    return compare_warmth(category, a, b) > 0


def is_cooler(category: Optional[CategoryConfig], a: str, b: str) -> bool:
    return compare_warmth(category, a, b) < 0


def warmer_option(category: CategoryConfig, current: str) -> str:
    """
    Nearest option warmer than ``current``, or ``current`` if none.

    Ranked values step one up the option list. Unranked values take the
    first option with a warm term, and only when ``current`` itself reads
    as light.
    """
    rank = category.warmth_rank(current)
    if rank is not None:
        if rank + 1 < len(category.options):
            return category.options[rank + 1]
        return current

    if not has_term(current, UPGRADE_FROM_TERMS):
        return current
    for option in category.options:
        if has_term(option, WARM_TERMS):
            return option
    return current


def cooler_option(category: CategoryConfig, current: str) -> str:
    """Nearest option cooler than ``current``, or ``current`` if none."""
    rank = category.warmth_rank(current)
    if rank is not None:
        if rank > 0:
            return category.options[rank - 1]
        return current

    if not has_term(current, WARM_TERMS):
        return current
    current_lower = current.lower()
    for option in category.options:
        if not has_term(option, WARM_TERMS) and option.lower() != current_lower:
            return option
    return current
