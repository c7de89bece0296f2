"""Pure score derivations.

Raw counters (``yes_votes``, ``no_votes``, ``rating_1`` .. ``rating_5``) are the
source of truth; every score below is a function of them and can be
recomputed at any time.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

SCORE_MIN = 0
SCORE_MAX = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def clamp_score(value: int) -> int:
    """Clamp a score into the 0-100 range."""
    return max(SCORE_MIN, min(SCORE_MAX, value))


def yes_no_score(yes_votes: int, no_votes: int) -> int:
    """Return the percentage of "yes" answers, or 0 before the first vote."""
    total = yes_votes + no_votes
    if total <= 0:
        return 0
    return clamp_score(round_half_up(yes_votes / total * 100))


def weighted_average(ratings: Mapping[str | int, int]) -> float:
    """Return the mean star value of a rating histogram, or 0.0 when empty."""
    total = sum(int(count) for count in ratings.values())
    if total <= 0:
        return 0.0
    weighted_sum = sum(int(star) * int(count) for star, count in ratings.items())
    return weighted_sum / total


def rating_score(ratings: Mapping[str | int, int]) -> int:
    """Map the 1-5 star weighted average linearly onto 0-100.

    Example:
        >>> rating_score({"1": 0, "2": 0, "3": 0, "4": 0, "5": 3})
        100
    """
    average = weighted_average(ratings)
    if average == 0.0:
        return 0
    return clamp_score(round_half_up((average - 1) / 4 * 100))


def positive_mean(scores: Iterable[int]) -> int:
    """Return the rounded mean of the positive scores, or 0 if there are none."""
    positives = [score for score in scores if score > 0]
    if not positives:
        return 0
    return round_half_up(sum(positives) / len(positives))
