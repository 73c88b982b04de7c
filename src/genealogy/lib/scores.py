"""Score helpers shared by the genealogists and the aggregation."""

import math

from ..errors import InvalidScore

MIN_SCORE = 0
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    ``round()`` rounds halves to even, which would turn 62.5 into 62.
    """
    return math.floor(value + 0.5)


def check_score(score: int, what: str) -> int:
    """Return *score* if it lies in [0; 100], raise :class:`InvalidScore` otherwise."""
    if score < MIN_SCORE or MAX_SCORE < score:
        raise InvalidScore(f"Score should be in interval [{MIN_SCORE}; {MAX_SCORE}]: {what}")
    return score
