"""
Score Arithmetic

Scores are combined with decimal arithmetic and rounded half-up, so that
e.g. 95*0.3 + 30*0.4 + 20*0.3 is exactly 46.5 and rounds to 47 instead of
drifting with binary floating point.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

SCORE_MIN = 0
SCORE_MAX = 100


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: float | int | Decimal) -> int:
    # quantize would raise past the context precision
    return int(to_decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def weighted_sum(pairs: Iterable[Tuple[float | int, str]]) -> Decimal:
    """Sum of value*weight, weights given as decimal strings ("0.30")."""
    return sum((to_decimal(value) * Decimal(weight) for value, weight in pairs), Decimal(0))


def clamp_score(value: float | int | Decimal) -> int:
    """Round half-up and clamp into [0, 100]."""
    return max(SCORE_MIN, min(SCORE_MAX, round_half_up(value)))
