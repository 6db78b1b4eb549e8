"""
Decimal Utilities
ninebox/scoring/utils.py

Precision-safe rounding for scoring and aggregation.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence, Union

Number = Union[int, float, Decimal]


def _as_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(int(value))
    return Decimal(str(value))


def round_half_up(value: Number) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's built-in round() uses banker's rounding (round(2.5) == 2);
    level averaging needs 1.5 -> 2 and 0.5 -> 1.
    """
    return int(_as_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def mean(values: Sequence[Number]) -> Decimal:
    """
    Arithmetic mean as an exact Decimal.

    Raises ValueError on an empty sequence.
    """
    if not values:
        raise ValueError("mean() requires at least one value")
    total = sum(_as_decimal(v) for v in values)
    return total / Decimal(len(values))


def rounded_mean(values: Sequence[Number]) -> int:
    """Mean of ``values`` rounded half-up to an integer level."""
    return round_half_up(mean(values))
