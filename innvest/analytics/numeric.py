"""Null-safe aggregation and division helpers shared by every report.

Aggregates over zero rows are ``0`` and ratios with a non-positive
denominator are ``0``, so report rows never carry ``None`` or NaN.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

ZERO = Decimal("0")

Number = Decimal | int | float


def to_decimal(value: Number | None) -> Decimal:
    """Coerce a database value to Decimal; ``None`` becomes 0."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def null_safe_sum(values: Iterable[Number | None]) -> Decimal:
    """SUM that ignores nulls and returns 0 for an empty input."""
    total = ZERO
    for value in values:
        if value is not None:
            total += to_decimal(value)
    return total


def null_safe_avg(values: Iterable[Number | None]) -> Decimal:
    """AVG over the non-null values; 0 when there are none."""
    total = ZERO
    count = 0
    for value in values:
        if value is None:
            continue
        total += to_decimal(value)
        count += 1
    if count == 0:
        return ZERO
    return total / count


def safe_ratio(numerator: Number | None, denominator: Number | None) -> Decimal:
    """``numerator / denominator`` if the denominator is positive, else 0."""
    denominator = to_decimal(denominator)
    if denominator > 0:
        return to_decimal(numerator) / denominator
    return ZERO
