"""
Fixed-point money helpers.

Money is a Decimal quantized to cents. Intermediate values that come from
dividing point pools (fair shares, averages, proportional splits) are kept
as exact Fractions and only rounded once, here.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Decimal | Fraction | int) -> Decimal:
    """Round a value to cents, half away from zero."""
    if isinstance(value, Fraction):
        value = Decimal(value.numerator) / Decimal(value.denominator)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value: Decimal | Fraction | int) -> int:
    return int(to_money(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def to_points(value: Fraction | int) -> Decimal:
    """Render a point total for display (two decimal places at most)."""
    return to_money(value)


def allocate_cents(exact: Mapping[str, Fraction], total_cents: int) -> dict[str, int]:
    """
    Round exact shares to whole cents so they add up to total_cents.

    Largest-remainder method: every share is floored, then the leftover cents go
    to the shares with the biggest remainders. Ties are broken by key order in
    the mapping so the result is deterministic.
    """
    floors = {key: _floor_cents(value) for key, value in exact.items()}
    leftover = total_cents - sum(floors.values())
    if not floors:
        return floors
    order = sorted(
        exact,
        key=lambda key: exact[key] * 100 - floors[key],
        reverse=leftover > 0,
    )
    step = 1 if leftover > 0 else -1
    for key in order[: abs(leftover)]:
        floors[key] += step
    return floors


def zero_sum_money(exact: Mapping[str, Fraction]) -> dict[str, Decimal]:
    """Round a zero-sum mapping of exact amounts to cents, keeping the sum at zero."""
    cents = allocate_cents(exact, 0)
    return {key: from_cents(value) for key, value in cents.items()}


def _floor_cents(value: Fraction) -> int:
    return math.floor(value * 100)
