"""Number formatting for report entries."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero (12.5 -> 13, -12.5 -> -13)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def number_with_delimiter(value: Number) -> str:
    return f"{value:,}"


def number_to_currency(value: Number, unit: str = "$", precision: int = 2) -> str:
    quantum = Decimal(1).scaleb(-precision)
    amount = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{unit}{abs(amount):,.{precision}f}"


def percent(value: Number) -> str:
    return f"{round_half_up(value)}%"
