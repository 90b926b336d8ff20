from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_currency(value: float) -> float:
    """Round to whole currency units, halves away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage_of(amount: float, percentage: float) -> float:
    return round_currency(amount * percentage / 100.0)
