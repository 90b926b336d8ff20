from __future__ import annotations

from typing import Iterable

from src.catalog.programs import Program
from src.money import percentage_of
from src.pricing.breakdown import CostRange, DiscountStep


def _apply_percentages(price: float, percentages: list[float]) -> float:
    running = price
    for percentage in percentages:
        running -= percentage_of(running, percentage)
    return running


def derive_cost_range(program: Program, steps: Iterable[DiscountStep]) -> CostRange | None:
    """Project the typical-credit breakdown onto the min and max credit points.

    Each percentage step already recorded for the typical price is replayed, in
    order and with the same rounding, against the min and max standard prices.
    Flat steps (cohort, reimbursement) are not projected; selections with a
    cohort override get no range.
    """
    if not program.is_variable:
        return None

    recorded = list(steps)
    if any(step.type.startswith("cohort-") for step in recorded):
        return None

    percentages = [float(step.percentage) for step in recorded if step.percentage is not None]
    credit_range = program.credit_range
    return CostRange(
        min_credits=credit_range.min_credits,
        min_price=_apply_percentages(program.price_for_credits(credit_range.min_credits), percentages),
        typical_credits=credit_range.typical_credits,
        typical_price=_apply_percentages(program.standard_price, percentages),
        max_credits=credit_range.max_credits,
        max_price=_apply_percentages(program.price_for_credits(credit_range.max_credits), percentages),
    )
