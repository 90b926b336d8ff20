from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from src.catalog.partners import CohortPricingTable, Partner
from src.catalog.programs import Program
from src.errors import InvalidInputError
from src.money import percentage_of, round_currency
from src.pricing.breakdown import CostBreakdown, DiscountStep
from src.pricing.config import PricingConfig, get_default_config
from src.pricing.cost_range import derive_cost_range
from src.pricing.rules import DiscountRule, is_rule_available

logger = logging.getLogger(__name__)

REIMBURSEMENT_STEP_NAME = "Employer Tuition Reimbursement"


@dataclass(frozen=True, slots=True)
class CostOptions:
    apply_promotional_discount: bool = False
    is_residency_eligible: bool = False
    is_alumni_eligible: bool = False
    employer_reimbursement: float | None = None

    def opted_in(self, rule: DiscountRule) -> bool:
        if rule.rule_type == "promotional":
            return self.apply_promotional_discount
        if rule.rule_type == "residency":
            return self.is_residency_eligible
        return self.is_alumni_eligible

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> CostOptions:
        values = payload or {}
        reimbursement = values.get("employer_reimbursement")
        if reimbursement == "":
            reimbursement = None
        return cls(
            apply_promotional_discount=bool(values.get("apply_promotional_discount", False)),
            is_residency_eligible=bool(values.get("is_residency_eligible", False)),
            is_alumni_eligible=bool(values.get("is_alumni_eligible", False)),
            employer_reimbursement=float(reimbursement) if reimbursement is not None else None,
        )


def validate_options(options: CostOptions) -> None:
    reimbursement = options.employer_reimbursement
    if reimbursement is None:
        return
    try:
        value = float(reimbursement)
    except (TypeError, ValueError):
        raise InvalidInputError(
            f"Employer reimbursement must be a number (received {reimbursement!r})."
        ) from None
    if not math.isfinite(value) or value < 0.0:
        raise InvalidInputError(
            f"Employer reimbursement must be a non-negative number (received {reimbursement!r})."
        )


def _cohort_step(
    program: Program, partner: Partner, table: CohortPricingTable
) -> tuple[DiscountStep, float]:
    standard = program.standard_price
    cohort_price = table.price
    # A cohort price above the standard price never raises what the student pays.
    price_after = min(standard, cohort_price)
    if program.is_variable:
        step_type = "cohort-variable"
        description = (
            f"Special pricing for {partner.name} employees, "
            f"based on {program.credit_range.typical_credits} credits"
        )
    else:
        step_type = "cohort-fixed"
        if table.per_credit is not None:
            description = (
                f"${table.per_credit:,.0f} per credit x {program.credit_count} credits "
                f"for {partner.name} employees"
            )
        else:
            description = f"Special pricing for {partner.name} employees"
    step = DiscountStep(
        type=step_type,
        name=table.description,
        description=description,
        discount_amount=max(0.0, standard - cohort_price),
        price_before=standard,
        price_after=price_after,
    )
    return step, price_after


def _percentage_step(rule: DiscountRule, partner: Partner, running_price: float) -> DiscountStep:
    discount_amount = percentage_of(running_price, rule.percentage)
    return DiscountStep(
        type=rule.rule_type,
        name=rule.name,
        description=rule.description,
        discount_amount=discount_amount,
        price_before=running_price,
        price_after=running_price - discount_amount,
        percentage=rule.percentage,
        valid_until=partner.promotional_discount_valid_until if rule.rule_type == "promotional" else None,
    )


def _reimbursement_step(amount: float, running_price: float) -> DiscountStep:
    applied = min(amount, running_price)
    if applied < amount:
        logger.debug(
            "Employer reimbursement %.2f capped at remaining price %.2f", amount, running_price
        )
    return DiscountStep(
        type="reimbursement",
        name=REIMBURSEMENT_STEP_NAME,
        description="Your employer contribution",
        discount_amount=applied,
        price_before=running_price,
        price_after=max(0.0, running_price - applied),
    )


def _percent_saved(base_price: float, final_price: float) -> int:
    if base_price <= 0:
        return 0
    return int(round_currency((base_price - final_price) / base_price * 100.0))


def compute_cost(
    program_code: str,
    partner_id: str,
    options: CostOptions | None = None,
    *,
    config: PricingConfig | None = None,
    today: date | None = None,
) -> CostBreakdown:
    """Resolve the out-of-pocket price for one program and partner selection.

    Steps are applied in a fixed order, each percentage compounding on the
    running price: cohort override, promotional, residency, alumni, then
    employer reimbursement. A discount whose gate is closed leaves no step.
    """
    active_config = config or get_default_config()
    active_options = options or CostOptions()
    effective_today = today or date.today()

    program = active_config.catalog.get_program(program_code)
    partner = active_config.catalog.get_partner(partner_id)
    validate_options(active_options)

    base_price = program.standard_price
    running_price = base_price
    steps: list[DiscountStep] = []

    cohort_table = partner.cohort_table_for(program.code)
    if cohort_table is not None:
        cohort_step, running_price = _cohort_step(program, partner, cohort_table)
        steps.append(cohort_step)

    for rule in active_config.rules.ordered():
        if not active_options.opted_in(rule):
            continue
        if not is_rule_available(
            rule, program, partner, has_cohort=cohort_table is not None, today=effective_today
        ):
            continue
        step = _percentage_step(rule, partner, running_price)
        steps.append(step)
        running_price = step.price_after

    reimbursement = active_options.employer_reimbursement
    if reimbursement is not None and float(reimbursement) > 0:
        step = _reimbursement_step(float(reimbursement), running_price)
        steps.append(step)
        running_price = step.price_after

    final_price = max(0.0, running_price)
    breakdown = CostBreakdown(
        program_code=program.code,
        program_name=program.name,
        category=program.category,
        duration_years=program.duration_years,
        base_price=base_price,
        final_price=final_price,
        total_discount=base_price - final_price,
        percent_saved=_percent_saved(base_price, final_price),
        credits=program.credits_info(),
        steps=tuple(steps),
        cohort_pricing=cohort_table.to_dict(program) if cohort_table is not None else None,
        cost_range=derive_cost_range(program, steps),
        config_version=active_config.version,
    )
    logger.debug(
        "Computed cost program=%s partner=%s base=%.2f final=%.2f steps=%s",
        program.code,
        partner.id,
        breakdown.base_price,
        breakdown.final_price,
        ",".join(breakdown.step_types()) or "-",
    )
    return breakdown
