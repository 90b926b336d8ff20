from __future__ import annotations

from datetime import date

import pytest

from src.errors import InvalidInputError, UnknownPartnerError, UnknownProgramError
from src.pricing.config import PricingConfig
from src.pricing.engine import CostOptions, compute_cost

TODAY = date(2026, 10, 19)


def _config_with(programs: list[dict], partners: list[dict]) -> PricingConfig:
    return PricingConfig.from_mapping({"version": "test", "programs": programs, "partners": partners})


def test_promotional_discount_on_fixed_program() -> None:
    breakdown = compute_cost(
        "mscs-asap",
        "workforce-partner",
        CostOptions(apply_promotional_discount=True),
        today=TODAY,
    )

    assert breakdown.base_price == 5250.0
    assert breakdown.final_price == 3675.0
    assert breakdown.percent_saved == 30
    assert breakdown.step_types() == ["promotional"]
    promotional = breakdown.steps[0]
    assert promotional.discount_amount == 1575.0
    assert promotional.percentage == 30.0
    assert promotional.valid_until == date(2026, 12, 31)


def test_reimbursement_is_capped_at_the_discounted_price() -> None:
    breakdown = compute_cost(
        "mscs-asap",
        "workforce-partner",
        CostOptions(apply_promotional_discount=True, employer_reimbursement=5000),
        today=TODAY,
    )

    assert breakdown.final_price == 0.0
    assert breakdown.percent_saved == 100
    assert breakdown.step_types() == ["promotional", "reimbursement"]
    assert breakdown.steps[0].discount_amount == 1575.0
    assert breakdown.steps[1].discount_amount == 3675.0


def test_variable_program_prices_at_typical_credits_with_range() -> None:
    config = _config_with(
        programs=[
            {
                "code": "ms-var",
                "name": "Variable Program",
                "credits": {"type": "variable", "min": 9, "typical": 12, "max": 15},
                "price_per_credit": 800,
            }
        ],
        partners=[{"id": "none", "name": "No partner"}],
    )

    breakdown = compute_cost("ms-var", "none", config=config, today=TODAY)

    assert breakdown.base_price == 9600.0
    assert breakdown.final_price == 9600.0
    assert breakdown.steps == ()
    assert breakdown.cost_range is not None
    assert (breakdown.cost_range.min_price, breakdown.cost_range.max_price) == (7200.0, 12000.0)
    assert breakdown.cost_range.typical_price == 9600.0


def test_unknown_program_produces_no_breakdown() -> None:
    with pytest.raises(UnknownProgramError):
        compute_cost("ms-unknown", "workforce-partner", today=TODAY)


def test_unknown_partner_produces_no_breakdown() -> None:
    with pytest.raises(UnknownPartnerError):
        compute_cost("mscs", "acme", today=TODAY)


def test_discounts_compound_in_fixed_order() -> None:
    breakdown = compute_cost(
        "mscs",
        "workforce-partner",
        CostOptions(
            apply_promotional_discount=True,
            is_residency_eligible=True,
            is_alumni_eligible=True,
        ),
        today=TODAY,
    )

    assert breakdown.step_types() == ["promotional", "residency", "alumni"]
    assert [step.discount_amount for step in breakdown.steps] == [12555.0, 1465.0, 1392.0]
    assert [step.price_after for step in breakdown.steps] == [29295.0, 27830.0, 26438.0]
    assert breakdown.final_price == 26438.0
    assert breakdown.total_discount == 15412.0
    assert breakdown.percent_saved == 37


def test_reimbursement_is_subtracted_last() -> None:
    breakdown = compute_cost(
        "mscs",
        "workforce-partner",
        CostOptions(
            apply_promotional_discount=True,
            is_residency_eligible=True,
            is_alumni_eligible=True,
            employer_reimbursement=10000,
        ),
        today=TODAY,
    )

    assert breakdown.step_types()[-1] == "reimbursement"
    assert breakdown.steps[-1].discount_amount == 10000.0
    assert breakdown.final_price == 16438.0


def test_cohort_override_savings_count_toward_percent_saved() -> None:
    breakdown = compute_cost(
        "mscs",
        "pseg",
        CostOptions(is_alumni_eligible=True),
        today=TODAY,
    )

    assert breakdown.base_price == 41850.0
    assert breakdown.step_types() == ["cohort-fixed", "alumni"]
    cohort_step, alumni_step = breakdown.steps
    assert cohort_step.discount_amount == 11850.0
    assert cohort_step.price_after == 30000.0
    assert alumni_step.discount_amount == 1500.0
    assert breakdown.final_price == 28500.0
    assert breakdown.percent_saved == 32
    assert breakdown.has_special_cohort
    assert breakdown.cohort_pricing == {
        "type": "per_credit",
        "per_credit": 1000.0,
        "credits": 30,
        "total_price": 30000.0,
    }


def test_variable_cohort_uses_typical_point_price() -> None:
    breakdown = compute_cost("mba", "prudential", today=TODAY)

    assert breakdown.step_types() == ["cohort-variable"]
    assert breakdown.steps[0].discount_amount == 12390.0
    assert breakdown.final_price == 46200.0
    assert breakdown.cost_range is None
    assert breakdown.cohort_pricing["credits"]["min"] == {"credits": 39, "price": 42900.0}
    assert breakdown.cohort_pricing["credits"]["max"] == {"credits": 48, "price": 52800.0}


def test_cohort_price_above_standard_is_recorded_with_zero_amount() -> None:
    config = _config_with(
        programs=[
            {
                "code": "cert-a",
                "name": "Certificate A",
                "category": "certificate",
                "credits": {"type": "fixed", "value": 9},
                "total_price": 5250,
            }
        ],
        partners=[
            {
                "id": "acme",
                "name": "Acme",
                "has_special_cohort": True,
                "cohort_pricing": {"cert-a": {"total_price": 6000}},
            }
        ],
    )

    breakdown = compute_cost("cert-a", "acme", config=config, today=TODAY)

    assert breakdown.step_types() == ["cohort-fixed"]
    assert breakdown.steps[0].discount_amount == 0.0
    assert breakdown.final_price == 5250.0
    assert breakdown.percent_saved == 0


def test_rule_excluded_for_cohort_selections_leaves_no_step() -> None:
    config = PricingConfig.from_mapping(
        {
            "programs": [
                {
                    "code": "ms-a",
                    "name": "Program A",
                    "credits": {"type": "fixed", "value": 10},
                    "price_per_credit": 1000,
                }
            ],
            "partners": [
                {
                    "id": "acme",
                    "name": "Acme",
                    "has_special_cohort": True,
                    "alumni_discount_eligible": True,
                    "cohort_pricing": {"ms-a": {"per_credit": 900}},
                }
            ],
            "discounts": {"alumni": {"excludes_special_cohort": True}},
        }
    )

    breakdown = compute_cost(
        "ms-a", "acme", CostOptions(is_alumni_eligible=True), config=config, today=TODAY
    )

    assert breakdown.step_types() == ["cohort-fixed"]
    assert breakdown.final_price == 9000.0


@pytest.mark.parametrize("reimbursement", [-1.0, float("nan"), float("inf")])
def test_invalid_reimbursement_is_rejected(reimbursement: float) -> None:
    with pytest.raises(InvalidInputError):
        compute_cost(
            "mscs",
            "individual",
            CostOptions(employer_reimbursement=reimbursement),
            today=TODAY,
        )


def test_zero_reimbursement_records_no_step() -> None:
    breakdown = compute_cost(
        "mscs", "individual", CostOptions(employer_reimbursement=0), today=TODAY
    )

    assert breakdown.steps == ()
    assert breakdown.final_price == breakdown.base_price


def test_breakdown_to_dict_is_json_ready() -> None:
    breakdown = compute_cost(
        "mscs-asap",
        "workforce-partner",
        CostOptions(apply_promotional_discount=True, employer_reimbursement=1000),
        today=TODAY,
    )

    payload = breakdown.to_dict()

    assert payload["program_code"] == "mscs-asap"
    assert payload["final_price"] == 2675.0
    assert payload["cohort_pricing"] is None
    assert payload["steps"][0]["valid_until"] == "2026-12-31"
    assert "percentage" not in payload["steps"][1]


def test_options_from_mapping_treats_blank_reimbursement_as_absent() -> None:
    options = CostOptions.from_mapping(
        {"apply_promotional_discount": True, "employer_reimbursement": ""}
    )

    assert options.apply_promotional_discount
    assert options.employer_reimbursement is None
