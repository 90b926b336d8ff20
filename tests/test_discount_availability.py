from __future__ import annotations

from datetime import date
from itertools import product

import pytest

from src.errors import UnknownProgramError
from src.pricing.availability import get_availability
from src.pricing.config import get_default_config
from src.pricing.engine import CostOptions, compute_cost

TODAY = date(2026, 10, 19)


def test_workforce_partner_sees_every_toggle_before_expiry() -> None:
    availability = get_availability("mscs", "workforce-partner", today=TODAY)

    assert availability.show_30_percent
    assert availability.show_hoboken
    assert availability.show_alumni
    assert availability.show_employer
    assert not availability.has_special_cohort
    assert availability.promotional_valid_until == date(2026, 12, 31)
    assert availability.message == "Corporate discounts available"


def test_promotional_toggle_hidden_after_expiry() -> None:
    availability = get_availability("mscs", "workforce-partner", today=date(2027, 1, 1))

    assert not availability.show_30_percent
    assert availability.promotional_valid_until is None


def test_certificate_offers_no_percentage_toggles() -> None:
    availability = get_availability("cert-eai", "individual", today=TODAY)

    assert not availability.show_30_percent
    assert not availability.show_hoboken
    assert not availability.show_alumni
    assert availability.show_employer
    assert availability.message.startswith("Certificates have fixed pricing")


def test_cohort_partner_reports_special_cohort() -> None:
    availability = get_availability("mscs", "pseg", today=TODAY)

    assert availability.has_special_cohort
    assert not availability.show_30_percent
    assert availability.show_hoboken
    assert availability.to_dict()["message"] == "Exclusive cohort pricing for PSEG employees"


def test_unknown_program_raises() -> None:
    with pytest.raises(UnknownProgramError):
        get_availability("ms-unknown", "pseg", today=TODAY)


@pytest.mark.parametrize(
    "today", [date(2026, 6, 30), date(2026, 7, 1), date(2026, 12, 31), date(2027, 1, 1)]
)
def test_availability_matches_what_compute_cost_applies(today: date) -> None:
    catalog = get_default_config().catalog
    everything = CostOptions(
        apply_promotional_discount=True, is_residency_eligible=True, is_alumni_eligible=True
    )
    for program, partner in product(catalog.list_programs(), catalog.list_partners()):
        availability = get_availability(program.code, partner.id, today=today)
        step_types = compute_cost(program.code, partner.id, everything, today=today).step_types()

        assert availability.show_30_percent == ("promotional" in step_types)
        assert availability.show_hoboken == ("residency" in step_types)
        assert availability.show_alumni == ("alumni" in step_types)
        assert availability.has_special_cohort == any(t.startswith("cohort-") for t in step_types)
