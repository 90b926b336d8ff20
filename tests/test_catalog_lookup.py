from __future__ import annotations

import pytest

from src.catalog.partners import CohortPricingTable, Partner
from src.catalog.programs import Program
from src.errors import NotFoundError, UnknownPartnerError, UnknownProgramError
from src.pricing.config import get_default_config


def test_get_program_returns_authored_entry() -> None:
    catalog = get_default_config().catalog

    mba = catalog.get_program("mba")

    assert mba.name == "Online MBA"
    assert mba.is_variable
    assert mba.standard_price == 58590.0
    assert mba.credits_info() == {"type": "variable", "min": 39, "typical": 42, "max": 48}


def test_get_program_unknown_code_raises_not_found() -> None:
    catalog = get_default_config().catalog

    with pytest.raises(UnknownProgramError) as excinfo:
        catalog.get_program("ms-underwater-basketweaving")

    assert isinstance(excinfo.value, NotFoundError)
    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.code == "ms-underwater-basketweaving"


def test_get_partner_unknown_id_raises_not_found() -> None:
    catalog = get_default_config().catalog

    with pytest.raises(UnknownPartnerError):
        catalog.get_partner("acme")


def test_list_partners_preserves_authored_order() -> None:
    catalog = get_default_config().catalog

    partner_ids = [partner.id for partner in catalog.list_partners()]

    assert partner_ids == ["workforce-partner", "pseg", "prudential", "siemens", "individual"]


def test_list_partners_returns_a_copy() -> None:
    catalog = get_default_config().catalog

    partners = catalog.list_partners()
    partners.clear()

    assert len(catalog.list_partners()) == 5


def test_fixed_total_defaults_to_credits_times_rate_unless_overridden() -> None:
    derived = Program(
        code="ms-a", name="A", pricing_mode="fixed", credit_count=30, price_per_credit=1395
    )
    overridden = Program(
        code="cert-a",
        name="Cert A",
        pricing_mode="fixed",
        category="certificate",
        credit_count=9,
        price_per_credit=1395,
        total_price=5250,
    )

    assert derived.standard_price == 41850.0
    assert overridden.standard_price == 5250.0
    assert overridden.credits_info() == {"type": "fixed", "value": 9}


def test_cohort_table_ignored_without_special_cohort_flag() -> None:
    program = Program(code="ms-a", name="A", pricing_mode="fixed", credit_count=10, price_per_credit=1000)
    table = CohortPricingTable.from_per_credit(program, 800)
    partner = Partner(id="acme", name="Acme", has_special_cohort=False, cohort_pricing={"ms-a": table})

    assert partner.cohort_table_for("ms-a") is None
    assert table.total_price == 8000.0


def test_cohort_pricing_is_read_only() -> None:
    partner = get_default_config().catalog.get_partner("pseg")

    with pytest.raises(TypeError):
        partner.cohort_pricing["mba"] = partner.cohort_pricing["mscs"]  # type: ignore[index]
