from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from src.pricing.config import PricingConfig, get_default_config
from src.pricing.rules import is_rule_available


@dataclass(frozen=True, slots=True)
class DiscountAvailability:
    """Which optional discount toggles a calculator should offer."""

    show_30_percent: bool
    show_hoboken: bool
    show_alumni: bool
    show_employer: bool
    has_special_cohort: bool
    promotional_valid_until: date | None
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "show_30_percent": self.show_30_percent,
            "show_hoboken": self.show_hoboken,
            "show_alumni": self.show_alumni,
            "show_employer": self.show_employer,
            "has_special_cohort": self.has_special_cohort,
            "promotional_valid_until": (
                self.promotional_valid_until.isoformat() if self.promotional_valid_until else None
            ),
            "message": self.message,
        }


def get_availability(
    program_code: str,
    partner_id: str,
    *,
    config: PricingConfig | None = None,
    today: date | None = None,
) -> DiscountAvailability:
    active_config = config or get_default_config()
    effective_today = today or date.today()

    program = active_config.catalog.get_program(program_code)
    partner = active_config.catalog.get_partner(partner_id)
    has_cohort = partner.cohort_table_for(program.code) is not None

    flags = {
        rule.rule_type: is_rule_available(
            rule, program, partner, has_cohort=has_cohort, today=effective_today
        )
        for rule in active_config.rules.ordered()
    }

    if has_cohort:
        message = f"Exclusive cohort pricing for {partner.name} employees"
    elif program.is_certificate:
        message = "Certificates have fixed pricing aligned with employer reimbursement limits"
    elif any(flags.values()):
        message = "Corporate discounts available"
    else:
        message = "Standard tuition applies"

    return DiscountAvailability(
        show_30_percent=flags["promotional"],
        show_hoboken=flags["residency"],
        show_alumni=flags["alumni"],
        show_employer=True,
        has_special_cohort=has_cohort,
        promotional_valid_until=partner.promotional_discount_valid_until if flags["promotional"] else None,
        message=message,
    )
