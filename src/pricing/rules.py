from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal, Mapping

from src.catalog.partners import Partner
from src.catalog.programs import Program
from src.errors import InvalidInputError

PercentageRuleType = Literal["promotional", "residency", "alumni"]
PERCENTAGE_RULE_ORDER: tuple[PercentageRuleType, ...] = ("promotional", "residency", "alumni")


@dataclass(frozen=True, slots=True)
class DiscountRule:
    """A percentage discount and the program scope it applies to."""

    rule_type: PercentageRuleType
    name: str
    description: str
    percentage: float
    enabled: bool = True
    applicable_categories: tuple[str, ...] = ()
    excluded_programs: tuple[str, ...] = ()
    excludes_special_cohort: bool = False

    def __post_init__(self) -> None:
        if self.rule_type not in PERCENTAGE_RULE_ORDER:
            raise ValueError(f"Unsupported discount rule type: {self.rule_type!r}")
        value = float(self.percentage)
        if not math.isfinite(value) or value < 0.0 or value > 100.0:
            raise ValueError(f"Discount '{self.rule_type}' percentage must be between 0 and 100.")
        object.__setattr__(self, "applicable_categories", tuple(self.applicable_categories))
        object.__setattr__(self, "excluded_programs", tuple(self.excluded_programs))

    def applies_to(self, program: Program, *, has_cohort: bool) -> bool:
        if not self.enabled:
            return False
        if program.code in self.excluded_programs:
            return False
        if self.applicable_categories and program.category not in self.applicable_categories:
            return False
        if self.excludes_special_cohort and has_cohort:
            return False
        return True

    @classmethod
    def from_mapping(
        cls, rule_type: PercentageRuleType, payload: Mapping[str, Any] | None, baseline: DiscountRule
    ) -> DiscountRule:
        values = payload or {}
        return cls(
            rule_type=rule_type,
            name=str(values.get("name", baseline.name)),
            description=str(values.get("description", baseline.description)),
            percentage=float(values.get("percentage", baseline.percentage)),
            enabled=bool(values.get("enabled", baseline.enabled)),
            applicable_categories=tuple(
                values.get("applicable_categories", baseline.applicable_categories)
            ),
            excluded_programs=tuple(values.get("excluded_programs", baseline.excluded_programs)),
            excludes_special_cohort=bool(
                values.get("excludes_special_cohort", baseline.excludes_special_cohort)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "percentage": self.percentage,
            "enabled": self.enabled,
            "applicable_categories": list(self.applicable_categories),
            "excluded_programs": list(self.excluded_programs),
            "excludes_special_cohort": self.excludes_special_cohort,
        }


@dataclass(frozen=True, slots=True)
class DiscountRuleSet:
    promotional: DiscountRule
    residency: DiscountRule
    alumni: DiscountRule

    def ordered(self) -> tuple[DiscountRule, ...]:
        """Percentage rules in application order."""
        return tuple(getattr(self, rule_type) for rule_type in PERCENTAGE_RULE_ORDER)

    @classmethod
    def baseline(cls) -> DiscountRuleSet:
        return cls(
            promotional=DiscountRule(
                rule_type="promotional",
                name="Workforce Partner Discount",
                description="Limited-time tuition discount for employees of workforce partners.",
                percentage=30.0,
                applicable_categories=("degree", "pathway"),
                excluded_programs=("meads",),
            ),
            residency=DiscountRule(
                rule_type="residency",
                name="Hoboken Resident Discount",
                description="Tuition discount for residents of Hoboken.",
                percentage=5.0,
                applicable_categories=("degree",),
            ),
            alumni=DiscountRule(
                rule_type="alumni",
                name="Alumni Discount",
                description="Tuition discount for alumni of the university.",
                percentage=5.0,
                applicable_categories=("degree",),
            ),
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> DiscountRuleSet:
        values = payload or {}
        baseline = cls.baseline()
        return cls(
            promotional=DiscountRule.from_mapping(
                "promotional", values.get("promotional"), baseline.promotional
            ),
            residency=DiscountRule.from_mapping("residency", values.get("residency"), baseline.residency),
            alumni=DiscountRule.from_mapping("alumni", values.get("alumni"), baseline.alumni),
        )

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {rule.rule_type: rule.to_dict() for rule in self.ordered()}


@dataclass(frozen=True, slots=True)
class ReimbursementPolicy:
    default_annual: float
    max_annual: float
    typical_years: int

    def __post_init__(self) -> None:
        for field_name in ("default_annual", "max_annual"):
            value = float(getattr(self, field_name))
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"Reimbursement '{field_name}' must be a non-negative number.")
        if self.default_annual > self.max_annual:
            raise ValueError("Reimbursement default_annual cannot exceed max_annual.")
        if self.typical_years < 1:
            raise ValueError("Reimbursement typical_years must be at least 1.")

    @classmethod
    def baseline(cls) -> ReimbursementPolicy:
        return cls(default_annual=5250.0, max_annual=20500.0, typical_years=2)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> ReimbursementPolicy:
        values = payload or {}
        baseline = cls.baseline()
        return cls(
            default_annual=float(values.get("default_annual", baseline.default_annual)),
            max_annual=float(values.get("max_annual", baseline.max_annual)),
            typical_years=int(values.get("typical_years", baseline.typical_years)),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "default_annual": self.default_annual,
            "max_annual": self.max_annual,
            "typical_years": self.typical_years,
        }

    def years_for(self, program: Program) -> int:
        if program.is_certificate:
            return 1
        if program.duration_years > 1:
            return program.duration_years
        return self.typical_years

    def default_reimbursement(self, program: Program) -> float:
        return self.default_annual * self.years_for(program)

    def annual_reimbursement_total(self, program: Program, annual: float) -> float:
        value = float(annual)
        if not math.isfinite(value) or value < 0.0:
            raise InvalidInputError(f"Annual reimbursement must be a non-negative number (received {annual!r}).")
        return min(value, self.max_annual) * self.years_for(program)


def is_promotion_active(partner: Partner, today: date) -> bool:
    if not partner.promotional_discount_eligible:
        return False
    valid_until = partner.promotional_discount_valid_until
    return valid_until is None or today <= valid_until


def partner_allows(rule: DiscountRule, partner: Partner, today: date) -> bool:
    if rule.rule_type == "promotional":
        return is_promotion_active(partner, today)
    if rule.rule_type == "residency":
        return partner.residency_discount_eligible
    return partner.alumni_discount_eligible


def is_rule_available(
    rule: DiscountRule, program: Program, partner: Partner, *, has_cohort: bool, today: date
) -> bool:
    """Whether a rule could apply to this selection if the user opts in."""
    return rule.applies_to(program, has_cohort=has_cohort) and partner_allows(rule, partner, today)
