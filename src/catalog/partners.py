from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Mapping

from src.catalog.programs import Program
from src.money import round_currency

CREDIT_POINTS: tuple[str, ...] = ("min", "typical", "max")
DEFAULT_COHORT_DESCRIPTION = "Corporate cohort pricing"


@dataclass(frozen=True, slots=True)
class CreditPoint:
    credits: int
    price: float

    def to_dict(self) -> dict[str, float]:
        return {"credits": self.credits, "price": self.price}


@dataclass(frozen=True, slots=True)
class CohortPricingTable:
    """Partner-specific price for one program.

    Fixed-mode programs carry ``per_credit`` and ``total_price``. Variable-mode
    programs carry one ``CreditPoint`` per named credit point.
    """

    per_credit: float | None = None
    total_price: float | None = None
    points: Mapping[str, CreditPoint] | None = None
    description: str = DEFAULT_COHORT_DESCRIPTION

    def __post_init__(self) -> None:
        for field_name in ("per_credit", "total_price"):
            value = getattr(self, field_name)
            if value is not None and (not math.isfinite(float(value)) or float(value) < 0):
                raise ValueError(f"Cohort '{field_name}' must be a non-negative number.")
        if self.points is not None:
            missing = [name for name in CREDIT_POINTS if name not in self.points]
            if missing:
                raise ValueError(f"Cohort pricing points missing: {', '.join(missing)}.")
            object.__setattr__(self, "points", MappingProxyType(dict(self.points)))
        if self.total_price is None and self.points is None:
            raise ValueError("Cohort pricing requires a total_price or credit points.")

    @property
    def price(self) -> float:
        """Price the engine uses in place of the program's standard price."""
        if self.points is not None:
            return float(self.points["typical"].price)
        return float(self.total_price)

    def validate_for(self, program: Program) -> None:
        if program.is_variable:
            if self.points is None:
                raise ValueError(
                    f"Cohort pricing for variable program '{program.code}' needs min/typical/max points."
                )
            expected = program.credit_range.as_points()
            for name in CREDIT_POINTS:
                if self.points[name].credits != expected[name]:
                    raise ValueError(
                        f"Cohort '{name}' point for '{program.code}' covers "
                        f"{self.points[name].credits} credits, expected {expected[name]}."
                    )
        elif self.total_price is None:
            raise ValueError(f"Cohort pricing for fixed program '{program.code}' needs a total_price.")

    def to_dict(self, program: Program) -> dict[str, Any]:
        if program.is_variable:
            return {
                "type": "per_credit",
                "per_credit": self.per_credit,
                "credits": {name: self.points[name].to_dict() for name in CREDIT_POINTS},
            }
        return {
            "type": "per_credit" if self.per_credit is not None else "flat",
            "per_credit": self.per_credit,
            "credits": program.credit_count,
            "total_price": self.total_price,
        }

    @classmethod
    def from_per_credit(
        cls, program: Program, per_credit: float, *, description: str | None = None
    ) -> CohortPricingTable:
        kwargs: dict[str, Any] = {"per_credit": float(per_credit)}
        if description:
            kwargs["description"] = description
        if program.is_variable:
            kwargs["points"] = {
                name: CreditPoint(credits=credits, price=round_currency(per_credit * credits))
                for name, credits in program.credit_range.as_points().items()
            }
        else:
            kwargs["total_price"] = round_currency(per_credit * program.credit_count)
        return cls(**kwargs)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], program: Program) -> CohortPricingTable:
        description = payload.get("description")
        if payload.get("points"):
            points = {
                name: CreditPoint(credits=int(point["credits"]), price=float(point["price"]))
                for name, point in payload["points"].items()
            }
            per_credit = payload.get("per_credit")
            table = cls(
                per_credit=float(per_credit) if per_credit is not None else None,
                points=points,
                description=description or DEFAULT_COHORT_DESCRIPTION,
            )
        elif payload.get("total_price") is not None:
            per_credit = payload.get("per_credit")
            table = cls(
                per_credit=float(per_credit) if per_credit is not None else None,
                total_price=float(payload["total_price"]),
                description=description or DEFAULT_COHORT_DESCRIPTION,
            )
        elif payload.get("per_credit") is not None:
            table = cls.from_per_credit(program, float(payload["per_credit"]), description=description)
        else:
            raise ValueError(f"Cohort pricing for '{program.code}' defines no price.")
        table.validate_for(program)
        return table


@dataclass(frozen=True, slots=True)
class Partner:
    id: str
    name: str
    has_special_cohort: bool = False
    promotional_discount_eligible: bool = False
    promotional_discount_valid_until: date | None = None
    residency_discount_eligible: bool = False
    alumni_discount_eligible: bool = False
    cohort_pricing: Mapping[str, CohortPricingTable] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Partner id must be non-empty.")
        object.__setattr__(self, "cohort_pricing", MappingProxyType(dict(self.cohort_pricing)))

    def cohort_table_for(self, program_code: str) -> CohortPricingTable | None:
        if not self.has_special_cohort:
            return None
        return self.cohort_pricing.get(program_code)

    @classmethod
    def from_mapping(
        cls, payload: Mapping[str, Any], programs: Mapping[str, Program]
    ) -> Partner:
        partner_id = str(payload["id"])
        cohort_pricing: dict[str, CohortPricingTable] = {}
        for program_code, table_payload in (payload.get("cohort_pricing") or {}).items():
            program = programs.get(program_code)
            if program is None:
                raise ValueError(
                    f"Partner '{partner_id}' has cohort pricing for unknown program '{program_code}'."
                )
            cohort_pricing[program_code] = CohortPricingTable.from_mapping(table_payload, program)

        valid_until = payload.get("promotional_discount_valid_until")
        if isinstance(valid_until, str):
            valid_until = date.fromisoformat(valid_until)

        return cls(
            id=partner_id,
            name=str(payload["name"]),
            has_special_cohort=bool(payload.get("has_special_cohort", False)),
            promotional_discount_eligible=bool(payload.get("promotional_discount_eligible", False)),
            promotional_discount_valid_until=valid_until,
            residency_discount_eligible=bool(payload.get("residency_discount_eligible", False)),
            alumni_discount_eligible=bool(payload.get("alumni_discount_eligible", False)),
            cohort_pricing=cohort_pricing,
        )
