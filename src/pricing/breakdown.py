from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Literal

StepType = Literal[
    "cohort-fixed",
    "cohort-variable",
    "promotional",
    "residency",
    "alumni",
    "reimbursement",
]


@dataclass(frozen=True, slots=True)
class DiscountStep:
    type: StepType
    name: str
    description: str
    discount_amount: float
    price_before: float
    price_after: float
    percentage: float | None = None
    valid_until: date | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "discount_amount": self.discount_amount,
            "price_before": self.price_before,
            "price_after": self.price_after,
        }
        if self.percentage is not None:
            payload["percentage"] = self.percentage
        if self.valid_until is not None:
            payload["valid_until"] = self.valid_until.isoformat()
        return payload


@dataclass(frozen=True, slots=True)
class CostRange:
    """Min/typical/max prices for a variable-credit program after percentage discounts."""

    min_credits: int
    min_price: float
    typical_credits: int
    typical_price: float
    max_credits: int
    max_price: float

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            "min": {"credits": self.min_credits, "price": self.min_price},
            "typical": {"credits": self.typical_credits, "price": self.typical_price},
            "max": {"credits": self.max_credits, "price": self.max_price},
        }


@dataclass(frozen=True, slots=True)
class CostBreakdown:
    program_code: str
    program_name: str
    category: str
    duration_years: int
    base_price: float
    final_price: float
    total_discount: float
    percent_saved: int
    credits: dict[str, Any]
    steps: tuple[DiscountStep, ...]
    cohort_pricing: dict[str, Any] | None = None
    cost_range: CostRange | None = None
    config_version: str | None = None

    @property
    def has_special_cohort(self) -> bool:
        return self.cohort_pricing is not None

    def step_types(self) -> list[str]:
        return [step.type for step in self.steps]

    def find_step(self, step_type: str) -> DiscountStep | None:
        for step in self.steps:
            if step.type == step_type:
                return step
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "program_code": self.program_code,
            "program_name": self.program_name,
            "category": self.category,
            "duration_years": self.duration_years,
            "base_price": self.base_price,
            "final_price": self.final_price,
            "total_discount": self.total_discount,
            "percent_saved": self.percent_saved,
            "credits": dict(self.credits),
            "has_special_cohort": self.has_special_cohort,
            "cohort_pricing": self.cohort_pricing,
            "cost_range": self.cost_range.to_dict() if self.cost_range is not None else None,
            "steps": [step.to_dict() for step in self.steps],
            "config_version": self.config_version,
        }
