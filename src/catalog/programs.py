from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, Mapping

PricingMode = Literal["fixed", "variable"]
PRICING_MODES: tuple[str, ...] = ("fixed", "variable")


def _require_positive(value: float | None, label: str) -> None:
    if value is None:
        return
    if not math.isfinite(float(value)) or float(value) <= 0:
        raise ValueError(f"{label} must be a positive number (received {value!r}).")


@dataclass(frozen=True, slots=True)
class CreditRange:
    min_credits: int
    typical_credits: int
    max_credits: int

    def __post_init__(self) -> None:
        for field_name in ("min_credits", "typical_credits", "max_credits"):
            _require_positive(getattr(self, field_name), field_name)
        if not (self.min_credits <= self.typical_credits <= self.max_credits):
            raise ValueError(
                "Credit range must satisfy min <= typical <= max "
                f"(received {self.min_credits}/{self.typical_credits}/{self.max_credits})."
            )

    def as_points(self) -> dict[str, int]:
        return {
            "min": self.min_credits,
            "typical": self.typical_credits,
            "max": self.max_credits,
        }


@dataclass(frozen=True, slots=True)
class Program:
    """A catalog entry priced either over a fixed credit count or a credit range."""

    code: str
    name: str
    pricing_mode: PricingMode
    category: str = "degree"
    credit_count: int | None = None
    price_per_credit: float | None = None
    total_price: float | None = None
    credit_range: CreditRange | None = None
    duration_years: int = 1
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("Program code must be non-empty.")
        if self.pricing_mode not in PRICING_MODES:
            raise ValueError(f"Unsupported pricing mode for '{self.code}': {self.pricing_mode!r}")
        _require_positive(self.price_per_credit, f"{self.code}.price_per_credit")
        _require_positive(self.total_price, f"{self.code}.total_price")
        if self.duration_years < 1:
            raise ValueError(f"{self.code}.duration_years must be at least 1.")

        if self.pricing_mode == "fixed":
            if self.credit_range is not None:
                raise ValueError(f"Fixed-mode program '{self.code}' cannot define a credit range.")
            if self.credit_count is None:
                raise ValueError(f"Fixed-mode program '{self.code}' requires credit_count.")
            _require_positive(self.credit_count, f"{self.code}.credit_count")
            if self.price_per_credit is None and self.total_price is None:
                raise ValueError(
                    f"Fixed-mode program '{self.code}' requires price_per_credit or total_price."
                )
            if self.total_price is None:
                object.__setattr__(
                    self, "total_price", float(self.credit_count * self.price_per_credit)
                )
        else:
            if self.credit_count is not None or self.total_price is not None:
                raise ValueError(
                    f"Variable-mode program '{self.code}' cannot define credit_count or total_price."
                )
            if self.credit_range is None or self.price_per_credit is None:
                raise ValueError(
                    f"Variable-mode program '{self.code}' requires credit_range and price_per_credit."
                )

    @property
    def is_variable(self) -> bool:
        return self.pricing_mode == "variable"

    @property
    def is_certificate(self) -> bool:
        return self.category == "certificate"

    @property
    def standard_price(self) -> float:
        if self.pricing_mode == "fixed":
            return float(self.total_price)
        return self.price_for_credits(self.credit_range.typical_credits)

    def price_for_credits(self, credits: int) -> float:
        if self.price_per_credit is None:
            raise ValueError(f"Program '{self.code}' has no per-credit price.")
        return float(credits * self.price_per_credit)

    def credits_info(self) -> dict[str, Any]:
        if self.pricing_mode == "fixed":
            return {"type": "fixed", "value": self.credit_count}
        return {
            "type": "variable",
            "min": self.credit_range.min_credits,
            "typical": self.credit_range.typical_credits,
            "max": self.credit_range.max_credits,
        }

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Program:
        credits = payload.get("credits") or {}
        pricing_mode = str(credits.get("type", payload.get("pricing_mode", "fixed")))
        credit_range = None
        credit_count = None
        if pricing_mode == "variable":
            credit_range = CreditRange(
                min_credits=int(credits["min"]),
                typical_credits=int(credits["typical"]),
                max_credits=int(credits["max"]),
            )
        elif credits.get("value") is not None:
            credit_count = int(credits["value"])

        price_per_credit = payload.get("price_per_credit")
        total_price = payload.get("total_price")
        return cls(
            code=str(payload["code"]),
            name=str(payload["name"]),
            pricing_mode=pricing_mode,  # type: ignore[arg-type]
            category=str(payload.get("category", "degree")),
            credit_count=credit_count,
            price_per_credit=float(price_per_credit) if price_per_credit is not None else None,
            total_price=float(total_price) if total_price is not None else None,
            credit_range=credit_range,
            duration_years=int(payload.get("duration_years", 1)),
            description=payload.get("description"),
        )
