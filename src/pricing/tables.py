from __future__ import annotations

from datetime import date
from typing import Iterable

import pandas as pd

from src.pricing.breakdown import CostBreakdown
from src.pricing.config import PricingConfig, get_default_config
from src.pricing.engine import CostOptions, compute_cost

STEP_COLUMNS = [
    "position",
    "type",
    "name",
    "percentage",
    "discount_amount",
    "price_before",
    "price_after",
]

PRICE_MATRIX_COLUMNS = [
    "program_code",
    "program_name",
    "partner_id",
    "partner_name",
    "has_special_cohort",
    "base_price",
    "final_price",
    "total_discount",
    "percent_saved",
    "step_types",
]


def steps_frame(breakdown: CostBreakdown) -> pd.DataFrame:
    rows = [
        {
            "position": position,
            "type": step.type,
            "name": step.name,
            "percentage": step.percentage,
            "discount_amount": step.discount_amount,
            "price_before": step.price_before,
            "price_after": step.price_after,
        }
        for position, step in enumerate(breakdown.steps, start=1)
    ]
    return pd.DataFrame(rows, columns=STEP_COLUMNS)


def build_price_matrix(
    options: CostOptions | None = None,
    *,
    config: PricingConfig | None = None,
    today: date | None = None,
    program_codes: Iterable[str] | None = None,
    partner_ids: Iterable[str] | None = None,
) -> pd.DataFrame:
    """One row per program and partner, in authored catalog order."""
    active_config = config or get_default_config()
    effective_today = today or date.today()
    catalog = active_config.catalog

    programs = (
        [catalog.get_program(code) for code in program_codes]
        if program_codes is not None
        else catalog.list_programs()
    )
    partners = (
        [catalog.get_partner(partner_id) for partner_id in partner_ids]
        if partner_ids is not None
        else catalog.list_partners()
    )

    rows = []
    for program in programs:
        for partner in partners:
            breakdown = compute_cost(
                program.code,
                partner.id,
                options,
                config=active_config,
                today=effective_today,
            )
            rows.append(
                {
                    "program_code": program.code,
                    "program_name": program.name,
                    "partner_id": partner.id,
                    "partner_name": partner.name,
                    "has_special_cohort": breakdown.has_special_cohort,
                    "base_price": breakdown.base_price,
                    "final_price": breakdown.final_price,
                    "total_discount": breakdown.total_discount,
                    "percent_saved": breakdown.percent_saved,
                    "step_types": ",".join(breakdown.step_types()),
                }
            )
    return pd.DataFrame(rows, columns=PRICE_MATRIX_COLUMNS)


def summarize_price_matrix(matrix: pd.DataFrame) -> dict[str, object]:
    if matrix.empty:
        return {"rows": 0, "programs": 0, "partners": 0, "max_percent_saved": 0, "fully_covered": 0}
    return {
        "rows": int(matrix.shape[0]),
        "programs": int(matrix["program_code"].nunique()),
        "partners": int(matrix["partner_id"].nunique()),
        "max_percent_saved": int(matrix["percent_saved"].max()),
        "fully_covered": int(matrix["final_price"].le(0.0).sum()),
    }
