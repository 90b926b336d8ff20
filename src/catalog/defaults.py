"""Authored program catalog and partner directory."""

from __future__ import annotations

from typing import Any

CATALOG_VERSION = "2026.10"

DEFAULT_CATALOG_PAYLOAD: dict[str, Any] = {
    "programs": [
        {
            "code": "mscs",
            "name": "Online M.S. in Computer Science",
            "category": "degree",
            "credits": {"type": "fixed", "value": 30},
            "price_per_credit": 1395,
            "duration_years": 2,
        },
        {
            "code": "mem",
            "name": "Online Master of Engineering Management",
            "category": "degree",
            "credits": {"type": "fixed", "value": 30},
            "price_per_credit": 1395,
            "duration_years": 2,
        },
        {
            "code": "mba",
            "name": "Online MBA",
            "category": "degree",
            "credits": {"type": "variable", "min": 39, "typical": 42, "max": 48},
            "price_per_credit": 1395,
            "duration_years": 2,
            "description": "Credit total depends on the chosen concentration.",
        },
        {
            "code": "meads",
            "name": "Online M.Eng. in Applied Data Science",
            "category": "degree",
            "credits": {"type": "fixed", "value": 30},
            "price_per_credit": 1000,
            "duration_years": 2,
        },
        {
            "code": "mscs-asap",
            "name": "Online MSCS: First Two Asynchronous Courses",
            "category": "pathway",
            "credits": {"type": "fixed", "value": 6},
            "price_per_credit": 875,
        },
        {
            "code": "cert-eai",
            "name": "Graduate Certificate in Enterprise AI",
            "category": "certificate",
            "credits": {"type": "fixed", "value": 9},
            "total_price": 5250,
        },
        {
            "code": "cert-ads",
            "name": "Graduate Certificate in Applied Data Science",
            "category": "certificate",
            "credits": {"type": "fixed", "value": 9},
            "total_price": 5250,
        },
    ],
    "partners": [
        {
            "id": "workforce-partner",
            "name": "Workforce Development Partner",
            "promotional_discount_eligible": True,
            "promotional_discount_valid_until": "2026-12-31",
            "residency_discount_eligible": True,
            "alumni_discount_eligible": True,
        },
        {
            "id": "pseg",
            "name": "PSEG",
            "has_special_cohort": True,
            "residency_discount_eligible": True,
            "alumni_discount_eligible": True,
            "cohort_pricing": {
                "mscs": {"per_credit": 1000, "description": "PSEG cohort tuition"},
                "cert-eai": {"per_credit": 500, "description": "PSEG Enterprise AI cohort"},
            },
        },
        {
            "id": "prudential",
            "name": "Prudential",
            "has_special_cohort": True,
            "alumni_discount_eligible": True,
            "cohort_pricing": {
                "mba": {"per_credit": 1100, "description": "Prudential leadership cohort"},
            },
        },
        {
            "id": "siemens",
            "name": "Siemens",
            "promotional_discount_eligible": True,
            "promotional_discount_valid_until": "2026-06-30",
            "alumni_discount_eligible": True,
        },
        {
            "id": "individual",
            "name": "No employer partnership",
            "residency_discount_eligible": True,
            "alumni_discount_eligible": True,
        },
    ],
}
