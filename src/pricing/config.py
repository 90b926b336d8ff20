from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from src.catalog.catalog import Catalog
from src.catalog.defaults import CATALOG_VERSION, DEFAULT_CATALOG_PAYLOAD
from src.pricing.rules import DiscountRuleSet, ReimbursementPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PricingConfig:
    """Versioned bundle of everything a cost calculation reads."""

    version: str
    catalog: Catalog
    rules: DiscountRuleSet
    reimbursement: ReimbursementPolicy

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> PricingConfig:
        return cls(
            version=str(payload.get("version", "unversioned")),
            catalog=Catalog.from_mapping(payload),
            rules=DiscountRuleSet.from_mapping(payload.get("discounts")),
            reimbursement=ReimbursementPolicy.from_mapping(payload.get("employer_reimbursement")),
        )


def load_pricing_config(path: Path) -> PricingConfig:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Pricing config at '{path}' must be a JSON object.")
    config = PricingConfig.from_mapping(payload)
    logger.info(
        "Loaded pricing config version=%s programs=%d partners=%d from %s",
        config.version,
        len(config.catalog.programs),
        len(config.catalog.partners),
        path,
    )
    return config


@lru_cache(maxsize=1)
def get_default_config() -> PricingConfig:
    return PricingConfig(
        version=CATALOG_VERSION,
        catalog=Catalog.from_mapping(DEFAULT_CATALOG_PAYLOAD),
        rules=DiscountRuleSet.baseline(),
        reimbursement=ReimbursementPolicy.baseline(),
    )
