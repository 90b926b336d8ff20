"""Tuition cost resolution: discount rules, the engine, and its projections."""

from src.pricing.availability import DiscountAvailability, get_availability
from src.pricing.breakdown import CostBreakdown, CostRange, DiscountStep
from src.pricing.config import PricingConfig, get_default_config, load_pricing_config
from src.pricing.engine import CostOptions, compute_cost

__all__ = [
    "CostBreakdown",
    "CostOptions",
    "CostRange",
    "DiscountAvailability",
    "DiscountStep",
    "PricingConfig",
    "compute_cost",
    "get_availability",
    "get_default_config",
    "load_pricing_config",
]
