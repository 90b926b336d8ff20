"""Static program catalog and partner directory."""

from src.catalog.catalog import Catalog
from src.catalog.partners import CohortPricingTable, CreditPoint, Partner
from src.catalog.programs import CreditRange, Program

__all__ = [
    "Catalog",
    "CohortPricingTable",
    "CreditPoint",
    "CreditRange",
    "Partner",
    "Program",
]
