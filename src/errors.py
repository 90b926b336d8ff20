from __future__ import annotations


class PricingError(Exception):
    """Base class for failures that abort a cost calculation."""


class NotFoundError(PricingError, LookupError):
    pass


class UnknownProgramError(NotFoundError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Program '{code}' not found in catalog.")
        self.code = code


class UnknownPartnerError(NotFoundError):
    def __init__(self, partner_id: str) -> None:
        super().__init__(f"Partner '{partner_id}' not found in directory.")
        self.partner_id = partner_id


class InvalidInputError(PricingError, ValueError):
    pass
