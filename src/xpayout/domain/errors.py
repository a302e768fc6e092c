# src/xpayout/domain/errors.py
"""
Domain Errors - Calculation and Reference Data Exceptions

This module defines domain-specific exceptions raised by the calculation
engine and the rate adapters. Callers decide how to surface them.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class UnknownCurrencyError(DomainError):
    """Raised when a currency code is not present in the catalog."""

    def __init__(self, code: str):
        super().__init__(f"Unknown currency: {code!r}")
        self.code = code


class NoTierAvailableError(DomainError):
    """Raised when a currency has no configured fee tiers."""

    def __init__(self, code: str):
        super().__init__(f"No fee tiers configured for {code}")
        self.code = code


class UnavailableRateError(DomainError):
    """Raised when the exchange rate needed for a calculation is missing."""

    def __init__(self, code: str):
        super().__init__(f"Exchange rate for {code} not available")
        self.code = code


class ProviderUnavailableError(DomainError):
    """Raised when the exchange rate provider cannot be reached or answers garbage."""
    pass


class InvalidAmountError(DomainError, ValueError):
    """Raised by input validation when an amount is not acceptable."""
    pass
