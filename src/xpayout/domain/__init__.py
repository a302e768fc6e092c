# src/xpayout/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, the fee catalog and business errors.
No dependencies on infrastructure or external systems.
"""

from xpayout.domain.models import (
    CalculationInput,
    CalculationResult,
    Currency,
    ExchangeRateTable,
    FeeTier,
)
from xpayout.domain.catalog import DEFAULT_CATALOG, TierCatalog, build_catalog
from xpayout.domain.errors import (
    DomainError,
    InvalidAmountError,
    NoTierAvailableError,
    ProviderUnavailableError,
    UnavailableRateError,
    UnknownCurrencyError,
)

__all__ = [
    "Currency",
    "FeeTier",
    "ExchangeRateTable",
    "CalculationInput",
    "CalculationResult",
    "TierCatalog",
    "DEFAULT_CATALOG",
    "build_catalog",
    "DomainError",
    "InvalidAmountError",
    "NoTierAvailableError",
    "ProviderUnavailableError",
    "UnavailableRateError",
    "UnknownCurrencyError",
]
