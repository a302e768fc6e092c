# src/xpayout/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for external exchange rate APIs.
All providers implement the RateProvider interface.
"""

from xpayout.adapters.providers.base import RateProvider
from xpayout.adapters.providers.freecurrencyapi import FreeCurrencyAPIProvider

__all__ = [
    "RateProvider",
    "FreeCurrencyAPIProvider",
]
