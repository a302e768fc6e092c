# src/xpayout/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the payout calculation engine and the service that
prepares exchange rate snapshots for it.
"""

from xpayout.application.calculator import calculate, resolve_tier
from xpayout.application.rates_service import RatesService, invert_rates

__all__ = [
    "calculate",
    "resolve_tier",
    "RatesService",
    "invert_rates",
]
