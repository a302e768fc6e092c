# src/xpayout/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Providers

This module defines the abstract base class for all exchange rate providers.
It establishes the contract that all provider implementations must follow.

Files that USE this module:
- xpayout.adapters.providers.freecurrencyapi (FreeCurrencyAPIProvider implements RateProvider)
- xpayout.application.rates_service (RatesService depends on RateProvider)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable


class RateProvider(ABC):
    @abstractmethod
    def latest_rates(self, base: str, currencies: Iterable[str]) -> Dict[str, float]:
        """
        Return raw market rates quoted against base.

        Values are units of each foreign currency per one unit of base, as
        market data APIs usually publish them. Missing currencies are omitted.

        Raises:
            ProviderUnavailableError: If the provider cannot deliver data
        """
        raise NotImplementedError
