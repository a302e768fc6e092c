# src/xpayout/application/rates_service.py
"""
Rates Service - Exchange Rate Snapshots for the Calculator

This module turns raw market data from a rate provider into the
ExchangeRateTable the calculation engine consumes: rates are inverted to
"settlement units per one foreign unit" and the settlement currency is
pinned to 1. Currencies the provider never quotes (AED) get the catalog's
fixed rate on top of a successful snapshot.

A provider failure never fails the whole snapshot. The table then holds only
the settlement currency; calculations in other currencies fail later with
UnavailableRateError for the currency actually requested.

Files that USE this module:
- xpayout.app (creates the RatesService)
- xpayout.adapters.telegram.handlers (takes a snapshot per /calc)
- tests.test_rates_service (unit tests)

Files that this module USES:
- xpayout.adapters.providers.base (RateProvider interface)
- xpayout.domain.catalog (TierCatalog for currency list and settlement currency)
- xpayout.domain.models (ExchangeRateTable)
- xpayout.domain.errors (ProviderUnavailableError)
"""
from __future__ import annotations

import logging
import math
from typing import Dict, Mapping, Optional

from xpayout.adapters.providers.base import RateProvider
from xpayout.domain.catalog import DEFAULT_CATALOG, TierCatalog
from xpayout.domain.errors import ProviderUnavailableError
from xpayout.domain.models import ExchangeRateTable

log = logging.getLogger(__name__)


def invert_rates(raw: Mapping[str, object], settlement_currency: str) -> Dict[str, float]:
    """
    Invert "foreign per settlement unit" quotes into "settlement per foreign unit".

    Zero, negative and non-numeric quotes are skipped, so the currency stays
    unavailable instead of getting a made-up rate.

    Args:
        raw: Raw provider quotes keyed by currency code
        settlement_currency: Code that always maps to 1

    Returns:
        Inverted rates including settlement_currency -> 1.0
    """
    inverted: Dict[str, float] = {}
    for code, value in raw.items():
        try:
            quote = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            continue
        if not math.isfinite(quote) or quote <= 0:
            continue
        inverted[code] = 1.0 / quote
    inverted[settlement_currency] = 1.0
    return inverted


class RatesService:
    """
    Builds exchange rate snapshots for one catalog from one provider.
    """

    def __init__(self, provider: Optional[RateProvider], catalog: TierCatalog = DEFAULT_CATALOG):
        """
        Initialize rates service.

        Args:
            provider: RateProvider instance, or None when live rates are disabled
            catalog: Catalog whose currencies are quoted
        """
        self.provider = provider
        self.catalog = catalog
        self.last_error: Optional[str] = None

    def exchange_rate_table(self) -> ExchangeRateTable:
        """
        Take a fresh snapshot of settlement rates for all catalog currencies.

        Returns:
            ExchangeRateTable; only the settlement currency when the provider fails
        """
        settlement = self.catalog.settlement_currency
        if self.provider is None:
            self.last_error = "no rate provider configured"
            log.warning("No rate provider configured, only %s calculations are available", settlement)
            return ExchangeRateTable({}, settlement_currency=settlement)

        codes = [c.code for c in self.catalog.currencies()]
        try:
            raw = self.provider.latest_rates(settlement, codes)
        except ProviderUnavailableError as e:
            self.last_error = str(e)
            log.warning("Rate provider failed, continuing with %s only: %s", settlement, e)
            return ExchangeRateTable({}, settlement_currency=settlement)

        self.last_error = None
        rates = invert_rates(raw, settlement)
        # fixed rates only ride along with a successful live snapshot
        rates.update(self.catalog.static_rates)
        table = ExchangeRateTable(rates, settlement_currency=settlement)
        missing = [c for c in codes if c not in table]
        if missing:
            log.info("Rates unavailable for: %s", ", ".join(missing))
        return table
