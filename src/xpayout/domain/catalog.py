# src/xpayout/domain/catalog.py
"""
Tier Catalog - Static Currency and Fee Tier Reference Data

This module holds the processor's fee schedule: the currencies it collects
in, the ordered fee tiers per currency, and the constants used by the two
payout models. Tier names are display templates and are left untouched here;
placeholder substitution belongs to xpayout.adapters.formatting.

Files that USE this module:
- xpayout.application.calculator (reads tiers, currencies and constants)
- xpayout.application.rates_service (lists currencies to request rates for)
- xpayout.adapters.telegram.handlers (lists currencies and tiers)
- xpayout.app (builds the catalog from settings)
- tests.test_catalog, tests.test_calculator (unit tests)

Files that this module USES:
- xpayout.domain.models (Currency, FeeTier)
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

from xpayout.domain.models import DEFAULT_SETTLEMENT_CURRENCY, Currency, FeeTier

# Processor margin over the interbank rate when converting funds
CONVERSION_MARKUP = 0.04
# Pass-through provider fee on the spot-converted gross amount
PASSTHROUGH_FEE_RATE = 0.01
# Tax charged on the pass-through provider fee
PASSTHROUGH_TAX_RATE = 0.18
# Largest amount the calculator accepts
MAX_AMOUNT = 9_999_999
# Fixed INR rates for currencies the rate API does not quote (INR per unit)
STATIC_RATES = {"AED": 23.88}


CURRENCIES: Tuple[Currency, ...] = (
    Currency("USD", "USD (United States)", "$", 0.30),
    Currency("GBP", "GBP (United Kingdom)", "£", 0.20),
    Currency("CAD", "CAD (Canada)", "C$", 0.55),
    Currency("AED", "AED (United Arab Emirates)", "AED", 0.30),
    Currency("SGD", "SGD (Singapore)", "S$", 0.50),
    Currency("CNY", "CNY (China)", "¥", 0.30),
    Currency("INR", "INR (India)", "₹", 3.00),
    Currency("AUD", "AUD (Australia)", "A$", 0.30),
    Currency("EUR", "EUR (Eurozone)", "€", 0.35),
)


def _standard_tiers(prefix: str, upto: str = "up to") -> Tuple[FeeTier, ...]:
    """Four-step schedule shared by most currencies, symbol placed before amounts."""
    return (
        FeeTier(f"{prefix}_tier1", "4.4% + {symbol}{fixedFee} (" + upto + " {symbol}3,000/month)", 4.4, None, 3000),
        FeeTier(f"{prefix}_tier2", "3.9% + {symbol}{fixedFee} ({symbol}3,000.01 – {symbol}10,000/month)", 3.9, 3000.01, 10000),
        FeeTier(f"{prefix}_tier3", "3.7% + {symbol}{fixedFee} ({symbol}10,000.01 – {symbol}100,000/month)", 3.7, 10000.01, 100000),
        FeeTier(f"{prefix}_tier4", "3.4% + {symbol}{fixedFee} (Above {symbol}100,000/month)", 3.4, 100000.01, None),
    )


FEE_STRUCTURE: Mapping[str, Tuple[FeeTier, ...]] = {
    "USD": _standard_tiers("usd"),
    "GBP": _standard_tiers("gbp"),
    "CAD": (
        FeeTier("cad_tier1", "4.4% + {fixedFee} {symbol} (up to 3,000 {symbol}/month)", 4.4, None, 3000),
        FeeTier("cad_tier2", "3.9% + {fixedFee} {symbol} (3,000.01 – 10,000 {symbol}/month)", 3.9, 3000.01, 10000),
        FeeTier("cad_tier3", "3.7% + {fixedFee} {symbol} (10,000.01 – 100,000 {symbol}/month)", 3.7, 10000.01, 100000),
        FeeTier("cad_tier4", "3.4% + {fixedFee} {symbol} (Above 100,000 {symbol}/month)", 3.4, 100000.01, None),
    ),
    "AED": _standard_tiers("aed"),
    "SGD": (
        FeeTier("sgd_tier1", "4.4% + {fixedFee} {symbol} (up to 5,000 {symbol}/month)", 4.4, None, 5000),
        FeeTier("sgd_tier2", "3.9% + {fixedFee} {symbol} (5,001 – 15,000 {symbol}/month)", 3.9, 5001, 15000),
        FeeTier("sgd_tier3", "3.7% + {fixedFee} {symbol} (15,001 – 25,000 {symbol}/month)", 3.7, 15001, 25000),
        FeeTier("sgd_tier4", "3.4% + {fixedFee} {symbol} (25,001 – 150,000 {symbol}/month)", 3.4, 25001, 150000),
        FeeTier("sgd_tier5", "3.2% + {fixedFee} {symbol} (Above 150,000 {symbol}/month)", 3.2, 150001, None),
    ),
    "CNY": _standard_tiers("cny"),
    # inr_local has no bounds and sits first, so it wins auto-selection
    "INR": (
        FeeTier("inr_local", "Local: 2.5% + {symbol}{fixedFee}", 2.5),
        FeeTier("inr_tier1", "International: 4.4% + {symbol}{fixedFee} (up to {symbol}3,000/month)", 4.4, None, 3000),
        FeeTier("inr_tier2", "International: 3.9% + {symbol}{fixedFee} ({symbol}3,000+ to {symbol}10,000/month)", 3.9, 3000.01, 10000),
        FeeTier("inr_tier3", "International: 3.7% + {symbol}{fixedFee} ({symbol}10,000+ to {symbol}100,000/month)", 3.7, 10000.01, 100000),
        FeeTier("inr_tier4", "International: 3.4% + {symbol}{fixedFee} (Above {symbol}100,000/month)", 3.4, 100000.01, None),
    ),
    "AUD": (
        FeeTier("aud_tier1", "4.4% + 0.30 AUD (up to 1,500 AUD/month)", 4.4, None, 1500),
        FeeTier("aud_tier2", "3.9% + 0.30 AUD (1,500.01 – 6,000 AUD/month)", 3.9, 1500.01, 6000),
        FeeTier("aud_tier3", "3.7% + 0.30 AUD (6,000.01 – 15,000 AUD/month)", 3.7, 6000.01, 15000),
        FeeTier("aud_tier4", "3.4% + 0.30 AUD (15,000.01 – 50,000 AUD/month)", 3.4, 15000.01, 50000),
    ),
    "EUR": _standard_tiers("eur", upto="Up to"),
}


class TierCatalog:
    """
    Read-only lookup over currencies and their ordered fee tiers.

    Also carries the settlement currency and the payout model constants so
    that one object describes a whole deployment.
    """

    def __init__(
        self,
        currencies: Sequence[Currency],
        tiers: Mapping[str, Sequence[FeeTier]],
        settlement_currency: str = DEFAULT_SETTLEMENT_CURRENCY,
        conversion_markup: float = CONVERSION_MARKUP,
        passthrough_fee_rate: float = PASSTHROUGH_FEE_RATE,
        passthrough_tax_rate: float = PASSTHROUGH_TAX_RATE,
        static_rates: Optional[Mapping[str, float]] = None,
    ):
        self._currencies = tuple(currencies)
        self._by_code = MappingProxyType({c.code: c for c in self._currencies})
        self._tiers = MappingProxyType({code: tuple(ts) for code, ts in tiers.items()})
        self.settlement_currency = settlement_currency
        self.conversion_markup = conversion_markup
        self.passthrough_fee_rate = passthrough_fee_rate
        self.passthrough_tax_rate = passthrough_tax_rate
        # settlement units per foreign unit, for currencies no provider quotes
        self.static_rates = MappingProxyType(
            {code: rate for code, rate in (static_rates or {}).items() if code != settlement_currency}
        )

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def currencies(self) -> Tuple[Currency, ...]:
        """All currencies in display order."""
        return self._currencies

    def currency_by_code(self, code: str) -> Optional[Currency]:
        """Return the currency for code, or None if it is not in the catalog."""
        return self._by_code.get(code)

    def tiers_for(self, code: str) -> Tuple[FeeTier, ...]:
        """Return the ordered tier list for code (empty if unknown or unconfigured)."""
        return self._tiers.get(code, ())


def build_catalog(
    settlement_currency: str = DEFAULT_SETTLEMENT_CURRENCY,
    conversion_markup: float = CONVERSION_MARKUP,
    passthrough_fee_rate: float = PASSTHROUGH_FEE_RATE,
    passthrough_tax_rate: float = PASSTHROUGH_TAX_RATE,
    static_rates: Optional[Mapping[str, float]] = None,
) -> TierCatalog:
    """
    Build a catalog over the built-in fee schedule with the given constants.

    Args:
        settlement_currency: Currency the merchant is paid out in
        conversion_markup: Processor margin over the interbank rate (0.04 = 4%)
        passthrough_fee_rate: Pass-through provider fee rate (0.01 = 1%)
        passthrough_tax_rate: Tax rate on the pass-through fee (0.18 = 18%)
        static_rates: Fixed rates for unquoted currencies; None uses STATIC_RATES
            when settling in INR and nothing otherwise

    Returns:
        TierCatalog instance
    """
    if static_rates is None:
        static_rates = STATIC_RATES if settlement_currency == DEFAULT_SETTLEMENT_CURRENCY else {}
    return TierCatalog(
        CURRENCIES,
        FEE_STRUCTURE,
        settlement_currency=settlement_currency,
        conversion_markup=conversion_markup,
        passthrough_fee_rate=passthrough_fee_rate,
        passthrough_tax_rate=passthrough_tax_rate,
        static_rates=static_rates,
    )


DEFAULT_CATALOG = build_catalog()
