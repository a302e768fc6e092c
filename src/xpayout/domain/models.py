# src/xpayout/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Currencies and their processor fee tiers
- Exchange rate snapshots
- Calculation inputs and results

Files that USE this module:
- xpayout.domain.catalog (builds the static currency/tier reference data)
- xpayout.application.* (engine and rates service use domain models)
- xpayout.adapters.* (formatting and telegram adapters read results)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math  # Finite checks for rates
from dataclasses import dataclass  # Decorator for creating data classes
from types import MappingProxyType  # Read-only view over a dict
from typing import Iterator, Mapping, Optional  # Type hints for mappings and optional values

# Currency the merchant is paid out in
DEFAULT_SETTLEMENT_CURRENCY = "INR"


@dataclass(frozen=True)
class Currency:
    """
    A currency the processor can collect payments in.

    Attributes:
        code: ISO currency code, unique key (e.g. "USD")
        name: Display name (e.g. "USD (United States)")
        symbol: Display symbol (e.g. "$")
        fixed_fee: Per-transaction fixed fee charged by the processor, in this currency
    """
    code: str
    name: str
    symbol: str
    fixed_fee: float


@dataclass(frozen=True)
class FeeTier:
    """
    Percentage fee schedule applying to a range of amounts for one currency.

    Attributes:
        id: Identifier, unique within the currency's tier list
        name: Display template; may contain {symbol} and {fixedFee} placeholders
        percentage: Percentage rate (0-100) applied to the gross amount
        min_amount: Inclusive lower bound, None means unbounded
        max_amount: Inclusive upper bound, None means unbounded
    """
    id: str
    name: str
    percentage: float
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None

    def contains(self, amount: float) -> bool:
        """Return True if amount falls inside [min_amount, max_amount]."""
        low = float("-inf") if self.min_amount is None else self.min_amount
        high = float("inf") if self.max_amount is None else self.max_amount
        return low <= amount <= high


class ExchangeRateTable(Mapping[str, float]):
    """
    Immutable snapshot of settlement units per one unit of foreign currency.

    The settlement currency always maps to 1. Any other code may be missing,
    which means its rate is unavailable for this snapshot.
    """

    def __init__(
        self,
        rates: Optional[Mapping[str, float]] = None,
        settlement_currency: str = DEFAULT_SETTLEMENT_CURRENCY,
    ):
        data = dict(rates or {})
        data[settlement_currency] = 1.0
        self._rates = MappingProxyType(data)
        self.settlement_currency = settlement_currency

    def __getitem__(self, code: str) -> float:
        return self._rates[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"ExchangeRateTable({dict(self._rates)!r}, settlement_currency={self.settlement_currency!r})"

    def rate_for(self, code: str) -> Optional[float]:
        """
        Get the usable rate for a currency.

        Args:
            code: Currency code

        Returns:
            Rate as float, or None if missing, non-finite or non-positive
        """
        rate = self._rates.get(code)
        if rate is None or not math.isfinite(rate) or rate <= 0:
            return None
        return rate


@dataclass(frozen=True)
class CalculationInput:
    """
    One payment to evaluate.

    Attributes:
        amount: Gross amount paid by the client, in the source currency
        currency_code: Source currency code
        tier_id: Selected fee tier; None triggers auto-selection by amount
    """
    amount: float
    currency_code: str
    tier_id: Optional[str] = None


@dataclass(frozen=True)
class CalculationResult:
    """
    Fee breakdown and payouts for one calculation. Values are unrounded.

    Attributes:
        currency: Source currency
        tier: Fee tier that was applied
        rate: Spot rate used (settlement units per source unit, 1 for settlement currency)
        percentage_fee: Processor percentage fee, in settlement currency
        percentage_fee_source: Processor percentage fee, in source currency
        fixed_fee: Processor fixed fee, in settlement currency
        fixed_fee_source: Processor fixed fee, in source currency
        conversion_fee: Cost of the conversion markup, in settlement currency
        final_settled: Amount received through the processor's own payout
        alternative_settled: Amount received through the pass-through payout
    """
    currency: Currency
    tier: FeeTier
    rate: float
    percentage_fee: float
    percentage_fee_source: float
    fixed_fee: float
    fixed_fee_source: float
    conversion_fee: float
    final_settled: float
    alternative_settled: float

    @property
    def conversion_fee_source(self) -> float:
        """Conversion fee expressed in the source currency at the spot rate."""
        return self.conversion_fee / self.rate

    @property
    def alternative_advantage(self) -> float:
        """How much more the pass-through payout delivers (negative if less)."""
        return self.alternative_settled - self.final_settled
