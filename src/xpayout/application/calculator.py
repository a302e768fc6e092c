# src/xpayout/application/calculator.py
"""
Fee Calculator - Payout Comparison Engine

This module contains the core business logic: it resolves the processor fee
tier for a payment, applies the percentage and fixed processor fees and the
conversion markup, and computes the payout under both the processor's own
model and the pass-through model.

The engine is a pure function of its arguments. It does no I/O, does not
log, keeps no state and returns unrounded values; rounding is left to
presentation.

Files that USE this module:
- xpayout.adapters.telegram.handlers (runs calculations for /calc)
- tests.test_calculator (unit tests)

Files that this module USES:
- xpayout.domain.catalog (TierCatalog, DEFAULT_CATALOG)
- xpayout.domain.models (inputs, results, rate snapshots)
- xpayout.domain.errors (typed calculation failures)
"""
from __future__ import annotations

from typing import Optional, Sequence

from xpayout.domain.catalog import DEFAULT_CATALOG, TierCatalog
from xpayout.domain.errors import NoTierAvailableError, UnavailableRateError, UnknownCurrencyError
from xpayout.domain.models import CalculationInput, CalculationResult, ExchangeRateTable, FeeTier


def resolve_tier(tiers: Sequence[FeeTier], tier_id: Optional[str], amount: float) -> Optional[FeeTier]:
    """
    Pick the fee tier that applies to a payment.

    Order matters and overlapping bounds are resolved by list position:
    1. the tier whose id equals tier_id, if any
    2. the first tier whose [min, max] contains amount
    3. the first tier of the list

    Args:
        tiers: Ordered tier list for one currency
        tier_id: Explicitly selected tier id, or None
        amount: Gross amount in the source currency

    Returns:
        Selected FeeTier, or None if tiers is empty
    """
    if tier_id is not None:
        for tier in tiers:
            if tier.id == tier_id:
                return tier
    for tier in tiers:
        if tier.contains(amount):
            return tier
    return tiers[0] if tiers else None


def calculate(
    inp: CalculationInput,
    rates: ExchangeRateTable,
    catalog: TierCatalog = DEFAULT_CATALOG,
) -> CalculationResult:
    """
    Compute the fee breakdown and both payouts for one payment.

    Args:
        inp: Amount, source currency and optional tier selection
        rates: Snapshot of settlement units per foreign unit
        catalog: Currencies, tiers and payout constants

    Returns:
        CalculationResult with unrounded values

    Raises:
        UnknownCurrencyError: If the currency is not in the catalog
        NoTierAvailableError: If the currency has no fee tiers
        UnavailableRateError: If a foreign currency has no usable rate
    """
    currency = catalog.currency_by_code(inp.currency_code)
    if currency is None:
        raise UnknownCurrencyError(inp.currency_code)

    tier = resolve_tier(catalog.tiers_for(currency.code), inp.tier_id, inp.amount)
    if tier is None:
        raise NoTierAvailableError(currency.code)

    is_settlement = currency.code == catalog.settlement_currency
    if is_settlement:
        rate = 1.0
    else:
        found = rates.rate_for(currency.code)
        if found is None:
            raise UnavailableRateError(currency.code)
        rate = found

    amount = inp.amount
    percentage_fee = amount * (tier.percentage / 100)
    fixed_fee = currency.fixed_fee
    after_fees = amount - percentage_fee - fixed_fee

    # Pass-through payout starts from the gross amount, not from after_fees
    gross_settled = amount * rate
    provider_fee = gross_settled * catalog.passthrough_fee_rate
    tax = provider_fee * catalog.passthrough_tax_rate
    alternative_settled = gross_settled - provider_fee - tax

    if is_settlement:
        final_settled = after_fees
        conversion_fee = 0.0
    else:
        marked_up_rate = rate * (1 - catalog.conversion_markup)
        final_settled = after_fees * marked_up_rate
        conversion_fee = (after_fees * rate) - final_settled

    # Fees are reported at the spot rate, the principal at the marked-up rate
    return CalculationResult(
        currency=currency,
        tier=tier,
        rate=rate,
        percentage_fee=percentage_fee * rate if not is_settlement else percentage_fee,
        percentage_fee_source=percentage_fee,
        fixed_fee=fixed_fee * rate if not is_settlement else fixed_fee,
        fixed_fee_source=fixed_fee,
        conversion_fee=conversion_fee,
        final_settled=final_settled,
        alternative_settled=alternative_settled,
    )
