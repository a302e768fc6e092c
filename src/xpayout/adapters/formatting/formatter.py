# src/xpayout/adapters/formatting/formatter.py
"""
Message Formatter - Text Formatting and Presentation

This module handles all text formatting for bot replies: money amounts,
tier names with their placeholders filled in, currency and tier listings,
and the fee breakdown comparing both payouts.

Files that USE this module:
- xpayout.adapters.telegram.handlers (uses all formatter functions for replies)
- tests.test_formatter (unit tests)

Files that this module USES:
- xpayout.domain.models (Currency, FeeTier, CalculationResult)
- xpayout.domain.catalog (TierCatalog for listings)
"""
from __future__ import annotations

from typing import List, Sequence

from xpayout.domain.catalog import TierCatalog
from xpayout.domain.models import CalculationResult, Currency, FeeTier

# Currencies whose tier names show the code instead of the symbol
CODE_AS_SYMBOL = ("CAD", "SGD", "AUD")


def format_money(amount: float, currency_code: str) -> str:
    """
    Format an amount with two decimals and thousands separators.

    Args:
        amount: Amount to format
        currency_code: Code appended after the number

    Returns:
        String like '1,234.57 INR'
    """
    return f"{amount:,.2f} {currency_code}"


def _display_symbol(currency: Currency) -> str:
    if currency.code in CODE_AS_SYMBOL:
        return currency.code + " "
    return currency.symbol


def render_tier_name(tier: FeeTier, currency: Currency) -> str:
    """
    Fill the {symbol} and {fixedFee} placeholders of a tier name.

    Args:
        tier: Tier whose name template is rendered
        currency: Currency the tier belongs to

    Returns:
        Display name, e.g. '4.4% + $0.30 (up to $3,000/month)'
    """
    return (
        tier.name
        .replace("{symbol}", _display_symbol(currency))
        .replace("{fixedFee}", f"{currency.fixed_fee:.2f}")
    )


def _fmt_pct(fraction: float) -> str:
    """Format a fraction (0.04) as a short percentage ('4%')."""
    return f"{fraction * 100:g}%"


def format_currency_list(catalog: TierCatalog) -> str:
    """List every supported currency, one per line."""
    lines = ["Supported currencies:"]
    for currency in catalog.currencies():
        lines.append(f"{currency.code} - {currency.name}")
    return "\n".join(lines)


def format_tier_list(currency: Currency, tiers: Sequence[FeeTier]) -> str:
    """
    List the fee tiers of a currency with their ids, in catalog order.

    Args:
        currency: Currency being listed
        tiers: Its ordered tier list

    Returns:
        Multi-line string
    """
    if not tiers:
        return f"No fee tiers configured for {currency.code}."
    lines = [f"Fee tiers for {currency.name}:"]
    for tier in tiers:
        lines.append(f"{tier.id}: {render_tier_name(tier, currency)}")
    return "\n".join(lines)


def format_breakdown(result: CalculationResult, settlement_currency: str, conversion_markup: float) -> str:
    """
    Format a calculation as a plain text comparison of both payouts.

    Processor fees are shown in the settlement currency when the payment is
    already in it, otherwise in the source currency. Payouts are always in
    the settlement currency.

    Args:
        result: Calculation to present
        settlement_currency: Code of the payout currency
        conversion_markup: Markup fraction, only used for the label

    Returns:
        Multi-line string
    """
    code = result.currency.code
    local = code == settlement_currency

    if local:
        pct_fee = format_money(result.percentage_fee, settlement_currency)
        fixed_fee = format_money(result.fixed_fee, settlement_currency)
        conversion_fee = format_money(0, settlement_currency)
    else:
        pct_fee = format_money(result.percentage_fee_source, code)
        fixed_fee = format_money(result.fixed_fee_source, code)
        conversion_fee = format_money(result.conversion_fee_source, code)

    lines: List[str] = [
        f"Fee rate: {render_tier_name(result.tier, result.currency)}",
        f"Processor fee: {pct_fee}",
        f"Fixed fee: {fixed_fee}",
        f"Currency conversion fee ({_fmt_pct(conversion_markup)}): {conversion_fee}",
        "",
        f"You receive: {format_money(result.final_settled, settlement_currency)}",
        f"With pass-through payout: {format_money(result.alternative_settled, settlement_currency)}",
    ]

    diff = result.alternative_advantage
    if diff >= 0:
        lines.append(f"{format_money(diff, settlement_currency)} more in your account")
    else:
        lines.append(f"{format_money(-diff, settlement_currency)} less in your account")
    return "\n".join(lines)
