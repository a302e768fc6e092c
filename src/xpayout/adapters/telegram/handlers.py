# src/xpayout/adapters/telegram/handlers.py
"""
Telegram Handlers - Command Processing and User Interaction

This module contains the Telegram bot command handlers. Reply texts are
built by plain functions (build_calc_reply, build_tiers_reply) so they can
be tested without Telegram; the async handlers only add rate limiting and
send the reply.

Commands:
- /start, /help: usage
- /currencies: supported currencies
- /tiers <CODE>: fee tiers of a currency
- /calc <amount> <CODE> [tier_id]: compare both payouts

Files that USE this module:
- xpayout.app (build_handlers function creates handler instances)
- tests.test_handlers (unit tests for reply builders)

Files that this module USES:
- xpayout.application.calculator (calculate)
- xpayout.application.rates_service (RatesService snapshots)
- xpayout.adapters.formatting.formatter (all formatter functions)
- xpayout.shared.validators (amount parsing and input sanitizing)
- xpayout.shared.rate_limiter (rate limiting functionality)
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from telegram import Update
from telegram.ext import CommandHandler, ContextTypes

from xpayout.adapters.formatting.formatter import (
    format_breakdown,
    format_currency_list,
    format_money,
    format_tier_list,
)
from xpayout.application.calculator import calculate
from xpayout.application.rates_service import RatesService
from xpayout.domain.catalog import TierCatalog
from xpayout.domain.errors import (
    InvalidAmountError,
    NoTierAvailableError,
    UnavailableRateError,
    UnknownCurrencyError,
)
from xpayout.domain.models import CalculationInput
from xpayout.shared.rate_limiter import RATE_LIMITS, rate_limiter
from xpayout.shared.validators import parse_amount, sanitize_user_input

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Compare what you receive for a foreign payment.\n\n"
    "/calc <amount> <currency> [tier_id] - fee breakdown and both payouts\n"
    "/tiers <currency> - fee tiers and their ids\n"
    "/currencies - supported currencies\n\n"
    "Example: /calc 1000 USD"
)

CALC_USAGE = "Usage: /calc <amount> <currency> [tier_id]\nExample: /calc 1000 USD usd_tier2"
TIERS_USAGE = "Usage: /tiers <currency>\nExample: /tiers USD"


def build_tiers_reply(args: Sequence[str], catalog: TierCatalog) -> str:
    """
    Build the /tiers reply.

    Args:
        args: Command arguments
        catalog: Fee catalog

    Returns:
        Reply text
    """
    if not args:
        return TIERS_USAGE
    code = sanitize_user_input(args[0]).upper()
    currency = catalog.currency_by_code(code)
    if currency is None:
        return f"⚠️ Unknown currency: {code}. Send /currencies for the list."
    return format_tier_list(currency, catalog.tiers_for(code))


def build_calc_reply(args: Sequence[str], rates_service: RatesService, catalog: TierCatalog) -> str:
    """
    Build the /calc reply: validate input, take a rate snapshot and calculate.

    Args:
        args: Command arguments (amount, currency, optional tier id)
        rates_service: Source of exchange rate snapshots
        catalog: Fee catalog and payout constants

    Returns:
        Reply text (breakdown or error message)
    """
    if len(args) < 2:
        return CALC_USAGE

    try:
        amount = parse_amount(args[0])
    except InvalidAmountError as e:
        return f"⚠️ {e}"

    code = sanitize_user_input(args[1]).upper()
    tier_id: Optional[str] = sanitize_user_input(args[2]).lower() if len(args) > 2 else None

    rates = rates_service.exchange_rate_table()
    try:
        result = calculate(CalculationInput(amount, code, tier_id), rates, catalog)
    except UnknownCurrencyError:
        return f"⚠️ Unknown currency: {code}. Send /currencies for the list."
    except NoTierAvailableError:
        return f"⚠️ No fee tiers are configured for {code}."
    except UnavailableRateError:
        logger.warning("Calculation for %s refused: rate unavailable (%s)", code, rates_service.last_error)
        return f"⚠️ Exchange rate for {code} is not available right now. Please try again later."

    logger.info(
        "Calculated %s with %s: final=%.2f alternative=%.2f",
        format_money(amount, code), result.tier.id, result.final_settled, result.alternative_settled,
    )

    text = format_breakdown(result, catalog.settlement_currency, catalog.conversion_markup)
    if tier_id is not None and result.tier.id != tier_id:
        text = f"Tier '{tier_id}' not found for {code}, using {result.tier.id}.\n\n{text}"
    return text


def _check_rate_limit(update: Update, limit_type: str) -> bool:
    """
    Check if the user is within configured rate limits.

    Args:
        update: Telegram update object
        limit_type: Key into RATE_LIMITS ("calc_command" or "info_command")

    Returns:
        True if allowed, False if rate limit exceeded
    """
    config = RATE_LIMITS.get(limit_type)
    if not config:
        return True

    identifier = f"{limit_type}:user:{update.effective_user.id}"
    if not rate_limiter.is_allowed(identifier, config):
        logger.warning("Rate limit exceeded for %s (until=%s)", identifier, rate_limiter.blocked_until(identifier))
        return False
    return True


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start and /help - show usage."""
    await update.message.reply_text(HELP_TEXT)


async def currencies_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /currencies - list supported currencies."""
    if not _check_rate_limit(update, "info_command"):
        await update.message.reply_text("⏰ Rate limit exceeded. Please try again later.")
        return
    catalog: TierCatalog = context.bot_data["catalog"]
    await update.message.reply_text(format_currency_list(catalog))


async def tiers_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /tiers <CODE> - list the fee tiers of a currency."""
    if not _check_rate_limit(update, "info_command"):
        await update.message.reply_text("⏰ Rate limit exceeded. Please try again later.")
        return
    catalog: TierCatalog = context.bot_data["catalog"]
    await update.message.reply_text(build_tiers_reply(context.args or [], catalog))


async def calc_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /calc <amount> <CODE> [tier_id] - show fee breakdown and both payouts."""
    if not _check_rate_limit(update, "calc_command"):
        await update.message.reply_text("⏰ Rate limit exceeded. Please try again later.")
        return

    rates_service: RatesService = context.bot_data["rates_service"]
    catalog: TierCatalog = context.bot_data["catalog"]
    try:
        text = build_calc_reply(context.args or [], rates_service, catalog)
    except Exception:
        logger.exception("Calculation failed for args=%s", context.args)
        text = "❌ Calculation failed. Please try again later."
    await update.message.reply_text(text)


def build_handlers():
    """
    Build and return list of Telegram bot handlers.

    Returns:
        List of handler instances for registration with bot
    """
    return [
        CommandHandler(["start", "help"], start),
        CommandHandler("currencies", currencies_cmd),
        CommandHandler("tiers", tiers_cmd),
        CommandHandler("calc", calc_cmd),
    ]
