# src/xpayout/app.py
"""
Application Entry Point - Bot Initialization and Startup

This module serves as the composition root for the XPayout Telegram bot.
It wires settings, logging, the fee catalog, the rate provider and the
Telegram handlers, then starts polling.

Files that USE this module:
- xpayout console script (pyproject.toml entry point)
- python -m xpayout.app

Files that this module USES:
- xpayout.shared.logging_conf (setup_logging for logging configuration)
- xpayout.config (settings for configuration management)
- xpayout.domain.catalog (build_catalog with configured payout constants)
- xpayout.adapters.providers.freecurrencyapi (live exchange rates)
- xpayout.application.rates_service (RatesService)
- xpayout.adapters.telegram.bot (build_application)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
from typing import Optional  # Type hints for optional values

from telegram.error import Conflict, NetworkError, TimedOut  # Telegram API error exceptions

from xpayout.adapters.providers.base import RateProvider  # Rate provider interface
from xpayout.adapters.providers.freecurrencyapi import FreeCurrencyAPIProvider  # Live rate source
from xpayout.adapters.telegram.bot import build_application  # Telegram application factory
from xpayout.application.rates_service import RatesService  # Exchange rate snapshots
from xpayout.config import settings  # Application configuration and settings
from xpayout.domain.catalog import TierCatalog, build_catalog  # Fee schedule and payout constants
from xpayout.shared.logging_conf import setup_logging  # Configure logging with file rotation

logger = logging.getLogger(__name__)


def build_catalog_from_settings() -> TierCatalog:
    """Build the fee catalog with the payout constants from settings."""
    return build_catalog(
        settlement_currency=settings.settlement_currency,
        conversion_markup=settings.conversion_markup,
        passthrough_fee_rate=settings.passthrough_fee_rate,
        passthrough_tax_rate=settings.passthrough_tax_rate,
        static_rates=settings.static_rates,
    )


def build_rate_provider() -> Optional[RateProvider]:
    """
    Create the live rate provider, or None when no API key is configured.

    Without a provider only settlement-currency calculations are possible.
    """
    if not settings.freecurrency_key:
        logger.warning("FREECURRENCY_API_KEY not set; foreign currency rates are unavailable")
        return None
    return FreeCurrencyAPIProvider()


def main() -> None:
    """
    Initialize and start the Telegram bot application.

    This function:
    1. Sets up logging
    2. Builds the catalog, rate provider and rates service
    3. Creates the Telegram application and registers handlers
    4. Starts the bot polling loop
    """
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN missing")

    catalog = build_catalog_from_settings()
    rates_service = RatesService(build_rate_provider(), catalog)
    app = build_application(settings.bot_token, rates_service, catalog)

    logger.info(
        "Starting bot polling… settlement=%s markup=%s passthrough fee=%s tax=%s rates cache=%d minutes",
        catalog.settlement_currency,
        catalog.conversion_markup,
        catalog.passthrough_fee_rate,
        catalog.passthrough_tax_rate,
        settings.rates_cache_minutes,
    )

    try:
        app.run_polling(drop_pending_updates=False)
    except Conflict:
        logger.error(
            "Telegram Conflict: another bot instance is already polling with this token. "
            "Stop it before starting a new one.",
            exc_info=True,
        )
        raise
    except (TimedOut, NetworkError) as e:
        logger.error(
            "Network error talking to the Telegram API: %s (type: %s)",
            e,
            type(e).__name__,
            exc_info=True,
        )
        raise
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (KeyboardInterrupt)")


if __name__ == "__main__":
    main()
