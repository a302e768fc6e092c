# src/xpayout/adapters/telegram/bot.py
"""
Telegram Bot - Application Builder

This module builds the Telegram application, stores the shared services in
bot_data and registers the command handlers.
"""

from __future__ import annotations

from telegram.ext import Application

from xpayout.adapters.telegram.handlers import build_handlers
from xpayout.application.rates_service import RatesService
from xpayout.domain.catalog import TierCatalog


def build_application(bot_token: str, rates_service: RatesService, catalog: TierCatalog) -> Application:
    """
    Build Telegram bot application with services and handlers attached.

    Args:
        bot_token: Telegram bot token
        rates_service: Service producing exchange rate snapshots
        catalog: Fee catalog used for every calculation

    Returns:
        Configured Application instance
    """
    app = Application.builder().token(bot_token).build()
    app.bot_data["rates_service"] = rates_service
    app.bot_data["catalog"] = catalog
    for handler in build_handlers():
        app.add_handler(handler)
    return app
