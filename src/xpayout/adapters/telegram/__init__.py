# src/xpayout/adapters/telegram/__init__.py
"""
Telegram Adapters - Bot Interface

This package contains Telegram bot adapters:
- Bot application builder
- Command handlers
"""

from xpayout.adapters.telegram.bot import build_application
from xpayout.adapters.telegram.handlers import build_calc_reply, build_handlers, build_tiers_reply

__all__ = [
    "build_application",
    "build_handlers",
    "build_calc_reply",
    "build_tiers_reply",
]
