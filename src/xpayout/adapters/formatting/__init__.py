# src/xpayout/adapters/formatting/__init__.py
"""
Formatting Adapters - Message Formatting

This package contains presentation helpers for bot replies.
"""

from xpayout.adapters.formatting.formatter import (
    format_breakdown,
    format_currency_list,
    format_money,
    format_tier_list,
    render_tier_name,
)

__all__ = [
    "format_breakdown",
    "format_currency_list",
    "format_money",
    "format_tier_list",
    "render_tier_name",
]
