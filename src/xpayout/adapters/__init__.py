# src/xpayout/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (exchange rate APIs)
- Formatting (output)
- Telegram (bot interface)
"""

__all__ = []
