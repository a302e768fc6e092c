# src/xpayout/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Rate limiting
- Logging configuration
"""

from xpayout.shared.validators import (
    parse_amount,
    sanitize_user_input,
    validate_api_key,
    validate_bot_token,
    validate_currency_code,
)
from xpayout.shared.rate_limiter import RATE_LIMITS, RateLimitConfig, RateLimiter, rate_limiter

__all__ = [
    "parse_amount",
    "sanitize_user_input",
    "validate_api_key",
    "validate_bot_token",
    "validate_currency_code",
    "RATE_LIMITS",
    "RateLimitConfig",
    "RateLimiter",
    "rate_limiter",
]
