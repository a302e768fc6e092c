# src/xpayout/shared/validators.py
"""
Input Validation Utilities - Configuration and User Input Validation

This module provides validation functions for configuration values and
user input. Amount validation lives here rather than in the calculation
engine: callers check amounts before asking for a calculation.

Files that USE this module:
- xpayout.config.settings (uses validation functions in Settings field validators)
- xpayout.adapters.telegram.handlers (parses /calc arguments)

Files that this module USES:
- xpayout.domain.errors (InvalidAmountError)
- xpayout.domain.catalog (MAX_AMOUNT)
"""
import math
import re

from xpayout.domain.catalog import MAX_AMOUNT
from xpayout.domain.errors import InvalidAmountError


def validate_bot_token(token: str) -> bool:
    """
    Validate Telegram bot token format.

    Args:
        token: Bot token to validate

    Returns:
        True if valid, False otherwise
    """
    if not token:
        return False

    # Bot tokens should be in format: 123456789:ABCDEFghijklmnopQRSTUVwxyz
    pattern = r'^\d{8,10}:[A-Za-z0-9_-]{35}$'
    return bool(re.match(pattern, token))


def validate_api_key(api_key: str, min_length: int = 10) -> bool:
    """
    Validate API key format.

    Args:
        api_key: API key to validate
        min_length: Minimum length requirement

    Returns:
        True if valid, False otherwise
    """
    if not api_key:
        return False

    return len(api_key) >= min_length and not api_key.isspace()


def validate_currency_code(code: str) -> bool:
    """Return True if code looks like an ISO 4217 code (three uppercase letters)."""
    return bool(code) and bool(re.match(r'^[A-Z]{3}$', code))


def parse_amount(text: str, max_amount: float = MAX_AMOUNT) -> float:
    """
    Parse a user-entered gross amount.

    Accepts thousands separators ("1,250.50").

    Args:
        text: Raw user input
        max_amount: Largest accepted amount

    Returns:
        Amount as float

    Raises:
        InvalidAmountError: If the text is not a finite number, not positive,
            or larger than max_amount
    """
    cleaned = (text or "").strip().replace(",", "")
    try:
        amount = float(cleaned)
    except ValueError:
        raise InvalidAmountError("Please enter a valid amount.") from None
    if not math.isfinite(amount):
        raise InvalidAmountError("Please enter a valid amount.")
    if amount <= 0:
        raise InvalidAmountError("Please enter a positive amount.")
    if amount > max_amount:
        raise InvalidAmountError("Amount must be 7 digits or less.")
    return amount


def sanitize_user_input(text: str, max_length: int = 64) -> str:
    """
    Sanitize user input text.

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    # Remove potentially dangerous characters
    sanitized = re.sub(r'[<>"\'`*\[\]]', '', text)

    # Limit length
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized.strip()
