# src/xpayout/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables or a local .env file.

Files that USE this module:
- xpayout.app (loads settings for bot, catalog and logging configuration)
- xpayout.adapters.providers.freecurrencyapi (API key, URL, timeout, cache TTL)
- xpayout.adapters.telegram.handlers (settlement currency for replies)

Files that this module USES:
- xpayout.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math  # Finite checks for configured rates
from typing import Dict, Optional  # Type hints for optional values and rate maps

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from xpayout.shared.validators import (
    validate_api_key,  # Validate API key format
    validate_bot_token,  # Validate Telegram bot token format
    validate_currency_code,  # Validate ISO currency code format
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Telegram ---
    bot_token: str = Field(default="", alias="BOT_TOKEN")

    # --- Exchange rate API ---
    freecurrency_key: str = Field(default="", alias="FREECURRENCY_API_KEY")
    freecurrency_url: str = Field(
        default="https://api.freecurrencyapi.com/v1/latest", alias="FREECURRENCY_URL"
    )

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Cache Settings (in minutes) ---
    rates_cache_minutes: int = Field(default=60, alias="RATES_CACHE_MINUTES", ge=1, le=1440)

    # --- Payout model ---
    settlement_currency: str = Field(default="INR", alias="SETTLEMENT_CURRENCY")
    conversion_markup: float = Field(default=0.04, alias="CONVERSION_MARKUP", ge=0.0, lt=1.0)
    passthrough_fee_rate: float = Field(default=0.01, alias="PASSTHROUGH_FEE_RATE", ge=0.0, lt=1.0)
    passthrough_tax_rate: float = Field(default=0.18, alias="PASSTHROUGH_TAX_RATE", ge=0.0, le=1.0)
    # JSON object of settlement units per foreign unit, e.g. {"AED": 23.88}; unset uses the built-in table
    static_rates: Optional[Dict[str, float]] = Field(default=None, alias="STATIC_RATES")

    # --- Logging (for server deployment) ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="XPAYOUT_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate bot token format (empty is allowed until the bot starts)."""
        if v and not validate_bot_token(v):
            raise ValueError("Invalid BOT_TOKEN format")
        return v

    @field_validator("freecurrency_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate API key format (empty disables live rates)."""
        if v and not validate_api_key(v):
            raise ValueError("Invalid FREECURRENCY_API_KEY format")
        return v

    @field_validator("settlement_currency")
    @classmethod
    def validate_settlement_currency(cls, v: str) -> str:
        """Normalize and validate the settlement currency code."""
        v = v.strip().upper()
        if not validate_currency_code(v):
            raise ValueError("SETTLEMENT_CURRENCY must be a 3-letter currency code")
        return v

    @field_validator("static_rates")
    @classmethod
    def validate_static_rates(cls, v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        """Normalize codes and require positive finite rates."""
        if v is None:
            return v
        rates: Dict[str, float] = {}
        for code, rate in v.items():
            code = code.strip().upper()
            if not validate_currency_code(code):
                raise ValueError(f"STATIC_RATES has an invalid currency code: {code}")
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"STATIC_RATES rate for {code} must be positive")
            rates[code] = rate
        return rates

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        v = v.strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v


# Global settings instance
settings = Settings()
