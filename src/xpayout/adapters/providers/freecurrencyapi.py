# src/xpayout/adapters/providers/freecurrencyapi.py
"""
FreeCurrencyAPI Provider for Settlement Exchange Rates

This module implements the freecurrencyapi.com client used to fetch the
interbank rates of every catalog currency against the settlement currency.
Responses are cached per request for RATES_CACHE_MINUTES.

Files that USE this module:
- xpayout.app (creates the provider for the RatesService)
- tests.test_providers (unit tests)

Files that this module USES:
- xpayout.adapters.providers.base (RateProvider interface)
- xpayout.config (settings for API configuration)
- xpayout.domain.errors (ProviderUnavailableError)
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

import requests

from xpayout.adapters.providers.base import RateProvider
from xpayout.config import settings
from xpayout.domain.errors import ProviderUnavailableError

log = logging.getLogger(__name__)

# Currencies the API does not quote
UNSUPPORTED_CURRENCIES = frozenset({"AED"})

_CacheKey = Tuple[str, Tuple[str, ...]]


class FreeCurrencyAPIProvider(RateProvider):
    # Class-level cache shared across instances
    _cache: Dict[_CacheKey, Tuple[datetime, Dict[str, float]]] = {}

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        cache_minutes: Optional[int] = None,
    ):
        """
        Initialize FreeCurrencyAPI provider.

        Args:
            api_key: Optional API key (defaults to settings.freecurrency_key)
            base_url: Optional endpoint URL (defaults to settings.freecurrency_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            cache_minutes: Optional cache TTL (defaults to settings.rates_cache_minutes)

        Raises:
            ValueError: If no API key is configured
        """
        self.api_key = api_key if api_key is not None else settings.freecurrency_key
        if not self.api_key:
            raise ValueError("FreeCurrencyAPI key not configured (FREECURRENCY_API_KEY).")
        self.url = base_url or settings.freecurrency_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.ttl = timedelta(minutes=cache_minutes or settings.rates_cache_minutes)

    @classmethod
    def clear_cache(cls) -> None:
        """Drop every cached response."""
        cls._cache.clear()

    def _cached(self, key: _CacheKey) -> Optional[Dict[str, float]]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        ts, rates = entry
        if datetime.now(timezone.utc) - ts >= self.ttl:
            return None
        return rates

    def _get_json(self, params: Dict[str, str]) -> Any:
        """
        Perform the HTTP request and decode the JSON body.

        Raises:
            ProviderUnavailableError: On timeout, transport error, HTTP error or invalid JSON
        """
        try:
            resp = requests.get(self.url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            log.warning("FreeCurrencyAPI timeout after %d seconds", self.timeout)
            raise ProviderUnavailableError(f"FreeCurrencyAPI timeout after {self.timeout}s") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            log.error("FreeCurrencyAPI HTTP error %s: %s", status, e)
            raise ProviderUnavailableError(f"FreeCurrencyAPI HTTP error {status}") from e
        except requests.exceptions.RequestException as e:
            log.warning("FreeCurrencyAPI request failed: %s", e)
            raise ProviderUnavailableError(f"FreeCurrencyAPI request failed: {e}") from e

        # requests' JSONDecodeError is also a ValueError
        try:
            return resp.json()
        except ValueError as e:
            log.error("FreeCurrencyAPI returned invalid JSON: %s", e)
            raise ProviderUnavailableError(f"FreeCurrencyAPI returned invalid JSON: {e}") from e

    @staticmethod
    def _parse(data: Any) -> Dict[str, float]:
        """
        Extract the 'data' mapping from a response body.

        Expected shape: {"data": {"USD": 0.01204, "EUR": 0.01105, ...}}
        Non-numeric entries are dropped.
        """
        if not isinstance(data, dict):
            raise ProviderUnavailableError("FreeCurrencyAPI returned non-dict JSON")
        if data.get("errors") or not isinstance(data.get("data"), dict):
            log.error("FreeCurrencyAPI error response: %s", data.get("errors", "missing 'data'"))
            raise ProviderUnavailableError(
                f"FreeCurrencyAPI error: {data.get('errors') or 'missing data field'}"
            )

        rates: Dict[str, float] = {}
        for code, value in data["data"].items():
            try:
                rates[str(code).upper()] = float(value)
            except (TypeError, ValueError):
                log.warning("FreeCurrencyAPI returned non-numeric rate for %s: %r", code, value)
        return rates

    def latest_rates(self, base: str, currencies: Iterable[str]) -> Dict[str, float]:
        """
        Get units of each currency per one unit of base.

        The base currency and currencies the API does not quote are not requested.

        Args:
            base: Base currency code (the settlement currency)
            currencies: Currency codes to quote

        Returns:
            Mapping of currency code to raw rate

        Raises:
            ProviderUnavailableError: If the API fails or answers with an error
        """
        wanted = tuple(sorted({c for c in currencies if c != base and c not in UNSUPPORTED_CURRENCIES}))
        if not wanted:
            return {}

        key = (base, wanted)
        cached = self._cached(key)
        if cached is not None:
            log.debug("Using cached FreeCurrencyAPI rates for %s", base)
            return dict(cached)

        log.info("Fetching fresh rates from FreeCurrencyAPI: base=%s currencies=%s", base, ",".join(wanted))
        data = self._get_json({
            "apikey": self.api_key,
            "base_currency": base,
            "currencies": ",".join(wanted),
        })
        rates = self._parse(data)

        FreeCurrencyAPIProvider._cache[key] = (datetime.now(timezone.utc), rates)
        log.info("FreeCurrencyAPI updated: %d rates (ttl=%s)", len(rates), self.ttl)
        return dict(rates)
