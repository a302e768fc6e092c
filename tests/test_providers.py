"""
Provider Tests - Unit Tests for the FreeCurrencyAPI Client

This module tests request building, response parsing, caching behaviour
and error translation of the FreeCurrencyAPIProvider.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xpayout.adapters.providers.freecurrencyapi (FreeCurrencyAPIProvider for testing)
- unittest.mock (Mock for API mocking)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock, patch  # Mock objects and patching for testing without real API calls
import requests  # HTTP library (used for mocking responses)
from datetime import timedelta  # Time offsets for aging cache entries

from xpayout.adapters.providers.freecurrencyapi import FreeCurrencyAPIProvider
from xpayout.domain.errors import ProviderUnavailableError

API_KEY = "fca_live_test_key_123"


@pytest.fixture(autouse=True)
def clear_cache():
    FreeCurrencyAPIProvider.clear_cache()
    yield
    FreeCurrencyAPIProvider.clear_cache()


def _response(payload):
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status.return_value = None
    return mock_response


class TestFreeCurrencyAPIProviderInit:
    def test_init_with_defaults(self):
        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        assert provider.timeout == 10
        assert provider.url == "https://api.freecurrencyapi.com/v1/latest"
        assert provider.ttl.total_seconds() == 60 * 60

    def test_init_with_custom_params(self):
        provider = FreeCurrencyAPIProvider(api_key=API_KEY, base_url="http://test.com", timeout=5, cache_minutes=5)
        assert provider.url == "http://test.com"
        assert provider.timeout == 5
        assert provider.ttl.total_seconds() == 5 * 60

    def test_init_without_api_key(self):
        with pytest.raises(ValueError, match="key not configured"):
            FreeCurrencyAPIProvider(api_key="")


class TestLatestRates:
    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_success(self, mock_get):
        mock_get.return_value = _response({"data": {"USD": 0.012, "EUR": "0.011"}})

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        rates = provider.latest_rates("INR", ["USD", "EUR", "INR", "AED"])

        assert rates == {"USD": 0.012, "EUR": 0.011}
        params = mock_get.call_args.kwargs["params"]
        assert params["apikey"] == API_KEY
        assert params["base_currency"] == "INR"
        # Base currency and AED are never requested
        assert params["currencies"] == "EUR,USD"

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_nothing_to_request(self, mock_get):
        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        assert provider.latest_rates("INR", ["INR", "AED"]) == {}
        mock_get.assert_not_called()

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_non_numeric_rates_are_dropped(self, mock_get):
        mock_get.return_value = _response({"data": {"USD": 0.012, "GBP": None, "EUR": "bad"}})

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        assert provider.latest_rates("INR", ["USD", "GBP", "EUR"]) == {"USD": 0.012}

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_cache_hit(self, mock_get):
        mock_get.return_value = _response({"data": {"USD": 0.012}})

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        first = provider.latest_rates("INR", ["USD"])
        second = provider.latest_rates("INR", ["USD"])

        assert first == second == {"USD": 0.012}
        mock_get.assert_called_once()

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_cached_result_is_a_copy(self, mock_get):
        mock_get.return_value = _response({"data": {"USD": 0.012}})

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        provider.latest_rates("INR", ["USD"])["USD"] = 99.0

        assert provider.latest_rates("INR", ["USD"]) == {"USD": 0.012}

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_cache_expired(self, mock_get):
        mock_get.return_value = _response({"data": {"USD": 0.012}})

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        provider.latest_rates("INR", ["USD"])
        key = ("INR", ("USD",))
        ts, rates = FreeCurrencyAPIProvider._cache[key]
        FreeCurrencyAPIProvider._cache[key] = (ts - timedelta(hours=2), rates)
        provider.latest_rates("INR", ["USD"])

        assert mock_get.call_count == 2

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_different_currency_sets_are_cached_separately(self, mock_get):
        mock_get.return_value = _response({"data": {"USD": 0.012}})

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        provider.latest_rates("INR", ["USD"])
        provider.latest_rates("INR", ["USD", "EUR"])

        assert mock_get.call_count == 2


class TestErrors:
    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        with pytest.raises(ProviderUnavailableError, match="timeout"):
            provider.latest_rates("INR", ["USD"])

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_request_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("no route")

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        with pytest.raises(ProviderUnavailableError, match="request failed"):
            provider.latest_rates("INR", ["USD"])

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_http_error(self, mock_get):
        error_response = Mock(status_code=401)
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=error_response)
        mock_get.return_value = mock_response

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        with pytest.raises(ProviderUnavailableError, match="HTTP error 401"):
            provider.latest_rates("INR", ["USD"])

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_invalid_json(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.json.side_effect = ValueError("Invalid JSON")
        mock_get.return_value = mock_response

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        with pytest.raises(ProviderUnavailableError, match="invalid JSON"):
            provider.latest_rates("INR", ["USD"])

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_error_payload(self, mock_get):
        mock_get.return_value = _response({"errors": {"currencies": ["invalid"]}})

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        with pytest.raises(ProviderUnavailableError, match="FreeCurrencyAPI error"):
            provider.latest_rates("INR", ["USD"])

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_missing_data(self, mock_get):
        mock_get.return_value = _response({"meta": {}})

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        with pytest.raises(ProviderUnavailableError):
            provider.latest_rates("INR", ["USD"])

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_non_dict_response(self, mock_get):
        mock_get.return_value = _response("not a dict")

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        with pytest.raises(ProviderUnavailableError, match="non-dict"):
            provider.latest_rates("INR", ["USD"])

    @patch('xpayout.adapters.providers.freecurrencyapi.requests.get')
    def test_failure_is_not_cached(self, mock_get):
        mock_get.side_effect = [requests.exceptions.Timeout(), _response({"data": {"USD": 0.012}})]

        provider = FreeCurrencyAPIProvider(api_key=API_KEY)
        with pytest.raises(ProviderUnavailableError):
            provider.latest_rates("INR", ["USD"])
        assert provider.latest_rates("INR", ["USD"]) == {"USD": 0.012}
