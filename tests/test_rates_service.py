"""
Rates Service Tests - Unit Tests for Exchange Rate Snapshots

This module tests rate inversion and the RatesService snapshot behaviour,
including degraded snapshots when the provider fails.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xpayout.application.rates_service (RatesService, invert_rates)
- xpayout.domain (catalog, errors)
- unittest.mock (Mock for provider mocking)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock  # Mock objects for testing without a real provider

from xpayout.application.calculator import calculate
from xpayout.application.rates_service import RatesService, invert_rates
from xpayout.domain.catalog import DEFAULT_CATALOG, build_catalog
from xpayout.domain.errors import ProviderUnavailableError, UnavailableRateError
from xpayout.domain.models import CalculationInput


class TestInvertRates:
    def test_inverts_quotes(self):
        result = invert_rates({"USD": 0.0125, "EUR": 0.01}, "INR")
        assert result["USD"] == pytest.approx(80.0)
        assert result["EUR"] == pytest.approx(100.0)
        assert result["INR"] == 1.0

    def test_skips_unusable_quotes(self):
        result = invert_rates({"USD": 0, "EUR": -0.5, "GBP": "n/a", "CAD": None, "SGD": float("nan")}, "INR")
        assert result == {"INR": 1.0}

    def test_empty_input(self):
        assert invert_rates({}, "INR") == {"INR": 1.0}


class TestRatesService:
    def test_init(self):
        mock_provider = Mock()
        service = RatesService(provider=mock_provider)
        assert service.provider == mock_provider
        assert service.catalog is DEFAULT_CATALOG

    def test_exchange_rate_table(self):
        mock_provider = Mock()
        mock_provider.latest_rates.return_value = {"USD": 0.012, "EUR": 0.011}

        table = RatesService(provider=mock_provider).exchange_rate_table()

        assert table.rate_for("USD") == pytest.approx(1 / 0.012)
        assert table.rate_for("EUR") == pytest.approx(1 / 0.011)
        assert table["INR"] == 1.0
        assert table.rate_for("GBP") is None

        base, codes = mock_provider.latest_rates.call_args[0]
        assert base == "INR"
        assert list(codes) == [c.code for c in DEFAULT_CATALOG.currencies()]

    def test_provider_failure_keeps_settlement_currency(self):
        mock_provider = Mock()
        mock_provider.latest_rates.side_effect = ProviderUnavailableError("API down")

        service = RatesService(provider=mock_provider)
        table = service.exchange_rate_table()

        assert dict(table) == {"INR": 1.0}
        assert service.last_error == "API down"

    def test_recovers_after_failure(self):
        mock_provider = Mock()
        mock_provider.latest_rates.side_effect = [ProviderUnavailableError("API down"), {"USD": 0.0125}]

        service = RatesService(provider=mock_provider)
        service.exchange_rate_table()
        table = service.exchange_rate_table()

        assert table.rate_for("USD") == pytest.approx(80.0)
        assert service.last_error is None

    def test_without_provider(self):
        service = RatesService(provider=None)
        table = service.exchange_rate_table()
        assert dict(table) == {"INR": 1.0}
        assert service.last_error is not None

    def test_uses_catalog_settlement_currency(self):
        mock_provider = Mock()
        mock_provider.latest_rates.return_value = {"INR": 80.0}
        catalog = build_catalog(settlement_currency="USD")

        table = RatesService(provider=mock_provider, catalog=catalog).exchange_rate_table()

        assert mock_provider.latest_rates.call_args[0][0] == "USD"
        assert table["USD"] == 1.0
        assert table.rate_for("INR") == pytest.approx(1 / 80.0)


class TestStaticRates:
    def test_aed_uses_fixed_rate_with_live_snapshot(self):
        mock_provider = Mock()
        mock_provider.latest_rates.return_value = {"USD": 0.012, "EUR": 0.011}

        table = RatesService(provider=mock_provider).exchange_rate_table()
        result = calculate(CalculationInput(1000, "AED"), table)

        assert table.rate_for("AED") == 23.88
        assert result.rate == 23.88
        assert result.final_settled == pytest.approx(955.70 * 23.88 * 0.96)

    def test_fixed_rate_overrides_provider_quote(self):
        mock_provider = Mock()
        mock_provider.latest_rates.return_value = {"AED": 0.05}

        table = RatesService(provider=mock_provider).exchange_rate_table()

        assert table.rate_for("AED") == 23.88

    def test_no_fixed_rate_when_provider_fails(self):
        mock_provider = Mock()
        mock_provider.latest_rates.side_effect = ProviderUnavailableError("API down")

        table = RatesService(provider=mock_provider).exchange_rate_table()

        assert table.rate_for("AED") is None
        with pytest.raises(UnavailableRateError):
            calculate(CalculationInput(1000, "AED"), table)

    def test_no_fixed_rate_without_provider(self):
        assert RatesService(provider=None).exchange_rate_table().rate_for("AED") is None

    def test_other_settlement_currency_has_no_fixed_rates(self):
        mock_provider = Mock()
        mock_provider.latest_rates.return_value = {"INR": 80.0}
        catalog = build_catalog(settlement_currency="USD")

        table = RatesService(provider=mock_provider, catalog=catalog).exchange_rate_table()

        assert table.rate_for("AED") is None

    def test_configured_fixed_rates(self):
        mock_provider = Mock()
        mock_provider.latest_rates.return_value = {}
        catalog = build_catalog(static_rates={"AED": 22.5, "INR": 3.0})

        table = RatesService(provider=mock_provider, catalog=catalog).exchange_rate_table()

        assert table.rate_for("AED") == 22.5
        assert table["INR"] == 1.0
