# tests/test_currency.py
"""
Currency Converter Tests - Unit Tests for Rate Tables and Conversion

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- receipt_engine.application.currency (convert, CurrencyTable, RateRegistry)
- receipt_engine.domain.models (CurrencyRate for test data)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from decimal import Decimal

from receipt_engine.application.currency import CurrencyTable, RateRegistry, convert
from receipt_engine.config import settings
from receipt_engine.domain.errors import InvalidRateError, UnknownCurrencyError
from receipt_engine.domain.models import CurrencyRate

INR = CurrencyRate(code="INR", symbol="₹", rate_to_reference="1", name="Indian Rupee")
USD = CurrencyRate(code="USD", symbol="$", rate_to_reference="83.50", name="US Dollar")


class TestConvert:
    def test_reference_rate_is_identity(self):
        assert convert("123.45", INR) == Decimal("123.45")

    def test_convert_to_reference(self):
        assert convert("100.00", USD) == Decimal("8350.00")

    def test_result_rounded_half_up(self):
        rate = CurrencyRate(code="EUR", symbol="€", rate_to_reference="0.005")
        assert convert(1, rate) == Decimal("0.01")


class TestCurrencyTable:
    def test_rate_for_known_code(self):
        table = CurrencyTable([INR, USD], "INR")
        assert table.rate_for("USD") is USD

    def test_codes_are_case_insensitive(self):
        table = CurrencyTable([INR, USD], "inr")
        assert table.rate_for(" usd ") is USD
        assert table.reference_code == "INR"
        assert "usd" in table

    def test_unknown_currency_fails(self):
        table = CurrencyTable([INR, USD], "INR")
        with pytest.raises(UnknownCurrencyError) as exc_info:
            table.rate_for("JPY")
        assert exc_info.value.code == "JPY"

    def test_unknown_currency_explicit_reference_fallback(self):
        table = CurrencyTable([INR, USD], "INR")
        assert table.rate_for("JPY", treat_as_reference=True) is table.reference

    def test_reference_must_be_present(self):
        with pytest.raises(InvalidRateError):
            CurrencyTable([USD], "INR")

    def test_reference_rate_must_be_one(self):
        bad_reference = CurrencyRate(code="INR", symbol="₹", rate_to_reference="1.01")
        with pytest.raises(InvalidRateError):
            CurrencyTable([bad_reference, USD], "INR")

    def test_rates_must_be_positive(self):
        zero = CurrencyRate(code="USD", symbol="$", rate_to_reference="0")
        with pytest.raises(InvalidRateError):
            CurrencyTable([INR, zero], "INR")

    def test_reference_only(self):
        table = CurrencyTable.reference_only("USD", "$")
        assert len(table) == 1
        assert table.reference.rate_to_reference == Decimal("1")
        assert table.codes() == ["USD"]


class TestRateRegistry:
    def test_swap_replaces_table(self):
        first = CurrencyTable([INR], "INR")
        second = CurrencyTable([INR, USD], "INR")
        registry = RateRegistry(first)

        previous = registry.swap(second)

        assert previous is first
        assert registry.current() is second

    def test_swap_does_not_touch_old_table(self):
        first = CurrencyTable([INR, USD], "INR")
        registry = RateRegistry(first)
        registry.swap(CurrencyTable([INR], "INR"))
        assert first.rate_for("USD") is USD

    def test_current_defaults_to_reference_only(self):
        registry = RateRegistry()
        table = registry.current()
        assert table.reference_code == settings.reference_currency
        assert len(table) == 1
