# tests/test_rates_store.py
"""
Rates Store Tests - Unit Tests for Currency Table Persistence

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- receipt_engine.adapters.persistence.rates_store (load_rates, save_rates, refresh_registry)
- receipt_engine.application.currency (CurrencyTable, RateRegistry)
- pytest (testing framework, tmp_path fixture)
"""
import json

import pytest  # Testing framework for writing and running tests

from decimal import Decimal

from receipt_engine.adapters.persistence.rates_store import (
    load_rates,
    refresh_registry,
    save_rates,
    table_from_json,
)
from receipt_engine.application.currency import CurrencyTable, RateRegistry
from receipt_engine.config import settings
from receipt_engine.domain.errors import InvalidRateError
from receipt_engine.domain.models import CurrencyRate

RATES = {
    "reference": "INR",
    "currencies": [
        {"code": "INR", "symbol": "₹", "name": "Indian Rupee", "rate_to_reference": "1"},
        {"code": "USD", "symbol": "$", "name": "US Dollar", "rate_to_reference": "83.0"},
    ],
}


def write_json(path, data):
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


class TestLoadRates:
    def test_load(self, tmp_path):
        table = load_rates(write_json(tmp_path / "rates.json", RATES))
        assert table.reference_code == "INR"
        assert table.rate_for("USD").rate_to_reference == Decimal("83.0")
        assert table.rate_for("USD").symbol == "$"

    def test_missing_file_gives_reference_only(self, tmp_path):
        table = load_rates(tmp_path / "missing.json")
        assert table.codes() == [settings.reference_currency]

    def test_corrupt_file_backed_up(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text("{not json", encoding="utf-8")

        table = load_rates(path)

        assert len(table) == 1
        assert (tmp_path / "rates.json.corrupt").exists()

    def test_invalid_code_rejected(self):
        data = {"reference": "INR", "currencies": [
            {"code": "INR", "symbol": "₹", "rate_to_reference": "1"},
            {"code": "DOLLAR", "symbol": "$", "rate_to_reference": "83"},
        ]}
        with pytest.raises(ValueError):
            table_from_json(data)

    def test_reference_missing_rejected(self, tmp_path):
        data = {"reference": "INR", "currencies": [{"code": "USD", "symbol": "$", "rate_to_reference": "83"}]}
        with pytest.raises(InvalidRateError):
            load_rates(write_json(tmp_path / "rates.json", data))

    def test_malformed_record(self, tmp_path):
        data = {"reference": "INR", "currencies": [{"code": "INR", "symbol": "₹"}]}
        with pytest.raises(ValueError):
            load_rates(write_json(tmp_path / "rates.json", data))


class TestSaveRates:
    def test_save_then_load(self, tmp_path):
        table = CurrencyTable(
            [
                CurrencyRate(code="INR", symbol="₹", rate_to_reference="1"),
                CurrencyRate(code="EUR", symbol="€", rate_to_reference="90.125"),
            ],
            "INR",
        )
        path = save_rates(table, tmp_path / "nested" / "rates.json")

        loaded = load_rates(path)

        assert loaded.codes() == ["EUR", "INR"]
        assert loaded.rate_for("EUR").rate_to_reference == Decimal("90.125")
        assert not list((tmp_path / "nested").glob("*.tmp"))


class TestRefreshRegistry:
    def test_refresh_swaps_table(self, tmp_path):
        registry = RateRegistry(CurrencyTable.reference_only("INR", "₹"))
        table = refresh_registry(registry, write_json(tmp_path / "rates.json", RATES))
        assert registry.current() is table
        assert "USD" in registry.current()

    def test_failed_refresh_keeps_old_table(self, tmp_path):
        old = CurrencyTable.reference_only("INR", "₹")
        registry = RateRegistry(old)
        bad = {"reference": "INR", "currencies": [{"code": "USD", "symbol": "$", "rate_to_reference": "83"}]}
        with pytest.raises(InvalidRateError):
            refresh_registry(registry, write_json(tmp_path / "rates.json", bad))
        assert registry.current() is old
