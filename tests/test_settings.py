# tests/test_settings.py
"""
Settings Tests - Unit Tests for Configuration Validation

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- receipt_engine.config.settings (Settings)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from pydantic import ValidationError

from receipt_engine.config.settings import Settings


class TestSettings:
    def test_values_from_aliases(self):
        s = Settings(REFERENCE_CURRENCY="usd", REFERENCE_SYMBOL="$", RECEIPT_WIDTH=40)
        assert s.reference_currency == "USD"
        assert s.reference_symbol == "$"
        assert s.receipt_width == 40

    def test_env_variables(self, monkeypatch):
        monkeypatch.setenv("BARCODE_CELLS", "30")
        monkeypatch.setenv("TAX_ID_LABEL", "VAT")
        s = Settings()
        assert s.barcode_cells == 30
        assert s.tax_id_label == "VAT"

    def test_invalid_reference_currency(self):
        with pytest.raises(ValidationError):
            Settings(REFERENCE_CURRENCY="RUPEE")

    def test_invalid_width(self):
        with pytest.raises(ValidationError):
            Settings(RECEIPT_WIDTH=10)

    def test_invalid_placeholder(self):
        with pytest.raises(ValidationError):
            Settings(BARCODE_PLACEHOLDER="AB")

    def test_log_level_normalized(self):
        assert Settings(LOG_LEVEL="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")
