# tests/test_app.py
"""
CLI Tests - Tests for the receipt-engine Command

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- receipt_engine.app (main)
- unittest.mock (patch to keep logging configuration out of the test run)
- pytest (testing framework, tmp_path and capsys fixtures)
"""
import json

import pytest  # Testing framework for writing and running tests

from unittest.mock import patch  # Patching logging setup

from receipt_engine.app import main

RATES = {
    "reference": "INR",
    "currencies": [
        {"code": "INR", "symbol": "₹", "rate_to_reference": "1"},
        {"code": "USD", "symbol": "$", "rate_to_reference": "83.0"},
    ],
}

SALE = {
    "receipt_number": "RCP-20240101-120000",
    "currency": "USD",
    "items": [
        {"description": "Coffee", "quantity": 2, "price": "3.50"},
        {"description": "Cake", "quantity": 1, "price": "5.00"},
    ],
    "coupon_code": "SAVE10",
    "tax_rate": 18,
    "amount_paid": "15.00",
    "issued_at": "2024-01-01T12:00:00",
    "business": {"business_name": "Corner Cafe"},
}

COUPONS = [{"code": "SAVE10", "discount_type": "PERCENTAGE", "discount_value": "10"}]


@pytest.fixture
def files(tmp_path):
    paths = {}
    for name, data in (("rates", RATES), ("sale", SALE), ("coupons", COUPONS)):
        paths[name] = tmp_path / f"{name}.json"
        paths[name].write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return paths


def run(*argv):
    with patch("receipt_engine.app.setup_logging"):
        return main([str(arg) for arg in argv])


class TestMain:
    def test_prints_receipt(self, files, capsys):
        status = run(files["sale"], "--rates", files["rates"], "--coupons", files["coupons"])

        out = capsys.readouterr().out
        assert status == 0
        assert "Corner Cafe" in out
        assert "Discount (SAVE10):" in out
        assert "$12.74" in out
        assert "*RCP-20240101-120000*" in out

    def test_unknown_currency_fails(self, files, tmp_path, capsys):
        sale = dict(SALE, currency="JPY", coupon_code=None)
        path = tmp_path / "jpy.json"
        path.write_text(json.dumps(sale), encoding="utf-8")

        status = run(path, "--rates", files["rates"], "--coupons", files["coupons"])

        assert status == 1
        assert "Unknown currency: JPY" in capsys.readouterr().err

    def test_unknown_currency_as_reference(self, files, tmp_path, capsys):
        sale = dict(SALE, currency="JPY", coupon_code=None)
        path = tmp_path / "jpy.json"
        path.write_text(json.dumps(sale), encoding="utf-8")

        status = run(path, "--rates", files["rates"], "--coupons", files["coupons"],
                     "--treat-unknown-as-reference")

        assert status == 0
        assert "TOTAL:" in capsys.readouterr().out

    def test_bad_sale_file(self, files, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        assert run(path, "--rates", files["rates"], "--coupons", files["coupons"]) == 1

    def test_sale_not_an_object(self, files, tmp_path, capsys):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([SALE]), encoding="utf-8")
        assert run(path, "--rates", files["rates"], "--coupons", files["coupons"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_width_out_of_range(self, files):
        assert run(files["sale"], "--rates", files["rates"], "--width", "10") == 1

    def test_custom_width(self, files, capsys):
        status = run(files["sale"], "--rates", files["rates"], "--coupons", files["coupons"],
                     "--width", "40")
        assert status == 0
        assert "=" * 40 in capsys.readouterr().out
