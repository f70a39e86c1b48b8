# tests/test_receipt_service.py
"""
Receipt Service Tests - Unit and End-to-End Tests for the Entry Points

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- receipt_engine.application.receipt_service (compute_totals, render_document,
  issue_receipt, new_receipt_identifier)
- receipt_engine.application.coupons (CouponBook)
- unittest.mock (patching the process-wide rate registry)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from datetime import datetime
from decimal import Decimal
from unittest.mock import patch  # Patching for the process-wide rate registry

from receipt_engine.application.barcode import generate
from receipt_engine.application.coupons import CouponBook
from receipt_engine.application.currency import CurrencyTable, rate_registry
from receipt_engine.application.receipt_service import (
    compute_totals,
    issue_receipt,
    new_receipt_identifier,
    render_document,
)
from receipt_engine.domain.errors import CouponBelowMinimumError, CouponNotFoundError
from receipt_engine.domain.models import Coupon, CurrencyRate, LineItem, Sale

TABLE = CurrencyTable(
    [
        CurrencyRate(code="INR", symbol="₹", rate_to_reference="1"),
        CurrencyRate(code="USD", symbol="$", rate_to_reference="83.0"),
    ],
    "INR",
)

COUPONS = CouponBook([
    Coupon(code="SAVE10", discount_type="PERCENTAGE", discount_value="10"),
    Coupon(code="BIG", discount_type="FIXED", discount_value="50", min_purchase="500"),
])


def make_sale(**kwargs):
    kwargs.setdefault("items", (LineItem("Coffee", 2, "3.50"), LineItem("Cake", 1, "5.00")))
    kwargs.setdefault("currency_code", "USD")
    kwargs.setdefault("tax_rate_percent", 18)
    kwargs.setdefault("receipt_identifier", "RCP-20240101-120000")
    return Sale(**kwargs)


class TestNewReceiptIdentifier:
    def test_format(self):
        assert new_receipt_identifier(datetime(2024, 1, 1, 12, 0, 0)) == "RCP-20240101-120000"

    def test_defaults_to_now(self):
        assert new_receipt_identifier().startswith("RCP-")


class TestComputeTotals:
    def test_uses_given_table(self):
        totals = compute_totals(make_sale(discount_amount="1.00", amount_paid="15.00"), TABLE)
        assert totals.total == Decimal("12.98")
        assert totals.total_in_reference == Decimal("1077.34")

    def test_defaults_to_registry_table(self):
        with patch.object(rate_registry, "current", return_value=TABLE) as mock_current:
            totals = compute_totals(make_sale())
        mock_current.assert_called_once()
        assert totals.currency_symbol == "$"


class TestRenderDocument:
    def test_preview_and_export_share_layout(self):
        sale = make_sale()
        totals = compute_totals(sale, TABLE)
        assert render_document(sale, totals) == render_document(sale, totals)

    def test_barcode_from_identifier(self):
        sale = make_sale()
        document = render_document(sale, compute_totals(sale, TABLE))
        assert document.lines[-2].barcode == generate("RCP-20240101-120000")


class TestIssueReceipt:
    def test_without_coupons(self):
        receipt = issue_receipt(make_sale(discount_amount="1.00", amount_paid="15.00"), TABLE)
        assert receipt.totals.change_due == Decimal("2.02")
        assert receipt.document.width == 32

    def test_coupon_resolved_against_subtotal(self):
        receipt = issue_receipt(make_sale(coupon_code="save10"), TABLE, coupons=COUPONS)

        # 10% of 12.00 = 1.20; tax 18% of 10.80 = 1.944 -> 1.94
        assert receipt.sale.discount_amount == Decimal("1.20")
        assert receipt.totals.discount == Decimal("1.20")
        assert receipt.totals.tax_amount == Decimal("1.94")
        assert receipt.totals.total == Decimal("12.74")
        assert any(line.split_pair == ("Discount (SAVE10):", "-$1.20") for line in receipt.document.lines)

    def test_coupon_below_minimum(self):
        with pytest.raises(CouponBelowMinimumError):
            issue_receipt(make_sale(coupon_code="BIG"), TABLE, coupons=COUPONS)

    def test_unknown_coupon(self):
        with pytest.raises(CouponNotFoundError):
            issue_receipt(make_sale(coupon_code="NOPE"), TABLE, coupons=COUPONS)

    def test_coupon_code_ignored_without_lookup(self):
        receipt = issue_receipt(make_sale(coupon_code="SAVE10", discount_amount="2.00"), TABLE)
        assert receipt.totals.discount == Decimal("2.00")

    def test_receipt_number_and_date_generated(self):
        now = datetime(2024, 3, 5, 9, 30, 15)
        receipt = issue_receipt(make_sale(receipt_identifier=""), TABLE, now=now)

        assert receipt.sale.receipt_identifier == "RCP-20240305-093015"
        assert receipt.sale.issued_at == now
        document_texts = receipt.document.texts()
        assert "Receipt #: RCP-20240305-093015" in document_texts
        assert "Date: 05/03/2024" in document_texts
        assert "Time: 09:30 AM" in document_texts
        assert "*RCP-20240305-093015*" in document_texts
        assert receipt.document.lines[-2].barcode == generate("RCP-20240305-093015")

    def test_given_receipt_number_and_date_kept(self):
        issued = datetime(2024, 1, 1, 12, 0)
        receipt = issue_receipt(make_sale(issued_at=issued), TABLE, now=datetime(2024, 3, 5))
        assert receipt.sale.receipt_identifier == "RCP-20240101-120000"
        assert receipt.sale.issued_at == issued

    def test_custom_width(self):
        receipt = issue_receipt(make_sale(), TABLE, width=40)
        assert receipt.document.width == 40
        assert "=" * 40 in receipt.document.texts()
