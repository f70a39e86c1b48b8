# tests/test_coupon_store.py
"""
Coupon Store Tests - Unit Tests for Coupon Book Loading

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- receipt_engine.adapters.persistence.coupon_store (load_coupons)
- pytest (testing framework, tmp_path fixture)
"""
import json

import pytest  # Testing framework for writing and running tests

from decimal import Decimal

from receipt_engine.adapters.persistence.coupon_store import load_coupons
from receipt_engine.domain.models import DiscountType

COUPONS = [
    {"code": "save10", "discount_type": "percentage", "discount_value": "10", "min_purchase": "0", "active": True},
    {"code": "FLAT30", "discount_type": "FIXED", "discount_value": 30, "min_purchase": "100"},
    {"code": "OLD5", "discount_type": "FIXED", "discount_value": "5", "active": False},
]


class TestLoadCoupons:
    def test_load(self, tmp_path):
        path = tmp_path / "coupons.json"
        path.write_text(json.dumps(COUPONS), encoding="utf-8")

        book = load_coupons(path)

        assert len(book) == 3
        save10 = book.find_active("SAVE10")
        assert save10.discount_type is DiscountType.PERCENTAGE
        assert book.find_active("flat30").min_purchase == Decimal("100")
        assert book.find_active("OLD5") is None

    def test_wrapped_in_object(self, tmp_path):
        path = tmp_path / "coupons.json"
        path.write_text(json.dumps({"coupons": COUPONS[:1]}), encoding="utf-8")
        assert len(load_coupons(path)) == 1

    def test_missing_file(self, tmp_path):
        assert len(load_coupons(tmp_path / "none.json")) == 0

    def test_bad_discount_type(self, tmp_path):
        path = tmp_path / "coupons.json"
        path.write_text(json.dumps([{"code": "X1", "discount_type": "BOGO", "discount_value": "1"}]),
                        encoding="utf-8")
        with pytest.raises(RuntimeError):
            load_coupons(path)

    def test_bad_code(self, tmp_path):
        path = tmp_path / "coupons.json"
        path.write_text(json.dumps([{"code": "no spaces!", "discount_type": "FIXED", "discount_value": "1"}]),
                        encoding="utf-8")
        with pytest.raises(RuntimeError):
            load_coupons(path)
