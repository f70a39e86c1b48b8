# src/receipt_engine/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the receipt computations that orchestrate domain logic.
No I/O; the receipt entry points live in receipt_engine.application.receipt_service.
"""

from receipt_engine.application.currency import CurrencyTable, RateRegistry, convert, rate_registry
from receipt_engine.application.coupons import CouponBook, CouponLookup, redeem, validate_coupon
from receipt_engine.application.totals import compute
from receipt_engine.application.barcode import generate

__all__ = [
    "CurrencyTable",
    "RateRegistry",
    "convert",
    "rate_registry",
    "CouponBook",
    "CouponLookup",
    "redeem",
    "validate_coupon",
    "compute",
    "generate",
]
