# src/receipt_engine/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, the money model and business errors.
No dependencies on infrastructure or external systems.
"""

from receipt_engine.domain.models import (
    Align,
    BarCell,
    BarcodePattern,
    BusinessProfile,
    Coupon,
    CouponDiscount,
    CurrencyRate,
    DiscountType,
    DocumentLine,
    LineItem,
    RenderedDocument,
    Sale,
    Totals,
    Weight,
)
from receipt_engine.domain.errors import (
    CouponBelowMinimumError,
    CouponError,
    CouponNotFoundError,
    DomainError,
    EmptySaleError,
    InvalidAmountError,
    InvalidRateError,
    InvalidTaxRateError,
    UnknownCurrencyError,
)

__all__ = [
    "LineItem",
    "Sale",
    "BusinessProfile",
    "CurrencyRate",
    "Coupon",
    "CouponDiscount",
    "DiscountType",
    "Totals",
    "BarCell",
    "BarcodePattern",
    "DocumentLine",
    "RenderedDocument",
    "Align",
    "Weight",
    "DomainError",
    "InvalidAmountError",
    "InvalidRateError",
    "EmptySaleError",
    "InvalidTaxRateError",
    "UnknownCurrencyError",
    "CouponError",
    "CouponNotFoundError",
    "CouponBelowMinimumError",
]
