# src/receipt_engine/application/coupons.py
"""
Coupon Validator - Discount Code Rules

Stateless evaluation of a coupon against a purchase amount. Looking coupons
up (and knowing whether they are active) belongs to a CouponLookup
collaborator; validation itself has no side effects.

Files that USE this module:
- receipt_engine.application.receipt_service (resolves a sale's coupon code)
- receipt_engine.adapters.persistence.coupon_store (builds a CouponBook)
- tests.test_coupons (unit tests)

Files that this module USES:
- receipt_engine.domain.models (Coupon, CouponDiscount, DiscountType)
- receipt_engine.domain.money (round2, to_money)
- receipt_engine.domain.errors (CouponNotFoundError, CouponBelowMinimumError)
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional, Protocol

from receipt_engine.domain.errors import CouponBelowMinimumError, CouponNotFoundError
from receipt_engine.domain.models import Coupon, CouponDiscount, DiscountType
from receipt_engine.domain.money import Number, round2, to_money

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def normalize_code(code: Optional[str]) -> str:
    """Coupon codes match case-insensitively; stored and compared upper-case."""
    return (code or "").strip().upper()


def validate_coupon(coupon: Optional[Coupon], purchase_amount: Number,
                    code: Optional[str] = None) -> CouponDiscount:
    """
    Validate a coupon against a purchase amount.

    The returned discount is the raw computed value; capping it at the
    subtotal is the totals calculator's job.

    Args:
        coupon: Coupon found for the code, or None if the lookup found nothing
        purchase_amount: Amount the coupon is applied to
        code: Code the customer entered; when given it must match the coupon

    Returns:
        CouponDiscount with the discount rounded to 2 digits

    Raises:
        CouponNotFoundError: If there is no active coupon matching the code
        CouponBelowMinimumError: If purchase_amount is below coupon.min_purchase
    """
    requested = normalize_code(code) if code is not None else None
    if coupon is None or not coupon.active:
        raise CouponNotFoundError(requested or (coupon.code if coupon else None))
    if requested is not None and requested != coupon.code:
        raise CouponNotFoundError(requested)

    amount = to_money(purchase_amount)
    if amount < coupon.min_purchase:
        raise CouponBelowMinimumError(coupon.code, coupon.min_purchase)

    if coupon.discount_type is DiscountType.PERCENTAGE:
        discount = round2(amount * coupon.discount_value / HUNDRED)
    else:
        discount = round2(coupon.discount_value)

    return CouponDiscount(code=coupon.code, discount_type=coupon.discount_type, discount=discount)


class CouponLookup(Protocol):
    """Protocol for coupon lookup collaborators."""
    def find_active(self, code: str) -> Optional[Coupon]:  # returns None when no active coupon matches
        ...


class CouponBook:
    """In-memory CouponLookup over a fixed set of coupons."""

    def __init__(self, coupons: Iterable[Coupon] = ()):
        self._coupons = {coupon.code: coupon for coupon in coupons}

    def find_active(self, code: str) -> Optional[Coupon]:
        coupon = self._coupons.get(normalize_code(code))
        if coupon is not None and coupon.active:
            return coupon
        return None

    def __len__(self) -> int:
        return len(self._coupons)


def redeem(code: str, purchase_amount: Number, lookup: CouponLookup) -> CouponDiscount:
    """
    Look up a coupon code and validate it against a purchase amount.

    Args:
        code: Code as entered (any case, surrounding spaces allowed)
        purchase_amount: Amount the coupon is applied to
        lookup: CouponLookup collaborator

    Returns:
        CouponDiscount for the coupon

    Raises:
        CouponNotFoundError, CouponBelowMinimumError
    """
    normalized = normalize_code(code)
    coupon = lookup.find_active(normalized) if normalized else None
    result = validate_coupon(coupon, purchase_amount, code=normalized)
    logger.debug("Coupon %s applied: %s discount %s", result.code,
                 result.discount_type.value, result.discount)
    return result
