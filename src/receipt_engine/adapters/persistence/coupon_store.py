# src/receipt_engine/adapters/persistence/coupon_store.py
"""
Coupon Store - Coupon Book Loading

Loads coupons from a JSON file into an in-memory CouponBook:

    [
      {"code": "SAVE10", "discount_type": "PERCENTAGE", "discount_value": "10",
       "min_purchase": "0", "active": true}
    ]

Files that USE this module:
- receipt_engine.app (coupon lookup for the CLI)
- tests.test_coupon_store (unit tests)

Files that this module USES:
- receipt_engine.application.coupons (CouponBook)
- receipt_engine.domain.models (Coupon)
- receipt_engine.config (settings for the default file path)
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from receipt_engine.application.coupons import CouponBook
from receipt_engine.config import settings
from receipt_engine.domain.models import Coupon
from receipt_engine.shared.validators import validate_coupon_code

logger = logging.getLogger(__name__)


def coupon_from_json(data: dict) -> Coupon:
    """
    Create a Coupon from a JSON dictionary.

    Raises:
        ValueError: If the code or discount type is invalid
        InvalidAmountError: If an amount is negative or not a number
    """
    code = str(data.get("code", ""))
    if not validate_coupon_code(code):
        raise ValueError(f"Invalid coupon code: {code!r}")
    return Coupon(
        code=code,
        discount_type=str(data.get("discount_type", "")).upper(),
        discount_value=data.get("discount_value", 0),
        min_purchase=data.get("min_purchase", 0),
        active=bool(data.get("active", True)),
    )


def load_coupons(path: Optional[Union[str, Path]] = None) -> CouponBook:
    """
    Load the coupon book from a JSON file.

    Args:
        path: Coupons file (default: settings.coupons_file)

    Returns:
        CouponBook; empty if the file does not exist

    Raises:
        RuntimeError: If the file cannot be parsed
    """
    p = Path(path) if path is not None else settings.coupons_file
    if not p.exists():
        logger.info("Coupons file %s not found, no coupons available", p)
        return CouponBook()

    try:
        with p.open("r", encoding="utf-8") as f:
            records = json.load(f)
        if isinstance(records, dict):
            records = records.get("coupons", [])
        book = CouponBook(coupon_from_json(record) for record in records)
    except (json.JSONDecodeError, ValueError, TypeError, AttributeError) as e:
        raise RuntimeError(f"Failed to load coupons file {p}: {e}") from e

    logger.info("Loaded %d coupons from %s", len(book), p)
    return book
