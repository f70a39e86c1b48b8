# src/receipt_engine/adapters/persistence/sale_file.py
"""
Sale File - Sale Intake from JSON

Reads a sale in the receipt form's JSON shape:

    {
      "receipt_number": "RCP-20240101-120000",
      "currency": "USD",
      "items": [{"description": "Coffee", "quantity": 2, "price": "3.50"}],
      "discount": "1.00",
      "coupon_code": null,
      "tax_rate": 18,
      "amount_paid": "15.00",
      "payment_method": "Cash",
      "cashier": "Asha",
      "customer_name": "Ravi",
      "issued_at": "2024-01-01T12:00:00",
      "business": {"business_name": "...", "address": "...", "phone": "...",
                   "tax_id": "...", "footer_message": "..."}
    }

Empty strings in numeric fields mean "not given", as in the form.

Files that USE this module:
- receipt_engine.app (CLI input)
- tests.test_sale_file (unit tests)

Files that this module USES:
- receipt_engine.domain.models (Sale, LineItem, BusinessProfile)
- receipt_engine.shared.validators (sanitize_text)
- receipt_engine.config (settings for the default payment method)
"""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from receipt_engine.config import settings
from receipt_engine.domain.models import BusinessProfile, LineItem, Sale
from receipt_engine.shared.validators import sanitize_text


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _text(data: dict, *keys: str) -> str:
    for key in keys:
        if not _blank(data.get(key)):
            return sanitize_text(data[key])
    return ""


def business_from_dict(data: Optional[dict]) -> BusinessProfile:
    """Accepts both the profile table's column names and the short field names."""
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"Business must be a JSON object, got {type(data).__name__}")
    return BusinessProfile(
        name=_text(data, "business_name", "name"),
        address=_text(data, "address"),
        phone=_text(data, "phone"),
        tax_id=_text(data, "tax_id"),
        footer_text=_text(data, "footer_message", "footer_text"),
    )


def sale_from_dict(data: dict) -> Sale:
    """
    Create a Sale from a JSON dictionary.

    Args:
        data: Sale in the receipt form's JSON shape

    Returns:
        Sale

    Raises:
        InvalidAmountError: If an amount or quantity is invalid
        ValueError: If the sale, its items or issued_at have the wrong shape
    """
    if not isinstance(data, dict):
        raise ValueError(f"Sale must be a JSON object, got {type(data).__name__}")
    raw_items = data.get("items") or []
    if not isinstance(raw_items, list) or not all(isinstance(item, dict) for item in raw_items):
        raise ValueError("Sale items must be a list of JSON objects")

    items = [
        LineItem(
            description=_text(item, "description"),
            quantity=1 if _blank(item.get("quantity")) else item["quantity"],
            unit_price=0 if _blank(item.get("price")) else item["price"],
        )
        for item in raw_items
    ]

    issued_raw = data.get("issued_at")
    if issued_raw and not isinstance(issued_raw, str):
        raise ValueError(f"issued_at must be an ISO-8601 string, got {issued_raw!r}")
    issued_at = datetime.fromisoformat(issued_raw.replace("Z", "+00:00")) if issued_raw else None

    return Sale(
        items=tuple(items),
        currency_code=_text(data, "currency") or settings.reference_currency,
        discount_amount=0 if _blank(data.get("discount")) else data["discount"],
        tax_rate_percent=0 if _blank(data.get("tax_rate")) else data["tax_rate"],
        amount_paid=None if _blank(data.get("amount_paid")) else data["amount_paid"],
        payment_method=_text(data, "payment_method") or settings.default_payment_method,
        cashier=_text(data, "cashier"),
        receipt_identifier=_text(data, "receipt_number"),
        business=business_from_dict(data.get("business")),
        customer_name=_text(data, "customer_name") or None,
        coupon_code=_text(data, "coupon_code") or None,
        issued_at=issued_at,
    )


def load_sale(path: Union[str, Path]) -> Sale:
    """
    Read a sale from a JSON file.

    Raises:
        RuntimeError: If the file cannot be read or is not valid JSON
    """
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RuntimeError(f"Failed to read sale file {p}: {e}") from e
    return sale_from_dict(data)
