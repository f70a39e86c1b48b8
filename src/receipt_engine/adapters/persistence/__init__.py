# src/receipt_engine/adapters/persistence/__init__.py
"""
Persistence Adapters - JSON Files

This package reads and writes the currency rate table, the coupon book
and sale files.
"""

from receipt_engine.adapters.persistence.rates_store import load_rates, save_rates
from receipt_engine.adapters.persistence.coupon_store import load_coupons
from receipt_engine.adapters.persistence.sale_file import load_sale, sale_from_dict

__all__ = [
    "load_rates",
    "save_rates",
    "load_coupons",
    "load_sale",
    "sale_from_dict",
]
