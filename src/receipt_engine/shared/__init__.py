# src/receipt_engine/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from receipt_engine.shared.validators import (
    sanitize_text,
    validate_coupon_code,
    validate_currency_code,
    validate_placeholder_char,
)
from receipt_engine.shared.logging_conf import setup_logging

__all__ = [
    "validate_currency_code",
    "validate_coupon_code",
    "validate_placeholder_char",
    "sanitize_text",
    "setup_logging",
]
