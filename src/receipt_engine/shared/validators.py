# src/receipt_engine/shared/validators.py
"""
Input Validation Utilities - Configuration and Data Validation

This module provides validation functions for currency codes, coupon codes,
barcode placeholder characters and free text coming from configuration
files and sale intake.

Files that USE this module:
- receipt_engine.config.settings (uses validation functions in Settings field validators)
- receipt_engine.adapters.persistence.* (validates records read from JSON files)

Files that this module USES:
- None (pure utility functions)
"""
import re


def validate_currency_code(code: str) -> bool:
    """
    Validate an ISO-4217 style currency code.

    Args:
        code: Currency code to validate (e.g. "INR", "usd")

    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False

    # Three letters, case-insensitive
    return bool(re.match(r'^[A-Za-z]{3}$', code.strip()))


def validate_coupon_code(code: str, max_length: int = 32) -> bool:
    """
    Validate coupon code format.

    Args:
        code: Coupon code to validate
        max_length: Maximum allowed length

    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False

    clean_code = code.strip()
    if len(clean_code) > max_length:
        return False

    # Letters, digits, dashes and underscores
    return bool(re.match(r'^[A-Za-z0-9_-]+$', clean_code))


def validate_placeholder_char(value: str) -> bool:
    """Barcode placeholder must be exactly one ASCII letter or digit."""
    return bool(value) and bool(re.match(r'^[A-Za-z0-9]$', value))


def sanitize_text(text: str, max_length: int = 500) -> str:
    """
    Sanitize free text printed on a receipt.

    Removes control characters other than newlines and limits length.

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    sanitized = re.sub(r'[\x00-\x09\x0b-\x1f\x7f]', '', str(text))

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized.strip()
