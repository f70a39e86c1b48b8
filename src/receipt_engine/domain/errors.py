# src/receipt_engine/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations and domain errors. All of them are deterministic
validation failures: callers surface them to the user and never retry.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class InvalidAmountError(DomainError):
    """Raised when a monetary amount or quantity is negative or not a number."""
    pass


class InvalidRateError(DomainError):
    """Raised when a currency rate value is invalid (e.g., negative or zero)."""
    pass


class EmptySaleError(DomainError):
    """Raised when a sale has no line item with a description."""
    pass


class InvalidTaxRateError(DomainError):
    """Raised when the tax rate percentage is negative."""
    pass


class UnknownCurrencyError(DomainError):
    """Raised when no rate entry exists for a requested currency code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown currency: {code}")


class CouponError(DomainError):
    """Base exception for coupon validation failures."""

    def __init__(self, code: Optional[str], message: str):
        self.code = code
        super().__init__(message)


class CouponNotFoundError(CouponError):
    """Raised when no active coupon matches the requested code."""

    def __init__(self, code: Optional[str]):
        super().__init__(code, f"Invalid coupon code: {code or ''}")


class CouponBelowMinimumError(CouponError):
    """Raised when the purchase amount is below the coupon's minimum purchase."""

    def __init__(self, code: str, minimum: Decimal):
        self.minimum = minimum
        super().__init__(code, f"Minimum purchase of {minimum:.2f} required")
