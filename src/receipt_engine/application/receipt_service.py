# src/receipt_engine/application/receipt_service.py
"""
Receipt Service - Entry Points for Computing and Rendering Receipts

This module is what collaborators call: the preview and the save/export
path both go through compute_totals() and render_document(), so they share
one set of numbers and one layout.

Files that USE this module:
- receipt_engine.app (issues receipts from the CLI)
- tests.test_receipt_service (unit and end-to-end tests)

Files that this module USES:
- receipt_engine.application.totals (compute)
- receipt_engine.application.coupons (redeem, CouponLookup)
- receipt_engine.application.currency (CurrencyTable, rate_registry)
- receipt_engine.application.barcode (generate)
- receipt_engine.adapters.formatting.formatter (render)
- receipt_engine.config (barcode parameters)
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from receipt_engine.adapters.formatting.formatter import render
from receipt_engine.application import barcode
from receipt_engine.application.coupons import CouponLookup, redeem
from receipt_engine.application.currency import CurrencyTable, rate_registry
from receipt_engine.application.totals import compute
from receipt_engine.config import settings
from receipt_engine.domain.models import RenderedDocument, Sale, Totals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Receipt:
    """A sale with its computed totals and rendered document."""
    sale: Sale
    totals: Totals
    document: RenderedDocument


def new_receipt_identifier(now: Optional[datetime] = None) -> str:
    """
    Build a receipt number from a timestamp: RCP-YYYYMMDD-HHMMSS.

    Args:
        now: Timestamp (default: current local time)
    """
    now = now or datetime.now()
    return now.strftime("RCP-%Y%m%d-%H%M%S")


def compute_totals(sale: Sale, table: Optional[CurrencyTable] = None,
                   treat_unknown_as_reference: bool = False) -> Totals:
    """
    Compute totals for a sale.

    Args:
        sale: Sale to compute
        table: Currency table (default: the registry's active table)
        treat_unknown_as_reference: Use rate 1 for an unknown currency code

    Raises:
        EmptySaleError, InvalidTaxRateError, UnknownCurrencyError
    """
    return compute(sale, table or rate_registry.current(), treat_unknown_as_reference)


def render_document(sale: Sale, totals: Totals, width: Optional[int] = None) -> RenderedDocument:
    """
    Render the receipt document for a sale and its totals. Never fails.

    Args:
        sale: Sale being printed
        totals: Totals from compute_totals()
        width: Characters per line (default: settings.receipt_width)
    """
    pattern = barcode.generate(
        sale.receipt_identifier,
        cell_count=settings.barcode_cells,
        placeholder=settings.barcode_placeholder,
    )
    return render(sale, totals, barcode=pattern, width=width)


def apply_coupon(sale: Sale, coupons: CouponLookup, table: Optional[CurrencyTable] = None,
                 treat_unknown_as_reference: bool = False) -> Sale:
    """
    Resolve the sale's coupon code into its discount amount.

    The coupon is validated against the subtotal, the way the receipt form
    validates it before saving. Sales without a coupon code are returned as is.

    Returns:
        Copy of the sale with discount_amount set from the coupon

    Raises:
        CouponNotFoundError, CouponBelowMinimumError, plus the compute_totals errors
    """
    if not sale.coupon_code:
        return sale
    subtotal = compute_totals(sale, table, treat_unknown_as_reference).subtotal
    result = redeem(sale.coupon_code, subtotal, coupons)
    return dataclasses.replace(sale, discount_amount=result.discount, coupon_code=result.code)


def issue_receipt(sale: Sale, table: Optional[CurrencyTable] = None,
                  coupons: Optional[CouponLookup] = None,
                  treat_unknown_as_reference: bool = False,
                  width: Optional[int] = None,
                  now: Optional[datetime] = None) -> Receipt:
    """
    Compute and render a receipt in one call.

    A sale without a receipt number gets one generated from the issue time,
    and a sale without issued_at is stamped with it. When a coupon lookup is
    given and the sale carries a coupon code, the coupon discount replaces
    the sale's discount amount first.

    Args:
        sale: Sale to issue
        table: Currency table (default: the registry's active table)
        coupons: Optional coupon lookup
        treat_unknown_as_reference: Use rate 1 for an unknown currency code
        width: Characters per line (default: settings.receipt_width)
        now: Issue time (default: current local time)

    Returns:
        Receipt with the (coupon-resolved) sale, totals and document
    """
    table = table or rate_registry.current()
    now = now or datetime.now()
    if not sale.receipt_identifier:
        sale = dataclasses.replace(sale, receipt_identifier=new_receipt_identifier(now))
    if sale.issued_at is None:
        sale = dataclasses.replace(sale, issued_at=now)
    if coupons is not None:
        sale = apply_coupon(sale, coupons, table, treat_unknown_as_reference)
    totals = compute_totals(sale, table, treat_unknown_as_reference)
    document = render_document(sale, totals, width=width)
    logger.info("Issued receipt %s: total %s %s", sale.receipt_identifier or "-",
                totals.total, totals.currency_code)
    return Receipt(sale=sale, totals=totals, document=document)
