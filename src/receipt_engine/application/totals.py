# src/receipt_engine/application/totals.py
"""
Totals Calculator - Subtotal, Discount, Tax, Total and Change

This module is the single place receipt arithmetic happens. Both the
on-screen preview and the saved/exported receipt take their numbers from
compute(), so the two can never disagree.

Rounding policy: every line total is rounded to 2 digits before summation,
and tax is rounded once; total is the sum of already rounded parts.

Files that USE this module:
- receipt_engine.application.receipt_service (compute_totals entry point)
- tests.test_totals (unit tests)

Files that this module USES:
- receipt_engine.application.currency (CurrencyTable, convert)
- receipt_engine.domain.models (Sale, Totals)
- receipt_engine.domain.money (round2)
- receipt_engine.domain.errors (EmptySaleError, InvalidTaxRateError)
"""
from __future__ import annotations

import logging
from decimal import Decimal

from receipt_engine.application.currency import CurrencyTable, convert
from receipt_engine.domain.errors import EmptySaleError, InvalidTaxRateError
from receipt_engine.domain.models import Sale, Totals
from receipt_engine.domain.money import ZERO, round2

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def compute(sale: Sale, table: CurrencyTable, treat_unknown_as_reference: bool = False) -> Totals:
    """
    Compute the totals of a sale.

    Steps:
    1. subtotal = sum of per-line rounded totals (blank rows ignored)
    2. discount = min(discount_amount, subtotal)
    3. tax = round2((subtotal - discount) x rate / 100)
    4. total = (subtotal - discount) + tax
    5. amount_paid defaults to total when omitted
    6. change_due = max(0, amount_paid - total)
    7. total_in_reference = convert(total, rate of the sale currency)

    Args:
        sale: Sale to compute
        table: Currency rate table
        treat_unknown_as_reference: Use rate 1 for an unknown currency code
            instead of failing

    Returns:
        Totals value object

    Raises:
        EmptySaleError: If no line item has a description
        InvalidTaxRateError: If the tax rate is negative
        UnknownCurrencyError: If the sale currency is not in the table
    """
    items = sale.billable_items
    if not items:
        raise EmptySaleError("Sale has no line items with a description")
    if sale.tax_rate_percent < 0:
        raise InvalidTaxRateError(f"Tax rate must not be negative: {sale.tax_rate_percent}")

    rate = table.rate_for(sale.currency_code, treat_as_reference=treat_unknown_as_reference)

    subtotal = sum((item.line_total for item in items), ZERO)
    discount = min(round2(sale.discount_amount), subtotal)
    after_discount = subtotal - discount
    tax_amount = round2(after_discount * sale.tax_rate_percent / HUNDRED)
    total = after_discount + tax_amount

    amount_paid = round2(sale.amount_paid) if sale.amount_paid is not None else total
    change_due = max(ZERO, amount_paid - total)

    totals = Totals(
        subtotal=round2(subtotal),
        discount=round2(discount),
        tax_amount=tax_amount,
        total=round2(total),
        amount_paid=amount_paid,
        change_due=round2(change_due),
        total_in_reference=convert(total, rate),
        tax_rate_percent=sale.tax_rate_percent,
        currency_code=sale.currency_code,
        currency_symbol=rate.symbol,
        reference_code=table.reference_code,
        reference_symbol=table.reference.symbol,
    )
    logger.debug(
        "Computed totals for %s: subtotal=%s discount=%s tax=%s total=%s %s (%s %s)",
        sale.receipt_identifier or "-", totals.subtotal, totals.discount,
        totals.tax_amount, totals.total, totals.currency_code,
        totals.total_in_reference, totals.reference_code,
    )
    return totals
