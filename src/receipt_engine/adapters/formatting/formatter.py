# src/receipt_engine/adapters/formatting/formatter.py
"""
Receipt Formatter - Fixed-width Receipt Layout

This module lays out a sale and its computed totals as a thermal-receipt
document: header, receipt details, item table, totals, payment, footer and
barcode. The output is a RenderedDocument (styled text lines) that both the
text/PDF exporters and the on-screen preview consume, so they always show
the same layout.

Two-column rows keep the amount right-aligned in a fixed column; the left
text wraps inside the space that remains, so long descriptions never push
the amount out of place. Rendering never fails on long or odd text.

Files that USE this module:
- receipt_engine.application.receipt_service (render_document entry point)
- tests.test_formatter (unit tests)

Files that this module USES:
- receipt_engine.domain.models (Sale, Totals, DocumentLine, RenderedDocument)
- receipt_engine.domain.money (format_money, format_quantity, format_percent)
- receipt_engine.application.barcode (generate for the default pattern)
- receipt_engine.config (receipt width, labels, barcode parameters)
"""
from __future__ import annotations

import textwrap
from typing import List, Optional

from receipt_engine.application import barcode as barcode_generator
from receipt_engine.config import settings
from receipt_engine.domain.models import (
    Align,
    BarcodePattern,
    DocumentLine,
    RenderedDocument,
    Sale,
    Totals,
    Weight,
)
from receipt_engine.domain.money import format_money, format_percent, format_quantity

# Narrowest left column before an amount moves to its own line
MIN_WIDTH = 24
MIN_LEFT_WIDTH = 8
CONTINUATION_INDENT = "  "


def _wrap(text: str, width: int, indent: str = "") -> List[str]:
    """Wrap text to width, breaking words longer than the line."""
    return textwrap.wrap(
        text,
        width=max(width, 1),
        subsequent_indent=indent if len(indent) < width else "",
        break_long_words=True,
        break_on_hyphens=False,
    )


def _centered(text: str, width: int, weight: Weight = Weight.NORMAL) -> List[DocumentLine]:
    return [DocumentLine(text=chunk, align=Align.CENTER, weight=weight) for chunk in _wrap(text, width)]


def _left(text: str, width: int, weight: Weight = Weight.NORMAL) -> List[DocumentLine]:
    return [
        DocumentLine(text=chunk, align=Align.LEFT, weight=weight)
        for chunk in _wrap(text, width, CONTINUATION_INDENT)
    ]


def _divider(width: int, char: str = "=") -> DocumentLine:
    return DocumentLine(text=char * width, align=Align.CENTER)


def _pair(left: str, right: str, width: int, weight: Weight = Weight.NORMAL) -> List[DocumentLine]:
    """
    Lay out a two-column row.

    The right text sits flush right on the first line; the left text wraps
    within width - len(right) - 1 columns, continuation lines indented.

    Returns:
        One or more DocumentLines; only the first carries split_pair
    """
    left_width = width - len(right) - 1
    if left_width < MIN_LEFT_WIDTH:
        # Amount too wide to share the line: left text first, amount below
        lines = _left(left, width, weight)
        lines.append(DocumentLine(text=right.rjust(width), align=Align.RIGHT,
                                  weight=weight, split_pair=("", right)))
        return lines

    chunks = _wrap(left, left_width, CONTINUATION_INDENT) or [""]
    first = chunks[0]
    row = first + " " * (width - len(first) - len(right)) + right
    lines = [DocumentLine(text=row, align=Align.LEFT, weight=weight, split_pair=(first, right))]
    lines.extend(DocumentLine(text=chunk, align=Align.LEFT, weight=weight) for chunk in chunks[1:])
    return lines


def header_lines(sale: Sale, width: int, tax_id_label: str) -> List[DocumentLine]:
    """Business name (bold), address, phone and tax id, skipping empty fields."""
    business = sale.business
    lines: List[DocumentLine] = []
    if business.name.strip():
        lines.extend(_centered(business.name.strip(), width, Weight.BOLD))
    if business.address.strip():
        for part in business.address.strip().splitlines():
            lines.extend(_centered(part.strip(), width))
    if business.phone.strip():
        lines.extend(_centered(f"Tel: {business.phone.strip()}", width))
    if business.tax_id.strip():
        lines.extend(_centered(f"{tax_id_label}: {business.tax_id.strip()}", width))
    return lines


def details_lines(sale: Sale, width: int, walk_in_customer: str) -> List[DocumentLine]:
    """Receipt number, date, time, cashier and (named) customer."""
    if sale.issued_at is not None:
        date_text = sale.issued_at.strftime("%d/%m/%Y")
        time_text = sale.issued_at.strftime("%I:%M %p")
    else:
        date_text = time_text = "-"

    lines: List[DocumentLine] = []
    lines.extend(_left(f"Receipt #: {sale.receipt_identifier or '-'}", width))
    lines.extend(_left(f"Date: {date_text}", width))
    lines.extend(_left(f"Time: {time_text}", width))
    lines.extend(_left(f"Cashier: {sale.cashier.strip() or '-'}", width))

    customer = (sale.customer_name or "").strip()
    if customer and customer != walk_in_customer:
        lines.extend(_left(f"Customer: {customer}", width))
    return lines


def item_lines(sale: Sale, totals: Totals, width: int) -> List[DocumentLine]:
    """Item table: bold column header, then one row per non-blank line item."""
    symbol = totals.currency_symbol
    lines = _pair("ITEM", "AMOUNT", width, Weight.BOLD)
    for item in sale.billable_items:
        left = (f"{item.description} {format_quantity(item.quantity)} x "
                f"{format_money(item.unit_price, symbol)}")
        lines.extend(_pair(left, format_money(item.line_total, symbol), width))
    return lines


def totals_lines(sale: Sale, totals: Totals, width: int) -> List[DocumentLine]:
    """Subtotal, discount (when any), tax, bold total, reference equivalent."""
    symbol = totals.currency_symbol
    lines = _pair("Subtotal:", format_money(totals.subtotal, symbol), width)

    if totals.discount > 0:
        label = f"Discount ({sale.coupon_code}):" if sale.coupon_code else "Discount:"
        lines.extend(_pair(label, f"-{format_money(totals.discount, symbol)}", width))

    lines.extend(_pair(f"Tax ({format_percent(totals.tax_rate_percent)}%):",
                       format_money(totals.tax_amount, symbol), width))
    lines.append(_divider(width, "-"))
    lines.extend(_pair("TOTAL:", format_money(totals.total, symbol), width, Weight.BOLD))

    if totals.is_foreign_currency:
        lines.extend(_pair(f"{totals.reference_code} Equivalent:",
                           format_money(totals.total_in_reference, totals.reference_symbol), width))
    return lines


def payment_lines(sale: Sale, totals: Totals, width: int) -> List[DocumentLine]:
    """Payment method, amount paid and change (as computed, never re-derived)."""
    symbol = totals.currency_symbol
    lines = _left(f"Payment: {sale.payment_method.strip() or '-'}", width)
    lines.extend(_pair("Paid:", format_money(totals.amount_paid, symbol), width))
    lines.extend(_pair("Change:", format_money(totals.change_due, symbol), width))
    return lines


def footer_lines(sale: Sale, width: int) -> List[DocumentLine]:
    """One centered line per line of the footer text (long lines wrap)."""
    lines: List[DocumentLine] = []
    for segment in sale.business.footer_text.strip().splitlines():
        segment = segment.strip()
        if segment:
            lines.extend(_centered(segment, width))
        else:
            lines.append(DocumentLine(text="", align=Align.CENTER))
    return lines


def barcode_lines(sale: Sale, pattern: BarcodePattern, width: int) -> List[DocumentLine]:
    """Bar pattern, then the receipt number between asterisks."""
    lines = [DocumentLine(text="", align=Align.CENTER, barcode=pattern)]
    if sale.receipt_identifier:
        lines.extend(_centered(f"*{sale.receipt_identifier}*", width))
    return lines


def render(
    sale: Sale,
    totals: Totals,
    barcode: Optional[BarcodePattern] = None,
    width: Optional[int] = None,
    tax_id_label: Optional[str] = None,
    walk_in_customer: Optional[str] = None,
) -> RenderedDocument:
    """
    Lay out a receipt.

    Args:
        sale: The sale being printed
        totals: Totals computed for the sale
        barcode: Bar pattern; generated from the receipt identifier if omitted
        width: Characters per line (default: settings.receipt_width), at least MIN_WIDTH
        tax_id_label: Label before the tax id (default: settings.tax_id_label)
        walk_in_customer: Customer name treated as anonymous
            (default: settings.walk_in_customer)

    Returns:
        RenderedDocument with the receipt lines in print order
    """
    width = max(width or settings.receipt_width, MIN_WIDTH)
    tax_id_label = tax_id_label if tax_id_label is not None else settings.tax_id_label
    walk_in_customer = walk_in_customer if walk_in_customer is not None else settings.walk_in_customer
    if barcode is None:
        barcode = barcode_generator.generate(
            sale.receipt_identifier,
            cell_count=settings.barcode_cells,
            placeholder=settings.barcode_placeholder,
        )

    lines: List[DocumentLine] = []
    lines.extend(header_lines(sale, width, tax_id_label))
    lines.append(_divider(width))
    lines.extend(details_lines(sale, width, walk_in_customer))
    lines.append(_divider(width))
    lines.extend(item_lines(sale, totals, width))
    lines.append(_divider(width))
    lines.extend(totals_lines(sale, totals, width))
    lines.append(_divider(width))
    lines.extend(payment_lines(sale, totals, width))

    footer = footer_lines(sale, width)
    if footer:
        lines.append(_divider(width))
        lines.extend(footer)

    lines.extend(barcode_lines(sale, barcode, width))
    return RenderedDocument(lines=tuple(lines), width=width)
