# src/receipt_engine/application/barcode.py
"""
Barcode Pattern Generator - Cosmetic Receipt Barcode

Builds a decorative bar pattern from a receipt identifier. This is NOT a
real symbology (Code-128, GS1, ...) and cannot be scanned; the receipt
number printed under the bars is the actual lookup key. The pattern only
depends on the identifier, so the same receipt always prints the same bars.

Scheme: keep ASCII letters and digits of the identifier (a placeholder
character when none remain); cell i is ord(chars[i % len]) % 3 + 1 units
wide and is ink on even i, gap on odd i.

Files that USE this module:
- receipt_engine.application.receipt_service (pattern for rendered receipts)
- receipt_engine.adapters.formatting.formatter (default pattern when none given)
- tests.test_barcode (unit tests)

Files that this module USES:
- receipt_engine.domain.models (BarCell, BarcodePattern)
"""
from __future__ import annotations

import re

from receipt_engine.domain.models import BarCell, BarcodePattern

DEFAULT_CELL_COUNT = 50
DEFAULT_PLACEHOLDER = "A"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def generate(identifier: str, cell_count: int = DEFAULT_CELL_COUNT,
             placeholder: str = DEFAULT_PLACEHOLDER) -> BarcodePattern:
    """
    Generate the cosmetic bar pattern for a receipt identifier.

    Args:
        identifier: Receipt identifier (e.g. "RCP-20240101-120000")
        cell_count: Number of bar cells to produce
        placeholder: Character used when the identifier has no letters or digits

    Returns:
        BarcodePattern with cell_count alternating ink/gap cells
    """
    stripped = _NON_ALNUM.sub("", identifier or "") or placeholder
    cells = tuple(
        BarCell(width=ord(stripped[i % len(stripped)]) % 3 + 1, ink=(i % 2 == 0))
        for i in range(cell_count)
    )
    return BarcodePattern(identifier=identifier or "", cells=cells)
