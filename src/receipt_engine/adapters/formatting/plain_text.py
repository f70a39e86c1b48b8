# src/receipt_engine/adapters/formatting/plain_text.py
"""
Plain Text Export - RenderedDocument to Fixed-width Text

Serializes a RenderedDocument for text output (console, ESC/POS style
printers, .txt export). Bold has no plain-text form and is dropped.

Files that USE this module:
- receipt_engine.app (prints issued receipts)
- tests.test_plain_text (unit tests)

Files that this module USES:
- receipt_engine.domain.models (RenderedDocument, DocumentLine, BarcodePattern)
"""
from __future__ import annotations

from receipt_engine.domain.models import Align, BarcodePattern, DocumentLine, RenderedDocument

# One glyph per ink cell, thicker glyph for wider bars; gaps are not drawn
BAR_GLYPHS = {1: "|", 2: "▌", 3: "█"}


def bars_to_text(pattern: BarcodePattern) -> str:
    """Draw the ink cells of a bar pattern as block glyphs."""
    return "".join(BAR_GLYPHS.get(cell.width, "█") for cell in pattern.cells if cell.ink)


def line_to_text(line: DocumentLine, width: int) -> str:
    """
    Pad one document line to the document width.

    Args:
        line: Line to lay out
        width: Characters per line

    Returns:
        Line text without trailing whitespace
    """
    if line.barcode is not None:
        text = bars_to_text(line.barcode)[:width]
        return text.center(width).rstrip()
    if line.split_pair is not None:
        return line.text.rstrip()
    if line.align is Align.CENTER:
        return line.text.center(width).rstrip()
    if line.align is Align.RIGHT:
        return line.text.rjust(width)
    return line.text.rstrip()


def to_plain_text(document: RenderedDocument) -> str:
    """
    Serialize a rendered receipt to text.

    Returns:
        Newline-joined lines, ending with a newline
    """
    return "\n".join(line_to_text(line, document.width) for line in document.lines) + "\n"
