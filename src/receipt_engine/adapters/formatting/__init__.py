# src/receipt_engine/adapters/formatting/__init__.py
"""
Formatting Adapters - Receipt Layout and Text Export

This package lays out receipts as RenderedDocuments and exports them as text.
"""

from receipt_engine.adapters.formatting.formatter import render
from receipt_engine.adapters.formatting.plain_text import to_plain_text

__all__ = [
    "render",
    "to_plain_text",
]
