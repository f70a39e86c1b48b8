# src/receipt_engine/__init__.py
"""
Receipt Engine - Receipt Computation and Document Rendering

Turns the line items, discount, tax rate, payment and currency of a sale
into verified monetary totals and a fixed-width (80mm thermal paper)
printable receipt layout with a cosmetic barcode pattern.
"""

__version__ = "1.0.0"
