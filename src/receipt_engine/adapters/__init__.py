# src/receipt_engine/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Formatting (receipt layout and text output)
- Persistence (JSON rate table, coupon book and sale files)
"""

__all__ = []
