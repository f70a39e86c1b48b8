# src/receipt_engine/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Sales and their line items
- Currency rates and coupons
- Computed totals
- Barcode patterns and rendered receipt documents

All models are immutable value objects. Caller-supplied numbers are
converted to Decimal on construction.

Files that USE this module:
- receipt_engine.application.* (all services use domain models)
- receipt_engine.adapters.* (adapters create and use domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- receipt_engine.domain.money (Decimal conversion and rounding)
- receipt_engine.domain.errors (InvalidAmountError)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime  # Date/time of issue printed on the receipt
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple  # Type hints for optional values

from receipt_engine.domain.errors import InvalidAmountError
from receipt_engine.domain.money import ZERO, round2, to_decimal, to_money


@dataclass(frozen=True)
class LineItem:
    """
    One row of a sale.

    Attributes:
        description: Item description (blank rows are ignored by totals)
        quantity: Positive quantity, fractional allowed
        unit_price: Non-negative price in the transaction currency
    """
    description: str
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = ZERO

    def __post_init__(self):
        quantity = to_decimal(self.quantity)
        if quantity <= 0:
            raise InvalidAmountError(f"Quantity must be positive: {self.quantity!r}")
        object.__setattr__(self, "description", (self.description or "").strip())
        object.__setattr__(self, "quantity", quantity)
        object.__setattr__(self, "unit_price", to_money(self.unit_price))

    @property
    def is_blank(self) -> bool:
        return not self.description

    @property
    def line_total(self) -> Decimal:
        """quantity x unit_price, rounded to 2 digits."""
        return round2(self.quantity * self.unit_price)


@dataclass(frozen=True)
class BusinessProfile:
    """Header and footer text of the issuing business. All fields optional."""
    name: str = ""
    address: str = ""
    phone: str = ""
    tax_id: str = ""
    footer_text: str = ""

    def __post_init__(self):
        for name in ("name", "address", "phone", "tax_id", "footer_text"):
            value = getattr(self, name)
            object.__setattr__(self, name, "" if value is None else str(value))


@dataclass(frozen=True)
class Sale:
    """
    Everything the caller supplies to compute and print one receipt.

    Attributes:
        items: Ordered line items (order matters for display only)
        currency_code: Transaction currency code (upper-cased)
        discount_amount: Absolute discount, already resolved from any coupon
        tax_rate_percent: Tax rate in percent (sign checked at compute time)
        amount_paid: Amount tendered, None means paid in full
        payment_method: Free text (e.g. "Cash", "Card")
        cashier: Cashier name
        receipt_identifier: Receipt number, also the barcode source
        business: Business profile for header/footer
        customer_name: Optional customer name
        coupon_code: Optional coupon code shown in the discount label
        issued_at: Date/time printed in the metadata block
    """
    items: Tuple[LineItem, ...]
    currency_code: str
    discount_amount: Decimal = ZERO
    tax_rate_percent: Decimal = ZERO
    amount_paid: Optional[Decimal] = None
    payment_method: str = "Cash"
    cashier: str = ""
    receipt_identifier: str = ""
    business: BusinessProfile = field(default_factory=BusinessProfile)
    customer_name: Optional[str] = None
    coupon_code: Optional[str] = None
    issued_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "currency_code", (self.currency_code or "").strip().upper())
        object.__setattr__(self, "payment_method", (self.payment_method or "").strip())
        object.__setattr__(self, "cashier", (self.cashier or "").strip())
        object.__setattr__(self, "receipt_identifier", (self.receipt_identifier or "").strip())
        if self.business is None:
            object.__setattr__(self, "business", BusinessProfile())
        object.__setattr__(self, "discount_amount", to_money(self.discount_amount))
        object.__setattr__(self, "tax_rate_percent", to_decimal(self.tax_rate_percent))
        if self.amount_paid is not None:
            object.__setattr__(self, "amount_paid", to_money(self.amount_paid))
        if self.coupon_code is not None:
            code = self.coupon_code.strip().upper()
            object.__setattr__(self, "coupon_code", code or None)

    @property
    def billable_items(self) -> Tuple[LineItem, ...]:
        """Line items with a non-blank description, in display order."""
        return tuple(item for item in self.items if not item.is_blank)


@dataclass(frozen=True)
class CurrencyRate:
    """
    Exchange rate of one currency against the reference currency.

    1 unit of this currency = rate_to_reference units of the reference currency.
    """
    code: str
    symbol: str
    rate_to_reference: Decimal
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "code", self.code.strip().upper())
        object.__setattr__(self, "rate_to_reference", to_decimal(self.rate_to_reference))


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


@dataclass(frozen=True)
class Coupon:
    """
    A named discount rule gated by a minimum purchase.

    Attributes:
        code: Coupon code (upper-cased)
        discount_type: PERCENTAGE or FIXED
        discount_value: Percent for PERCENTAGE, amount for FIXED
        min_purchase: Minimum purchase amount for the coupon to apply
        active: Inactive coupons never match
    """
    code: str
    discount_type: DiscountType
    discount_value: Decimal
    min_purchase: Decimal = ZERO
    active: bool = True

    def __post_init__(self):
        object.__setattr__(self, "code", self.code.strip().upper())
        object.__setattr__(self, "discount_type", DiscountType(self.discount_type))
        object.__setattr__(self, "discount_value", to_money(self.discount_value))
        object.__setattr__(self, "min_purchase", to_money(self.min_purchase))


@dataclass(frozen=True)
class CouponDiscount:
    """Result of a successful coupon validation (raw, not capped at subtotal)."""
    code: str
    discount_type: DiscountType
    discount: Decimal


@dataclass(frozen=True)
class Totals:
    """
    Computed totals of a sale, all 2-digit Decimals.

    Invariants:
        total = max(0, subtotal - discount) + tax_amount
        change_due = max(0, amount_paid - total)
    """
    subtotal: Decimal
    discount: Decimal
    tax_amount: Decimal
    total: Decimal
    amount_paid: Decimal
    change_due: Decimal
    total_in_reference: Decimal
    tax_rate_percent: Decimal
    currency_code: str
    currency_symbol: str
    reference_code: str
    reference_symbol: str

    @property
    def is_foreign_currency(self) -> bool:
        return self.currency_code != self.reference_code


@dataclass(frozen=True)
class BarCell:
    """One bar of the cosmetic barcode: width in units, ink or gap."""
    width: int
    ink: bool


@dataclass(frozen=True)
class BarcodePattern:
    """Cosmetic (non-scannable) bar pattern derived from a receipt identifier."""
    identifier: str
    cells: Tuple[BarCell, ...]


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Weight(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"


@dataclass(frozen=True)
class DocumentLine:
    """
    One line of a rendered receipt.

    For two-column rows split_pair holds (left, right) and text holds the
    composed fixed-width row. Otherwise text is the unpadded content and
    align says where it goes. Barcode lines carry the pattern and no text.
    """
    text: str
    align: Align = Align.LEFT
    weight: Weight = Weight.NORMAL
    split_pair: Optional[Tuple[str, str]] = None
    barcode: Optional[BarcodePattern] = None


@dataclass(frozen=True)
class RenderedDocument:
    """Ordered, medium-agnostic receipt layout. Single source of layout truth."""
    lines: Tuple[DocumentLine, ...]
    width: int

    def __len__(self) -> int:
        return len(self.lines)

    def texts(self) -> list[str]:
        return [line.text for line in self.lines]
