# src/receipt_engine/application/currency.py
"""
Currency Converter - Rate Table and Reference Currency Conversion

This module holds the currency rate table used to normalize sale totals
into the reference currency, and the process-wide registry that publishes
the active table. Tables are immutable; refreshing rates means building a
new table and swapping it in, never editing rates in place.

Files that USE this module:
- receipt_engine.application.totals (rate lookup and conversion)
- receipt_engine.application.receipt_service (default table from the registry)
- receipt_engine.adapters.persistence.rates_store (builds tables from JSON)
- receipt_engine.app (loads the table into the registry at startup)

Files that this module USES:
- receipt_engine.domain.models (CurrencyRate)
- receipt_engine.domain.money (round2, to_decimal)
- receipt_engine.domain.errors (UnknownCurrencyError, InvalidRateError)
"""
from __future__ import annotations

import logging
import threading
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Optional

from receipt_engine.domain.errors import InvalidRateError, UnknownCurrencyError
from receipt_engine.domain.models import CurrencyRate
from receipt_engine.domain.money import Number, round2, to_decimal

logger = logging.getLogger(__name__)

ONE = Decimal("1")


def convert(amount: Number, rate: CurrencyRate) -> Decimal:
    """
    Convert an amount into the reference currency.

    Args:
        amount: Amount in the rate's currency
        rate: CurrencyRate of the amount's currency

    Returns:
        round2(amount x rate_to_reference)
    """
    return round2(to_decimal(amount) * rate.rate_to_reference)


class CurrencyTable:
    """
    Immutable currency rate table keyed by currency code.

    The reference currency must be present with a rate of exactly 1 and
    every rate must be positive.
    """

    def __init__(self, rates: Iterable[CurrencyRate], reference_code: str):
        """
        Build a table from rate records.

        Args:
            rates: CurrencyRate records (later duplicates win)
            reference_code: Code of the reference currency

        Raises:
            InvalidRateError: If a rate is not positive or the reference
                currency is missing or not at rate 1
        """
        by_code = {}
        for rate in rates:
            if rate.rate_to_reference <= 0:
                raise InvalidRateError(
                    f"Rate for {rate.code} must be positive: {rate.rate_to_reference}"
                )
            by_code[rate.code] = rate

        reference_code = reference_code.strip().upper()
        reference = by_code.get(reference_code)
        if reference is None:
            raise InvalidRateError(f"Reference currency {reference_code} missing from rate table")
        if reference.rate_to_reference != ONE:
            raise InvalidRateError(
                f"Reference currency {reference_code} must have rate 1, "
                f"got {reference.rate_to_reference}"
            )

        self._rates = MappingProxyType(by_code)
        self._reference_code = reference_code

    @classmethod
    def reference_only(cls, code: str, symbol: str, name: str = "") -> CurrencyTable:
        """Table containing only the reference currency."""
        return cls([CurrencyRate(code=code, symbol=symbol, rate_to_reference=ONE, name=name)], code)

    @property
    def reference(self) -> CurrencyRate:
        return self._rates[self._reference_code]

    @property
    def reference_code(self) -> str:
        return self._reference_code

    def codes(self) -> list[str]:
        return sorted(self._rates)

    def rates(self) -> list[CurrencyRate]:
        return [self._rates[code] for code in self.codes()]

    def get(self, code: str) -> Optional[CurrencyRate]:
        return self._rates.get((code or "").strip().upper())

    def rate_for(self, code: str, treat_as_reference: bool = False) -> CurrencyRate:
        """
        Look up the rate for a currency code.

        Args:
            code: Currency code (case-insensitive)
            treat_as_reference: Explicitly opt in to using rate 1 (the
                reference currency) when the code is unknown

        Returns:
            CurrencyRate for the code, or for the reference currency when
            treat_as_reference is set and the code is unknown

        Raises:
            UnknownCurrencyError: If the code is unknown and no fallback was requested
        """
        rate = self.get(code)
        if rate is not None:
            return rate
        if treat_as_reference:
            logger.warning("Unknown currency %s, treating as reference currency %s",
                           code, self._reference_code)
            return self.reference
        raise UnknownCurrencyError(code)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.get(code) is not None

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"CurrencyTable(reference={self._reference_code!r}, codes={self.codes()!r})"


class RateRegistry:
    """
    Publishes the active CurrencyTable to the whole process.

    Readers call current() without locking; swap() replaces the table
    reference in one assignment so a computation sees either the old or the
    new table, never a mix.
    """

    def __init__(self, table: Optional[CurrencyTable] = None):
        self._table = table
        self._swap_lock = threading.Lock()

    def current(self) -> CurrencyTable:
        """
        Get the active rate table.

        Falls back to a reference-only table built from settings when no
        table has been loaded yet.
        """
        table = self._table
        if table is None:
            from receipt_engine.config import settings
            table = CurrencyTable.reference_only(settings.reference_currency, settings.reference_symbol)
            self.swap(table)
        return table

    def swap(self, table: CurrencyTable) -> CurrencyTable:
        """
        Replace the active table.

        Args:
            table: New table

        Returns:
            The table that was active before (None if none was loaded)
        """
        with self._swap_lock:
            previous, self._table = self._table, table
        logger.info("Currency table loaded: reference=%s, currencies=%d",
                    table.reference_code, len(table))
        return previous


# Global registry instance
rate_registry = RateRegistry()
