# src/receipt_engine/adapters/persistence/rates_store.py
"""
Rates Store - Currency Rate Table Persistence

This module loads and saves the currency rate table as a JSON file:

    {
      "reference": "INR",
      "currencies": [
        {"code": "INR", "symbol": "₹", "name": "Indian Rupee", "rate_to_reference": "1"},
        {"code": "USD", "symbol": "$", "name": "US Dollar", "rate_to_reference": "83.0"}
      ]
    }

Rates are written as strings so they round-trip through Decimal exactly.

Files that USE this module:
- receipt_engine.app (loads the table into the rate registry at startup)
- tests.test_rates_store (unit tests)

Files that this module USES:
- receipt_engine.application.currency (CurrencyTable)
- receipt_engine.domain.models (CurrencyRate)
- receipt_engine.config (settings for file path and reference currency)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

from receipt_engine.application.currency import CurrencyTable
from receipt_engine.config import settings
from receipt_engine.domain.errors import DomainError
from receipt_engine.domain.models import CurrencyRate
from receipt_engine.shared.validators import validate_currency_code

logger = logging.getLogger(__name__)


def table_to_json(table: CurrencyTable) -> dict:
    """
    Convert a CurrencyTable to a JSON-serializable dictionary.

    Returns:
        Dictionary with the reference code and one record per currency
    """
    return {
        "reference": table.reference_code,
        "currencies": [
            {
                "code": rate.code,
                "symbol": rate.symbol,
                "name": rate.name,
                "rate_to_reference": str(rate.rate_to_reference),
            }
            for rate in table.rates()
        ],
    }


def table_from_json(data: dict, default_reference: Optional[str] = None) -> CurrencyTable:
    """
    Create a CurrencyTable from a JSON dictionary.

    Args:
        data: Dictionary in the rates file format
        default_reference: Reference code when the file does not name one

    Returns:
        CurrencyTable

    Raises:
        ValueError: If a record is malformed
        InvalidRateError: If a rate is invalid or the reference is missing
    """
    reference = data.get("reference") or default_reference or settings.reference_currency
    rates = []
    for record in data.get("currencies", []):
        code = str(record["code"])
        if not validate_currency_code(code):
            raise ValueError(f"Invalid currency code in rates file: {code!r}")
        rates.append(CurrencyRate(
            code=code,
            symbol=str(record.get("symbol") or code),
            name=str(record.get("name") or ""),
            rate_to_reference=record["rate_to_reference"],
        ))
    return CurrencyTable(rates, reference)


def _rates_path(path: Optional[Union[str, Path]] = None) -> Path:
    return Path(path) if path is not None else settings.currency_rates_file


def _reference_only() -> CurrencyTable:
    return CurrencyTable.reference_only(settings.reference_currency, settings.reference_symbol)


def load_rates(path: Optional[Union[str, Path]] = None) -> CurrencyTable:
    """
    Load the currency rate table from a JSON file.

    A missing file yields a table with only the reference currency. A
    corrupt file is backed up next to the original (".json.corrupt") and
    also yields the reference-only table.

    Args:
        path: Rates file (default: settings.currency_rates_file)

    Returns:
        CurrencyTable

    Raises:
        InvalidRateError: If the file holds invalid rates
        ValueError: If a currency record is malformed
    """
    p = _rates_path(path)
    if not p.exists():
        logger.info("Rates file %s not found, using reference currency %s only",
                    p, settings.reference_currency)
        return _reference_only()

    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            backup_path = p.with_suffix(".json.corrupt")
            try:
                shutil.copy2(p, backup_path)
                logger.warning("Rates file corrupted (JSON decode error), backed up to %s: %s",
                               backup_path, e)
            except OSError as backup_error:
                logger.error("Failed to backup corrupt rates file: %s", backup_error)
            return _reference_only()

    try:
        table = table_from_json(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed rates file {p}: {e}") from e
    logger.info("Loaded %d currencies from %s (reference %s)", len(table), p, table.reference_code)
    return table


def save_rates(table: CurrencyTable, path: Optional[Union[str, Path]] = None) -> Path:
    """
    Save the currency rate table using an atomic write.

    Writes to a temporary file in the same directory, then renames it over
    the target so readers never see a half-written file.

    Args:
        table: Table to save
        path: Rates file (default: settings.currency_rates_file)

    Returns:
        Path written
    """
    p = _rates_path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path = tempfile.mkstemp(suffix=".json.tmp", dir=str(p.parent), text=True)
    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(table_to_json(table), f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, str(p))
    except Exception as e:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise RuntimeError(f"Failed to save rates file: {e}") from e
    return p


def refresh_registry(registry, path: Optional[Union[str, Path]] = None) -> CurrencyTable:
    """
    Reload the rates file and swap the new table into a registry.

    The registry keeps serving the previous table if loading fails.

    Args:
        registry: RateRegistry to update
        path: Rates file (default: settings.currency_rates_file)

    Returns:
        The newly active table

    Raises:
        DomainError, ValueError: If the file cannot be turned into a table
    """
    try:
        table = load_rates(path)
    except (DomainError, ValueError) as e:
        logger.error("Keeping current currency table, reload failed: %s", e)
        raise
    registry.swap(table)
    return table
