# src/receipt_engine/app.py
"""
Application Entry Point - Receipt CLI

This module serves as the composition root of the receipt engine. It wires
settings, logging, the currency rate table and the coupon book, then issues
a receipt for a sale file and prints it.

Usage:
    receipt-engine sale.json [--rates data/currencies.json] [--coupons data/coupons.json]
    python -m receipt_engine.app sale.json

Files that USE this module:
- receipt-engine console script (pyproject entry point)

Files that this module USES:
- receipt_engine.shared.logging_conf (setup_logging for logging configuration)
- receipt_engine.config (settings for defaults)
- receipt_engine.adapters.persistence.* (rates, coupons and sale files)
- receipt_engine.application.receipt_service (issue_receipt)
- receipt_engine.adapters.formatting.plain_text (text output)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import argparse  # Command-line argument parsing
import logging  # Standard library for logging messages and errors
import sys  # System-specific parameters and functions for exit codes
from typing import Optional, Sequence

from receipt_engine import __version__
from receipt_engine.adapters.formatting.plain_text import to_plain_text  # Text export of rendered receipts
from receipt_engine.adapters.persistence.coupon_store import load_coupons
from receipt_engine.adapters.persistence.rates_store import load_rates
from receipt_engine.adapters.persistence.sale_file import load_sale
from receipt_engine.application.currency import rate_registry  # Process-wide currency table
from receipt_engine.application.receipt_service import issue_receipt
from receipt_engine.config import settings
from receipt_engine.domain.errors import DomainError
from receipt_engine.shared.logging_conf import setup_logging  # Configure logging with file rotation

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="receipt-engine",
        description="Compute totals for a sale and print its receipt.",
    )
    parser.add_argument("sale", help="Path to the sale JSON file")
    parser.add_argument("--rates", default=None,
                        help=f"Currency rates JSON file (default: {settings.currency_rates_file})")
    parser.add_argument("--coupons", default=None,
                        help=f"Coupons JSON file (default: {settings.coupons_file})")
    parser.add_argument("--width", type=int, default=None,
                        help=f"Characters per line (default: {settings.receipt_width})")
    parser.add_argument("--treat-unknown-as-reference", action="store_true",
                        help="Use rate 1 for currencies missing from the rate table")
    parser.add_argument("--log-level", default=settings.log_level,
                        help="Logging level (default: %(default)s)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Issue a receipt for a sale file and print it to stdout.

    Steps:
    1. Sets up logging from settings and arguments
    2. Loads the currency table into the rate registry
    3. Loads the coupon book and the sale
    4. Computes, renders and prints the receipt

    Returns:
        Exit status: 0 on success, 1 on validation or input errors
    """
    args = build_parser().parse_args(argv)

    setup_logging(
        level=args.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_stdout=settings.log_stdout,
    )

    if args.width is not None and not 24 <= args.width <= 80:
        logger.error("Width must be between 24 and 80, got %s", args.width)
        return 1

    try:
        rate_registry.swap(load_rates(args.rates))
        coupons = load_coupons(args.coupons)
        sale = load_sale(args.sale)
        receipt = issue_receipt(
            sale,
            coupons=coupons,
            treat_unknown_as_reference=args.treat_unknown_as_reference,
            width=args.width,
        )
    except DomainError as e:
        logger.error("Cannot issue receipt: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (RuntimeError, ValueError) as e:
        logger.error("Invalid input: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(to_plain_text(receipt.document))
    return 0


if __name__ == "__main__":
    sys.exit(main())
