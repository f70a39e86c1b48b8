# src/receipt_engine/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables and a .env file with validation.

Files that USE this module:
- receipt_engine.app (loads settings for CLI defaults and logging)
- receipt_engine.application.* (reference currency, barcode parameters)
- receipt_engine.adapters.* (receipt width, labels, data file paths)

Files that this module USES:
- receipt_engine.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from receipt_engine.shared.validators import (
    validate_currency_code,  # Validate ISO-4217 style currency code
    validate_placeholder_char,  # Validate barcode placeholder character
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Currency ---
    reference_currency: str = Field(default="INR", alias="REFERENCE_CURRENCY")
    reference_symbol: str = Field(default="₹", alias="REFERENCE_SYMBOL")

    # --- Receipt layout ---
    # 80mm thermal paper prints about 32 monospace characters per line
    receipt_width: int = Field(default=32, alias="RECEIPT_WIDTH", ge=24, le=80)
    tax_id_label: str = Field(default="GST", alias="TAX_ID_LABEL")
    walk_in_customer: str = Field(default="Walk-in Customer", alias="WALK_IN_CUSTOMER")
    default_payment_method: str = Field(default="Cash", alias="DEFAULT_PAYMENT_METHOD")

    # --- Barcode ---
    barcode_cells: int = Field(default=50, alias="BARCODE_CELLS", ge=1, le=200)
    barcode_placeholder: str = Field(default="A", alias="BARCODE_PLACEHOLDER")

    # --- Data files ---
    currency_rates_file: Path = Field(
        default=Path("./data/currencies.json"), alias="CURRENCY_RATES_FILE"
    )
    coupons_file: Path = Field(default=Path("./data/coupons.json"), alias="COUPONS_FILE")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="RECEIPT_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("reference_currency")
    @classmethod
    def validate_reference_currency(cls, v: str) -> str:
        """Validate and normalize the reference currency code."""
        if not validate_currency_code(v):
            raise ValueError("REFERENCE_CURRENCY must be a 3-letter currency code")
        return v.strip().upper()

    @field_validator("barcode_placeholder")
    @classmethod
    def validate_barcode_placeholder(cls, v: str) -> str:
        """Validate barcode placeholder character."""
        if not validate_placeholder_char(v):
            raise ValueError("BARCODE_PLACEHOLDER must be a single letter or digit")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level


# Global settings instance
settings = Settings()
