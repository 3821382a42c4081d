"""Utils module initialization."""

from __future__ import annotations

from .formatting import (
    estimate_fee,
    format_amount,
    format_amount_with_symbol,
    format_prefix,
    is_dust,
    parse_amount,
    render_config_js,
    to_record,
)
from .monitoring import JsonFormatter, StructuredLogger, configure_logging, log_config_summary

__all__ = [
    # Formatting
    "format_amount",
    "format_amount_with_symbol",
    "parse_amount",
    "estimate_fee",
    "is_dust",
    "format_prefix",
    "to_record",
    "render_config_js",
    # Logging
    "JsonFormatter",
    "StructuredLogger",
    "configure_logging",
    "log_config_summary",
]
