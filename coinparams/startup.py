"""Start-up wiring: settings, logging, coin parameters."""

from __future__ import annotations

import logging

from .config import Settings, initialize_settings
from .table import CoinParameterTable
from .utils.monitoring import configure_logging, log_config_summary

logger = logging.getLogger(__name__)


def bootstrap(settings: Settings | None = None) -> CoinParameterTable:
    """Build the coin parameter table for this process.

    Raises ConfigurationError when anything is invalid; callers should exit.
    The returned table is meant to be passed to whatever needs it.
    """
    if settings is None:
        settings = initialize_settings()
    configure_logging(settings)

    table = CoinParameterTable.from_settings(settings)
    log_config_summary(table.config)
    if table.config.debug_mode:
        logger.warning(f"{table.config.symbol} front-end running in debug mode")
    return table
