"""Coin parameters for CryptoNote wallet and explorer front-ends."""

from __future__ import annotations

from .startup import bootstrap
from .config import Settings, initialize_settings
from .constants import BUNDLED_COINS, DEFAULT_COIN
from .errors import ConfigurationError
from .schemas import AddressPrefixes, CoinConfig, CoinDefinition, NetworkMode
from .table import (
    CoinParameterTable,
    available_coins,
    load_bundled,
    load_file,
    load_record,
)

__version__ = "1.0.0"

__all__ = [
    # Start-up
    "bootstrap",
    # Table and loaders
    "CoinParameterTable",
    "available_coins",
    "load_bundled",
    "load_file",
    "load_record",
    # Schemas
    "AddressPrefixes",
    "CoinConfig",
    "CoinDefinition",
    "NetworkMode",
    # Settings
    "Settings",
    "initialize_settings",
    # Errors
    "ConfigurationError",
    # Bundled data
    "BUNDLED_COINS",
    "DEFAULT_COIN",
]
