"""Coin parameter table: load once, validate, share read-only."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .constants import BUNDLED_COINS
from .errors import ConfigurationError
from .schemas import CoinConfig, CoinDefinition, NetworkMode

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)

# Keys describing the active network rather than the coin itself.
_NETWORK_KEYS = ("testnet", "stagenet", "networkMode", "network_mode")


class CoinParameterTable:
    """Read-only access to the validated parameters of one coin on one network."""

    __slots__ = ("_definition", "_config")

    def __init__(
        self,
        definition: CoinDefinition,
        network: NetworkMode = NetworkMode.MAINNET,
        debug_mode: bool | None = None,
    ):
        self._definition = definition
        self._config = _resolve(definition, network, debug_mode)

    @property
    def config(self) -> CoinConfig:
        return self._config

    @property
    def definition(self) -> CoinDefinition:
        return self._definition

    @property
    def network(self) -> NetworkMode:
        return self._config.network_mode

    def get(self, key: str) -> Any:
        """Value of one parameter, by field name or front-end key.

        Per-network prefix keys (``addressPrefixTestnet``, ...) resolve through
        the definition, so every key of ``config.js`` can be looked up.
        """
        try:
            return self._config.get(key)
        except KeyError:
            prefix = self._definition.prefix_for_key(key)
            if prefix is None:
                raise
            return prefix

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def with_network(self, network: NetworkMode | str) -> CoinParameterTable:
        """Same coin, another network."""
        return CoinParameterTable(
            self._definition, _coerce_network(network), debug_mode=self._config.debug_mode
        )

    def __repr__(self) -> str:
        return f"CoinParameterTable(symbol={self._config.symbol!r}, network={self.network.value!r})"

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        network: NetworkMode | str | None = None,
        debug_mode: bool | None = None,
        source: str = "record",
    ) -> CoinParameterTable:
        """Validate a raw record.

        The network is, in order: ``network`` if given, the record's own
        network keys (``testnet``/``stagenet`` flags or ``networkMode``),
        then mainnet.
        """
        if not isinstance(record, Mapping):
            raise ConfigurationError(f"Coin configuration from {source} must be a mapping")

        data = dict(record)
        record_network = _pop_network(data, source)
        mode = _coerce_network(network) if network is not None else record_network

        try:
            definition = CoinDefinition.model_validate(data)
        except ValidationError as e:
            error = ConfigurationError.from_validation_error(e, source)
            logger.error(f"Refusing coin configuration: {error}")
            raise error from e

        table = cls(definition, mode or NetworkMode.MAINNET, debug_mode=debug_mode)
        logger.info(
            f"Loaded {table.config.symbol} parameters for {table.network.value} from {source}"
        )
        return table

    @classmethod
    def from_bundled(
        cls, coin: str, network: NetworkMode | str | None = None, debug_mode: bool | None = None
    ) -> CoinParameterTable:
        record = BUNDLED_COINS.get(coin.strip().lower())
        if record is None:
            raise ConfigurationError(
                f"Unknown coin {coin!r}, expected one of: {', '.join(available_coins())}"
            )
        return cls.from_record(record, network, debug_mode, source=f"bundled coin {coin!r}")

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        network: NetworkMode | str | None = None,
        debug_mode: bool | None = None,
    ) -> CoinParameterTable:
        """Load a JSON coin record."""
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                record = json.load(f)
        except OSError as e:
            logger.error(f"Cannot read coin configuration {path}: {e}")
            raise ConfigurationError(f"Cannot read coin configuration {path}: {e}") from e
        except UnicodeDecodeError as e:
            logger.error(f"Coin configuration {path} is not UTF-8: {e}")
            raise ConfigurationError(f"Cannot decode {path} as UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            logger.error(f"Malformed coin configuration {path}: {e}")
            raise ConfigurationError(f"Malformed JSON in {path}: {e}") from e
        return cls.from_record(record, network, debug_mode, source=str(path))

    @classmethod
    def from_settings(cls, settings: Settings) -> CoinParameterTable:
        """Start-up entry point: build the table the settings ask for."""
        debug_mode = True if settings.DEBUG else None
        if settings.COIN_CONFIG_FILE is not None:
            return cls.from_file(settings.COIN_CONFIG_FILE, settings.network_mode, debug_mode)
        return cls.from_bundled(settings.COIN, settings.network_mode, debug_mode)


def available_coins() -> list[str]:
    return sorted(BUNDLED_COINS)


def load_record(
    record: Mapping[str, Any], network: NetworkMode | str | None = None
) -> CoinConfig:
    return CoinParameterTable.from_record(record, network).config


def load_bundled(coin: str, network: NetworkMode | str | None = None) -> CoinConfig:
    return CoinParameterTable.from_bundled(coin, network).config


def load_file(path: str | Path, network: NetworkMode | str | None = None) -> CoinConfig:
    return CoinParameterTable.from_file(path, network).config


def _resolve(
    definition: CoinDefinition, network: NetworkMode, debug_mode: bool | None
) -> CoinConfig:
    try:
        return definition.resolve(network, debug_mode=debug_mode)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(e, f"{network.value} resolution") from e


def _coerce_network(network: NetworkMode | str) -> NetworkMode:
    if isinstance(network, NetworkMode):
        return network
    try:
        return NetworkMode(str(network).strip().lower())
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown network {network!r}, expected one of: "
            f"{', '.join(m.value for m in NetworkMode)}"
        ) from e


def _pop_network(data: dict[str, Any], source: str) -> NetworkMode | None:
    """Remove network keys from a record and decode them."""
    values = {key: data.pop(key) for key in _NETWORK_KEYS if key in data}
    if not values:
        return None

    for key in ("testnet", "stagenet"):
        if key in values and not isinstance(values[key], bool):
            raise ConfigurationError(
                f"Invalid coin configuration from {source}",
                [{"field": key, "message": "must be a boolean"}],
            )

    try:
        flagged = NetworkMode.from_flags(
            values.get("testnet", False), values.get("stagenet", False)
        )
    except ValueError as e:
        logger.error(f"Refusing coin configuration from {source}: {e}")
        raise ConfigurationError(
            f"Invalid coin configuration from {source}",
            [{"field": "testnet/stagenet", "message": str(e)}],
        ) from e

    named = values.get("networkMode", values.get("network_mode"))
    if named is None:
        return flagged

    mode = _coerce_network(named)
    if flagged is not NetworkMode.MAINNET and flagged is not mode:
        raise ConfigurationError(
            f"Invalid coin configuration from {source}",
            [
                {
                    "field": "networkMode",
                    "message": f"{mode.value} contradicts the {flagged.value} flag",
                }
            ],
        )
    return mode
