"""Coin parameter schemas."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)

from .types import parse_big_uint

logger = logging.getLogger(__name__)

# Prefixes are varint-encoded into addresses, so anything up to uint64 is legal.
Prefix = Annotated[int, Field(strict=True, ge=0, lt=2**64)]
NonNegativeInt = Annotated[int, Field(strict=True, ge=0)]
PositiveInt = Annotated[int, Field(strict=True, gt=0)]
NonEmptyStr = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]
BigUInt = Annotated[int, BeforeValidator(parse_big_uint)]


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("expected a number, got a boolean")
    return value


Ratio = Annotated[float, BeforeValidator(_reject_bool), Field(ge=0, le=1, allow_inf_nan=False)]


class NetworkMode(str, Enum):
    """Network a wallet front-end talks to."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    STAGENET = "stagenet"

    @classmethod
    def from_flags(cls, testnet: bool = False, stagenet: bool = False) -> NetworkMode:
        """Decode the legacy pair of booleans."""
        if testnet and stagenet:
            raise ValueError("testnet and stagenet cannot both be enabled")
        if testnet:
            return cls.TESTNET
        if stagenet:
            return cls.STAGENET
        return cls.MAINNET

    @property
    def prefix_suffix(self) -> str:
        """Suffix used by flat front-end keys, e.g. ``addressPrefixTestnet``."""
        return "" if self is NetworkMode.MAINNET else self.value.capitalize()


class AddressPrefixes(BaseModel):
    """Address, integrated address and subaddress prefixes of one network."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    address_prefix: Prefix = Field(alias="addressPrefix")
    integrated_address_prefix: Prefix = Field(alias="integratedAddressPrefix")
    sub_address_prefix: Prefix = Field(alias="subAddressPrefix")

    @model_validator(mode="after")
    def check_distinct(self) -> AddressPrefixes:
        """Address kinds must be told apart by prefix alone."""
        _check_distinct(
            self.address_prefix, self.integrated_address_prefix, self.sub_address_prefix
        )
        return self


class CoinParameters(BaseModel):
    """Fields shared by a coin definition and its resolved configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    # Identity
    symbol: NonEmptyStr = Field(alias="coinSymbol")
    name: NonEmptyStr = Field(alias="coinName")
    uri_prefix: NonEmptyStr = Field(alias="coinUriPrefix")
    alias_prefix: NonEmptyStr = Field(alias="openAliasPrefix")

    # Display and confirmations
    display_unit_places: NonNegativeInt = Field(alias="coinUnitPlaces")
    min_confirmations: PositiveInt = Field(alias="txMinConfirms")
    coinbase_min_confirmations: PositiveInt = Field(alias="txCoinbaseMinConfirms")

    # Fees, in atomic units
    fee_per_kb: BigUInt = Field(alias="feePerKB")
    dust_threshold: BigUInt = Field(alias="dustThreshold")
    charge_ratio: Ratio = Field(alias="txChargeRatio")
    charge_address: str = Field(default="", alias="txChargeAddress")
    default_mixin: NonNegativeInt = Field(alias="defaultMixin")

    # Session idling
    idle_timeout_seconds: PositiveInt = Field(alias="idleTimeout")
    idle_warning_seconds: PositiveInt = Field(alias="idleWarningDuration")

    # Chain
    max_block_number: PositiveInt = Field(alias="maxBlockNumber")
    avg_block_time_seconds: PositiveInt = Field(alias="avgBlockTime")

    debug_mode: bool = Field(default=False, alias="debugMode", strict=True)

    @model_validator(mode="after")
    def check_thresholds(self) -> CoinParameters:
        """Validate relations between fields."""
        if self.idle_warning_seconds > self.idle_timeout_seconds:
            raise ValueError(
                f"idle warning ({self.idle_warning_seconds}s) must not exceed "
                f"idle timeout ({self.idle_timeout_seconds}s)"
            )
        return self

    @property
    def atomic_units_per_coin(self) -> int:
        return 10**self.display_unit_places

    @classmethod
    def field_for_key(cls, key: str) -> str | None:
        """Map a field name or front-end key to the field name."""
        if key in cls.model_fields:
            return key
        for field_name, info in cls.model_fields.items():
            if info.alias == key:
                return field_name
        return None


class CoinDefinition(CoinParameters):
    """Network-independent definition of one coin.

    Accepts prefixes either nested per network or as the flat front-end keys
    (``addressPrefix``, ``addressPrefixTestnet``, ``subAddressPrefixStagenet``, ...).
    """

    mainnet_prefixes: AddressPrefixes
    testnet_prefixes: AddressPrefixes
    stagenet_prefixes: AddressPrefixes

    @model_validator(mode="before")
    @classmethod
    def fold_flat_prefixes(cls, data: Any) -> Any:
        """Group flat per-network prefix keys into one triplet per network."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        grouped: dict[str, dict[str, Any]] = {}
        for mode in NetworkMode:
            for key, field_name in _flat_prefix_keys(mode).items():
                if key in data:
                    grouped.setdefault(f"{mode.value}_prefixes", {})[field_name] = data.pop(key)

        for target, prefixes in grouped.items():
            if target in data:
                raise ValueError(f"{target} given both nested and as flat prefix keys")
            data[target] = prefixes
        return data

    @model_validator(mode="after")
    def warn_low_coinbase_maturity(self) -> CoinDefinition:
        # Checked here only; resolved configs inherit an already-checked definition.
        if self.coinbase_min_confirmations < self.min_confirmations:
            logger.warning(
                f"{self.symbol}: coinbase confirmations ({self.coinbase_min_confirmations}) "
                f"below standard confirmations ({self.min_confirmations})"
            )
        return self

    def prefixes_for(self, mode: NetworkMode) -> AddressPrefixes:
        return getattr(self, f"{mode.value}_prefixes")

    def prefix_for_key(self, key: str) -> int | None:
        """Prefix behind a per-network key such as ``subAddressPrefixStagenet``."""
        for mode in NetworkMode:
            field_name = _flat_prefix_keys(mode).get(key)
            if field_name is not None:
                return getattr(self.prefixes_for(mode), field_name)
        return None

    def resolve(self, mode: NetworkMode, debug_mode: bool | None = None) -> CoinConfig:
        """Build the configuration for one network mode."""
        data = self.model_dump(
            exclude={"mainnet_prefixes", "testnet_prefixes", "stagenet_prefixes"}
        )
        data.update(self.prefixes_for(mode).model_dump())
        data["network_mode"] = mode
        if debug_mode is not None:
            data["debug_mode"] = debug_mode
        return CoinConfig.model_validate(data)


class CoinConfig(CoinParameters):
    """Fully-populated, validated parameters for the active network mode."""

    network_mode: NetworkMode = Field(alias="networkMode")
    address_prefix: Prefix = Field(alias="addressPrefix")
    integrated_address_prefix: Prefix = Field(alias="integratedAddressPrefix")
    sub_address_prefix: Prefix = Field(alias="subAddressPrefix")

    @model_validator(mode="after")
    def check_prefixes(self) -> CoinConfig:
        _check_distinct(
            self.address_prefix, self.integrated_address_prefix, self.sub_address_prefix
        )
        return self

    @property
    def is_mainnet(self) -> bool:
        return self.network_mode is NetworkMode.MAINNET

    @property
    def is_testnet(self) -> bool:
        return self.network_mode is NetworkMode.TESTNET

    @property
    def is_stagenet(self) -> bool:
        return self.network_mode is NetworkMode.STAGENET

    @property
    def prefixes(self) -> AddressPrefixes:
        return AddressPrefixes(
            address_prefix=self.address_prefix,
            integrated_address_prefix=self.integrated_address_prefix,
            sub_address_prefix=self.sub_address_prefix,
        )

    def get(self, key: str) -> Any:
        """Look up a value by field name or front-end key.

        The legacy ``testnet`` and ``stagenet`` keys resolve to the mode flags.
        Per-network prefix keys are only known to ``CoinParameterTable.get``.
        """
        if key == "testnet":
            return self.is_testnet
        if key == "stagenet":
            return self.is_stagenet
        field_name = self.field_for_key(key)
        if field_name is None:
            raise KeyError(key)
        return getattr(self, field_name)


def _check_distinct(*prefixes: int) -> None:
    if len(set(prefixes)) != len(prefixes):
        raise ValueError(
            "address, integrated address and subaddress prefixes must be distinct, "
            f"got {', '.join(hex(p) for p in prefixes)}"
        )


def _flat_prefix_keys(mode: NetworkMode) -> dict[str, str]:
    """Flat key -> triplet field name, for one network."""
    suffix = mode.prefix_suffix
    snake_suffix = "" if mode is NetworkMode.MAINNET else f"_{mode.value}"
    return {
        f"addressPrefix{suffix}": "address_prefix",
        f"integratedAddressPrefix{suffix}": "integrated_address_prefix",
        f"subAddressPrefix{suffix}": "sub_address_prefix",
        f"address_prefix{snake_suffix}": "address_prefix",
        f"integrated_address_prefix{snake_suffix}": "integrated_address_prefix",
        f"sub_address_prefix{snake_suffix}": "sub_address_prefix",
    }
