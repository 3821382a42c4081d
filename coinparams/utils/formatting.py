"""Display formatting and front-end rendering of coin parameters."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from ..schemas import CoinConfig, NetworkMode
from ..types import decimal_to_atomic

if TYPE_CHECKING:
    from ..table import CoinParameterTable

BYTES_PER_KB = 1024


def format_amount(atomic: int, config: CoinConfig) -> str:
    """Format an amount in atomic units with the coin's display places.

    Args:
    ----
        atomic: Amount in atomic units (arbitrary size)
        config: Active coin configuration

    Returns:
    -------
        Decimal string, e.g. ``"1.500000000000"``

    """
    if isinstance(atomic, bool) or not isinstance(atomic, int):
        raise ValueError(f"Amount must be an integer number of atomic units, got {atomic!r}")

    places = config.display_unit_places
    sign = "-" if atomic < 0 else ""
    whole, fraction = divmod(abs(atomic), config.atomic_units_per_coin)
    if places == 0:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{fraction:0{places}d}"


def format_amount_with_symbol(atomic: int, config: CoinConfig) -> str:
    return f"{format_amount(atomic, config)} {config.symbol}"


def parse_amount(text: str | Decimal, config: CoinConfig) -> int:
    """Parse a whole-coin amount into atomic units.

    Args:
    ----
        text: Amount as typed by a user, e.g. ``"0.25"``
        config: Active coin configuration

    Returns:
    -------
        Amount in atomic units

    """
    atomic = decimal_to_atomic(text, config.display_unit_places)
    if atomic < 0:
        raise ValueError("Amount cannot be negative")
    return atomic


def estimate_fee(tx_size_bytes: int, config: CoinConfig) -> int:
    """Fee for a transaction of the given size, charged per started kilobyte."""
    if isinstance(tx_size_bytes, bool) or not isinstance(tx_size_bytes, int):
        raise ValueError(
            f"Transaction size must be an integer number of bytes, got {tx_size_bytes!r}"
        )
    if tx_size_bytes < 0:
        raise ValueError("Transaction size cannot be negative")
    kilobytes = -(-tx_size_bytes // BYTES_PER_KB)
    return config.fee_per_kb * kilobytes


def is_dust(atomic: int, config: CoinConfig) -> bool:
    return atomic < config.dust_threshold


def format_prefix(prefix: int) -> str:
    """Hex literal padded to whole bytes: 0xB2, 0x06B8."""
    digits = f"{prefix:X}"
    if len(digits) % 2:
        digits = "0" + digits
    return f"0x{digits}"


def to_record(table: CoinParameterTable) -> dict[str, Any]:
    """JSON-ready record with front-end keys; big integers become decimal strings."""
    config = table.config
    record: dict[str, Any] = {
        "testnet": config.is_testnet,
        "stagenet": config.is_stagenet,
    }
    for field_name, info in CoinConfig.model_fields.items():
        if field_name in _PER_NETWORK_FIELDS or field_name == "network_mode":
            continue
        value = getattr(config, field_name)
        if field_name in _BIG_INT_FIELDS:
            value = str(value)
        record[info.alias or field_name] = value
    record.update(_prefix_record(table))
    return record


def render_config_js(table: CoinParameterTable) -> str:
    """Render the ``config.js`` body served to the browser front-end."""
    lines = []
    for key, value in to_record(table).items():
        if key in _BIG_INT_KEYS:
            rendered = f"new JSBigInt('{value}')"
        elif key in _PREFIX_KEYS:
            rendered = format_prefix(value)
        else:
            rendered = json.dumps(value)
        lines.append(f"    {key}: {rendered}")
    return "var config = {\n" + ",\n".join(lines) + "\n};\n"


def _prefix_record(table: CoinParameterTable) -> dict[str, int]:
    record = {}
    for mode in NetworkMode:
        prefixes = table.definition.prefixes_for(mode)
        suffix = mode.prefix_suffix
        record[f"addressPrefix{suffix}"] = prefixes.address_prefix
        record[f"integratedAddressPrefix{suffix}"] = prefixes.integrated_address_prefix
        record[f"subAddressPrefix{suffix}"] = prefixes.sub_address_prefix
    return record


_PER_NETWORK_FIELDS = {"address_prefix", "integrated_address_prefix", "sub_address_prefix"}
_BIG_INT_FIELDS = {"fee_per_kb", "dust_threshold"}
_BIG_INT_KEYS = {"feePerKB", "dustThreshold"}
_PREFIX_KEYS = {
    f"{name}{mode.prefix_suffix}"
    for name in ("addressPrefix", "integratedAddressPrefix", "subAddressPrefix")
    for mode in NetworkMode
}
