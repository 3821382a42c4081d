"""Type definitions and conversion helpers for coin parameters."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, NotRequired, TypedDict

_DECIMAL_UINT = re.compile(r"0|[1-9][0-9]*")


class CoinRecordDict(TypedDict):
    """Raw coin record, keyed the way the browser front-end expects."""

    coinUnitPlaces: int
    txMinConfirms: int
    txCoinbaseMinConfirms: int
    coinSymbol: str
    openAliasPrefix: str
    coinName: str
    coinUriPrefix: str
    addressPrefix: int
    integratedAddressPrefix: int
    subAddressPrefix: int
    addressPrefixTestnet: int
    integratedAddressPrefixTestnet: int
    subAddressPrefixTestnet: int
    addressPrefixStagenet: int
    integratedAddressPrefixStagenet: int
    subAddressPrefixStagenet: int
    feePerKB: str  # Decimal string, may exceed 64 bits
    dustThreshold: str  # Decimal string, may exceed 64 bits
    txChargeRatio: float
    defaultMixin: int
    idleTimeout: int
    idleWarningDuration: int
    maxBlockNumber: int
    avgBlockTime: int
    debugMode: bool
    txChargeAddress: NotRequired[str]
    testnet: NotRequired[bool]
    stagenet: NotRequired[bool]


class ConfigErrorDict(TypedDict):
    """One flattened validation failure."""

    field: str
    message: str


def parse_big_uint(value: Any) -> int:
    """Parse a canonical non-negative decimal integer string (or int) without precision loss.

    Floats are rejected outright, and so are leading zeros, signs and any
    whitespace, so ``str(parse_big_uint(s)) == s``.
    """
    if isinstance(value, bool):
        raise ValueError("expected a decimal integer string, got a boolean")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("must be a non-negative integer")
        return value
    if isinstance(value, str):
        if not _DECIMAL_UINT.fullmatch(value):
            raise ValueError(f"{value!r} is not a non-negative decimal integer")
        return int(value)
    raise ValueError(f"expected a decimal integer string, got {type(value).__name__}")


def atomic_to_decimal(atomic: int, places: int) -> Decimal:
    """Convert atomic units to whole coins, exactly."""
    sign = 1 if atomic < 0 else 0
    digits = tuple(int(d) for d in str(abs(atomic)))
    return Decimal((sign, digits, -places))


def decimal_to_atomic(amount: Decimal | str, places: int) -> int:
    """Convert a whole-coin amount to atomic units.

    Raises ValueError when the amount is not a finite number or carries more
    precision than ``places`` fractional digits.
    """
    if isinstance(amount, str):
        try:
            amount = Decimal(amount.strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {amount!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {amount}")

    sign, digits, exponent = amount.as_tuple()
    assert isinstance(exponent, int)
    units = int("".join(str(d) for d in digits) or "0")
    shift = exponent + places
    if shift >= 0:
        atomic = units * 10**shift
    else:
        atomic, remainder = divmod(units, 10**-shift)
        if remainder:
            raise ValueError(f"Amount {amount} has more than {places} decimal places")
    return -atomic if sign else atomic
