"""Bundled coin records, one per supported coin.

Keys follow the browser front-end's ``config.js``. Fee and dust values are
decimal strings in atomic units.
"""

from __future__ import annotations

from .types import CoinRecordDict

DEFAULT_COIN = "aeon"

AEON: CoinRecordDict = {
    "coinUnitPlaces": 12,
    "txMinConfirms": 10,  # CRYPTONOTE_DEFAULT_TX_SPENDABLE_AGE
    "txCoinbaseMinConfirms": 60,  # CRYPTONOTE_MINED_MONEY_UNLOCK_WINDOW
    "coinSymbol": "AEON",
    "openAliasPrefix": "aeon",
    "coinName": "Aeon",
    "coinUriPrefix": "aeon:",
    "addressPrefix": 0xB2,
    "integratedAddressPrefix": 0x2733,
    "subAddressPrefix": 0x06B8,
    "addressPrefixTestnet": 0x0426,
    "integratedAddressPrefixTestnet": 0x2C27,
    "subAddressPrefixTestnet": 0x0AAC,
    "addressPrefixStagenet": 0x011A,
    "integratedAddressPrefixStagenet": 0x2C1B,
    "subAddressPrefixStagenet": 0x0B20,
    "feePerKB": "2000000000",  # Unused on testnet, fee is dynamic there
    "dustThreshold": "1000000000",
    "txChargeRatio": 0.5,
    "defaultMixin": 4,  # Minimum ring size since hardfork v5
    "txChargeAddress": "",
    "idleTimeout": 30,
    "idleWarningDuration": 20,
    "maxBlockNumber": 500000000,
    "avgBlockTime": 120,
    "debugMode": False,
}

MONERO: CoinRecordDict = {
    "coinUnitPlaces": 12,
    "txMinConfirms": 10,
    "txCoinbaseMinConfirms": 60,
    "coinSymbol": "XMR",
    "openAliasPrefix": "xmr",
    "coinName": "Monero",
    "coinUriPrefix": "monero:",
    "addressPrefix": 18,
    "integratedAddressPrefix": 19,
    "subAddressPrefix": 42,
    "addressPrefixTestnet": 53,
    "integratedAddressPrefixTestnet": 54,
    "subAddressPrefixTestnet": 63,
    "addressPrefixStagenet": 24,
    "integratedAddressPrefixStagenet": 25,
    "subAddressPrefixStagenet": 36,
    "feePerKB": "2000000000",
    "dustThreshold": "1000000000",
    "txChargeRatio": 0.5,
    "defaultMixin": 10,
    "txChargeAddress": "",
    "idleTimeout": 30,
    "idleWarningDuration": 20,
    "maxBlockNumber": 500000000,
    "avgBlockTime": 120,
    "debugMode": False,
}

LOKI: CoinRecordDict = {
    "coinUnitPlaces": 9,
    "txMinConfirms": 10,
    "txCoinbaseMinConfirms": 60,
    "coinSymbol": "LOKI",
    "openAliasPrefix": "loki",
    "coinName": "Loki",
    "coinUriPrefix": "loki:",
    "addressPrefix": 114,
    "integratedAddressPrefix": 115,
    "subAddressPrefix": 116,
    "addressPrefixTestnet": 156,
    "integratedAddressPrefixTestnet": 157,
    "subAddressPrefixTestnet": 158,
    "addressPrefixStagenet": 24,
    "integratedAddressPrefixStagenet": 25,
    "subAddressPrefixStagenet": 36,
    "feePerKB": "2000000",
    "dustThreshold": "1000000",
    "txChargeRatio": 0.5,
    "defaultMixin": 9,
    "txChargeAddress": "",
    "idleTimeout": 30,
    "idleWarningDuration": 20,
    "maxBlockNumber": 500000000,
    "avgBlockTime": 120,
    "debugMode": False,
}

BUNDLED_COINS: dict[str, CoinRecordDict] = {
    "aeon": AEON,
    "monero": MONERO,
    "loki": LOKI,
}
