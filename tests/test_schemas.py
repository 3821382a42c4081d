"""Tests for coin parameter schemas and validation rules."""

import logging

import pytest
from pydantic import ValidationError

from coinparams.constants import BUNDLED_COINS
from coinparams.errors import ConfigurationError
from coinparams.schemas import AddressPrefixes, CoinDefinition, NetworkMode
from coinparams.table import CoinParameterTable, load_bundled, load_record
from coinparams.types import parse_big_uint


class TestNetworkMode:
    """Test network mode decoding."""

    @pytest.mark.parametrize(
        ("testnet", "stagenet", "expected"),
        [
            (False, False, NetworkMode.MAINNET),
            (True, False, NetworkMode.TESTNET),
            (False, True, NetworkMode.STAGENET),
        ],
    )
    def test_from_flags(self, testnet, stagenet, expected):
        """Test each legal flag combination maps to one mode."""
        assert NetworkMode.from_flags(testnet, stagenet) is expected

    def test_from_flags_rejects_both(self):
        """Test testnet and stagenet together are refused."""
        with pytest.raises(ValueError, match="cannot both be enabled"):
            NetworkMode.from_flags(testnet=True, stagenet=True)

    def test_prefix_suffix(self):
        """Test suffixes used by flat front-end keys."""
        assert NetworkMode.MAINNET.prefix_suffix == ""
        assert NetworkMode.TESTNET.prefix_suffix == "Testnet"
        assert NetworkMode.STAGENET.prefix_suffix == "Stagenet"


class TestShippedCoins:
    """Properties every bundled coin must satisfy."""

    @pytest.mark.parametrize("coin", sorted(BUNDLED_COINS))
    @pytest.mark.parametrize("mode", list(NetworkMode))
    def test_exactly_one_network_flag(self, coin, mode):
        """Test exactly one of mainnet/testnet/stagenet resolves true."""
        config = load_bundled(coin, mode)

        flags = [config.is_mainnet, config.is_testnet, config.is_stagenet]
        assert flags.count(True) == 1
        assert config.network_mode is mode

    @pytest.mark.parametrize("coin", sorted(BUNDLED_COINS))
    def test_idle_warning_within_timeout(self, coin):
        """Test idle warning never exceeds idle timeout."""
        config = load_bundled(coin)
        assert config.idle_warning_seconds <= config.idle_timeout_seconds

    @pytest.mark.parametrize("coin", sorted(BUNDLED_COINS))
    def test_big_integers_match_literals(self, coin):
        """Test fee and dust parse to ints that format back to the same digits."""
        record = BUNDLED_COINS[coin]
        config = load_bundled(coin)

        assert str(config.fee_per_kb) == record["feePerKB"]
        assert str(config.dust_threshold) == record["dustThreshold"]
        assert isinstance(config.fee_per_kb, int)
        assert isinstance(config.dust_threshold, int)

    @pytest.mark.parametrize("coin", sorted(BUNDLED_COINS))
    @pytest.mark.parametrize("mode", list(NetworkMode))
    def test_prefixes_distinct_per_network(self, coin, mode):
        """Test address prefixes are pairwise distinct within a network."""
        config = load_bundled(coin, mode)
        prefixes = {
            config.address_prefix,
            config.integrated_address_prefix,
            config.sub_address_prefix,
        }
        assert len(prefixes) == 3

    def test_aeon_sample(self):
        """Test the AEON mainnet values."""
        config = load_bundled("aeon")

        assert config.symbol == "AEON"
        assert config.name == "Aeon"
        assert config.address_prefix == 178
        assert config.integrated_address_prefix == 0x2733
        assert config.sub_address_prefix == 0x06B8
        assert config.display_unit_places == 12
        assert config.default_mixin == 4

    def test_aeon_testnet_and_stagenet_prefixes(self):
        """Test network-specific prefixes are picked up."""
        testnet = load_bundled("aeon", NetworkMode.TESTNET)
        stagenet = load_bundled("aeon", "stagenet")

        assert testnet.address_prefix == 0x0426
        assert testnet.sub_address_prefix == 0x0AAC
        assert stagenet.address_prefix == 0x011A
        assert stagenet.integrated_address_prefix == 0x2C1B


class TestValidationRules:
    """Test load-time rejection of invalid records."""

    def test_both_network_flags_rejected(self, aeon_record):
        """Test a record with testnet and stagenet both true fails."""
        aeon_record["testnet"] = True
        aeon_record["stagenet"] = True

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    def test_idle_warning_above_timeout_rejected(self, aeon_record):
        """Test idle warning 40s with timeout 30s fails."""
        aeon_record["idleWarningDuration"] = 40
        aeon_record["idleTimeout"] = 30

        with pytest.raises(ConfigurationError, match="idle warning"):
            load_record(aeon_record)

    def test_idle_warning_equal_to_timeout_accepted(self, aeon_record):
        """Test the boundary case is legal."""
        aeon_record["idleWarningDuration"] = 30
        aeon_record["idleTimeout"] = 30

        assert load_record(aeon_record).idle_warning_seconds == 30

    @pytest.mark.parametrize("bad_fee", ["-5", "1.5", "abc", "", "007", "2e9", " 1 2 ", 2.5, None])
    def test_unparseable_fee_rejected(self, aeon_record, bad_fee):
        """Test fees that are not canonical non-negative decimal integers fail."""
        aeon_record["feePerKB"] = bad_fee

        with pytest.raises(ConfigurationError) as exc_info:
            load_record(aeon_record)

        assert any(e["field"] == "feePerKB" for e in exc_info.value.errors)

    @pytest.mark.parametrize("bad_dust", ["-1", "ten", True, -1])
    def test_unparseable_dust_rejected(self, aeon_record, bad_dust):
        """Test dust thresholds follow the same rules as fees."""
        aeon_record["dustThreshold"] = bad_dust

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    def test_fee_beyond_64_bits_kept_exactly(self, aeon_record):
        """Test fee values larger than uint64 survive without precision loss."""
        huge = "340282366920938463463374607431768211457"
        aeon_record["feePerKB"] = huge

        config = load_record(aeon_record)

        assert config.fee_per_kb == 2**128 + 1
        assert str(config.fee_per_kb) == huge

    @pytest.mark.parametrize("key", ["feePerKB", "dustThreshold"])
    def test_padded_big_integer_rejected(self, aeon_record, key):
        """Test big integer strings must be exactly their digits."""
        aeon_record[key] = " 2000000000 "

        with pytest.raises(ConfigurationError) as exc_info:
            load_record(aeon_record)

        assert any(e["field"] == key for e in exc_info.value.errors)

    def test_fee_accepts_plain_int(self, aeon_record):
        """Test an integer (not a float) is accepted as a fee."""
        aeon_record["feePerKB"] = 2000000000
        assert load_record(aeon_record).fee_per_kb == 2000000000

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("coinUnitPlaces", -1),
            ("defaultMixin", -1),
            ("txMinConfirms", 0),
            ("txCoinbaseMinConfirms", -60),
            ("idleTimeout", 0),
            ("idleWarningDuration", -5),
            ("maxBlockNumber", 0),
            ("avgBlockTime", -120),
            ("addressPrefix", -1),
        ],
    )
    def test_negative_numbers_rejected(self, aeon_record, key, value):
        """Test numeric bounds on every constrained field."""
        aeon_record[key] = value

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    def test_zero_mixin_and_places_accepted(self, aeon_record):
        """Test non-negative fields accept zero."""
        aeon_record["defaultMixin"] = 0
        aeon_record["coinUnitPlaces"] = 0

        config = load_record(aeon_record)

        assert config.default_mixin == 0
        assert config.atomic_units_per_coin == 1

    @pytest.mark.parametrize("ratio", [-0.1, 1.5, float("nan"), float("inf")])
    def test_charge_ratio_out_of_range_rejected(self, aeon_record, ratio):
        """Test charge ratio must lie in [0, 1]."""
        aeon_record["txChargeRatio"] = ratio

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    @pytest.mark.parametrize("ratio", [True, False])
    def test_boolean_charge_ratio_rejected(self, aeon_record, ratio):
        """Test booleans are not read as 1.0 or 0.0."""
        aeon_record["txChargeRatio"] = ratio

        with pytest.raises(ConfigurationError) as exc_info:
            load_record(aeon_record)

        assert any(e["field"] == "txChargeRatio" for e in exc_info.value.errors)

    @pytest.mark.parametrize(("ratio", "expected"), [(0, 0.0), (1, 1.0), (0.25, 0.25)])
    def test_numeric_charge_ratio_accepted(self, aeon_record, ratio, expected):
        """Test integer and float ratios within bounds load as floats."""
        aeon_record["txChargeRatio"] = ratio
        assert load_record(aeon_record).charge_ratio == expected

    @pytest.mark.parametrize("key", ["coinSymbol", "coinName", "coinUriPrefix", "openAliasPrefix"])
    def test_empty_identity_strings_rejected(self, aeon_record, key):
        """Test identity strings cannot be empty or blank."""
        aeon_record[key] = "   "

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    def test_prefix_collision_rejected(self, aeon_record):
        """Test colliding prefixes within one network fail."""
        aeon_record["subAddressPrefixTestnet"] = aeon_record["addressPrefixTestnet"]

        with pytest.raises(ConfigurationError, match="distinct"):
            load_record(aeon_record)

    def test_prefix_reuse_across_networks_accepted(self, aeon_record):
        """Test distinctness is only required within a network."""
        aeon_record["addressPrefixTestnet"] = aeon_record["subAddressPrefix"]
        assert load_record(aeon_record).address_prefix == 0xB2

    def test_boolean_prefix_rejected(self, aeon_record):
        """Test booleans are not silently read as integers."""
        aeon_record["addressPrefix"] = True

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    def test_missing_key_rejected(self, aeon_record):
        """Test a required key cannot be omitted."""
        del aeon_record["coinSymbol"]

        with pytest.raises(ConfigurationError) as exc_info:
            load_record(aeon_record)

        assert any(e["field"] == "coinSymbol" for e in exc_info.value.errors)

    def test_missing_network_prefixes_rejected(self, aeon_record):
        """Test every network needs a full prefix triplet."""
        del aeon_record["integratedAddressPrefixStagenet"]

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    def test_unknown_key_rejected(self, aeon_record):
        """Test typos are not silently ignored."""
        aeon_record["feePerKb"] = "1"

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    def test_non_boolean_network_flag_rejected(self, aeon_record):
        """Test legacy flags must be real booleans."""
        aeon_record["testnet"] = "yes"

        with pytest.raises(ConfigurationError):
            load_record(aeon_record)

    def test_low_coinbase_confirmations_warns(self, aeon_record, caplog):
        """Test coinbase maturity below standard confirmations is logged, not refused."""
        aeon_record["txCoinbaseMinConfirms"] = 5

        with caplog.at_level(logging.WARNING, logger="coinparams"):
            config = load_record(aeon_record)

        assert config.coinbase_min_confirmations == 5
        assert "coinbase confirmations" in caplog.text

    def test_low_coinbase_confirmations_warns_once(self, aeon_record, caplog):
        """Test one load logs the warning once, and network switches stay quiet."""
        aeon_record["txCoinbaseMinConfirms"] = 5

        with caplog.at_level(logging.WARNING, logger="coinparams"):
            table = CoinParameterTable.from_record(aeon_record)
            loaded = [r for r in caplog.records if "coinbase confirmations" in r.getMessage()]
            caplog.clear()
            table.with_network("testnet").with_network("stagenet")

        assert len(loaded) == 1
        assert "coinbase confirmations" not in caplog.text


class TestSchemaModels:
    """Test the pydantic models directly."""

    def test_definition_accepts_snake_case_and_nested_prefixes(self, aeon_record):
        """Test field names and nested prefix triplets are accepted."""
        definition = CoinDefinition.model_validate(
            {
                "symbol": "AEON",
                "name": "Aeon",
                "uri_prefix": "aeon:",
                "alias_prefix": "aeon",
                "display_unit_places": 12,
                "min_confirmations": 10,
                "coinbase_min_confirmations": 60,
                "fee_per_kb": "2000000000",
                "dust_threshold": "1000000000",
                "charge_ratio": 0.5,
                "default_mixin": 4,
                "idle_timeout_seconds": 30,
                "idle_warning_seconds": 20,
                "max_block_number": 500000000,
                "avg_block_time_seconds": 120,
                "mainnet_prefixes": {
                    "address_prefix": 0xB2,
                    "integrated_address_prefix": 0x2733,
                    "sub_address_prefix": 0x06B8,
                },
                "testnet_prefixes": {
                    "addressPrefix": 0x0426,
                    "integratedAddressPrefix": 0x2C27,
                    "subAddressPrefix": 0x0AAC,
                },
                "stagenet_prefixes": {
                    "address_prefix": 0x011A,
                    "integrated_address_prefix": 0x2C1B,
                    "sub_address_prefix": 0x0B20,
                },
            }
        )

        assert definition.prefixes_for(NetworkMode.TESTNET).address_prefix == 0x0426
        assert definition.model_dump() == CoinDefinition.model_validate(aeon_record).model_dump()

    def test_nested_and_flat_prefixes_conflict(self, aeon_record):
        """Test a network's prefixes cannot be given twice."""
        aeon_record["testnet_prefixes"] = {
            "address_prefix": 1,
            "integrated_address_prefix": 2,
            "sub_address_prefix": 3,
        }

        with pytest.raises(ValidationError):
            CoinDefinition.model_validate(aeon_record)

    def test_config_is_frozen(self):
        """Test the resolved configuration cannot be mutated."""
        config = load_bundled("aeon")

        with pytest.raises(ValidationError):
            config.symbol = "XMR"

    def test_definition_resolve_debug_override(self, aeon_record):
        """Test resolve() can force debug mode without touching the definition."""
        definition = CoinDefinition.model_validate(aeon_record)

        config = definition.resolve(NetworkMode.MAINNET, debug_mode=True)

        assert config.debug_mode is True
        assert definition.debug_mode is False

    def test_address_prefixes_distinct(self):
        """Test the triplet model refuses duplicates."""
        with pytest.raises(ValidationError, match="distinct"):
            AddressPrefixes(address_prefix=18, integrated_address_prefix=18, sub_address_prefix=42)

    def test_config_prefixes_property(self):
        """Test the active triplet is exposed as one object."""
        prefixes = load_bundled("monero", "stagenet").prefixes

        assert prefixes == AddressPrefixes(
            address_prefix=24, integrated_address_prefix=25, sub_address_prefix=36
        )


class TestParseBigUint:
    """Test the big integer parser on its own."""

    def test_round_trip(self):
        """Test canonical decimal strings survive parse-then-format."""
        for literal in ["0", "1", "2000000000", "18446744073709551616", "9" * 60]:
            assert str(parse_big_uint(literal)) == literal

    @pytest.mark.parametrize("padded", [" 42", "42\n", " 2000000000 ", "\t0"])
    def test_rejects_surrounding_whitespace(self, padded):
        """Test only strings that print back unchanged are accepted."""
        with pytest.raises(ValueError):
            parse_big_uint(padded)

    @pytest.mark.parametrize("value", ["+1", "01", "1_000", "0x10", "", -3, 1.0, False, [1]])
    def test_rejects(self, value):
        """Test anything but canonical digits or a non-negative int is refused."""
        with pytest.raises(ValueError):
            parse_big_uint(value)
