"""
Unit Tests for Bitstamp Wire Helpers

These tests verify that:
- Error envelopes are surfaced as ExchangeApiError, not as field errors
- Currency codes and balance keys map to Currency, unknown codes to None
- Pair tables round-trip and report unlisted pairs as None

Run with:
    pytest tests/unit/test_bitstamp_utils.py -v
"""

import pytest

from core.errors import ExchangeApiError, InvalidFieldFormat
from core.schemas import Currency, Pair
from exchanges.bitstamp.utils import (
    get_currency_enum,
    get_currency_string,
    get_pair_enum,
    get_pair_string,
    is_balance_key,
    parse_result,
    supported_pairs,
)


class TestParseResult:
    """Tests for parse_result"""

    def test_returns_success_payload_unchanged(self):
        payload = {"asks": [], "bids": []}
        assert parse_result(payload) is payload

    def test_error_key_envelope(self):
        with pytest.raises(ExchangeApiError) as exc_info:
            parse_result({"error": "Invalid nonce"})

        assert exc_info.value.exchange == "bitstamp"
        assert exc_info.value.reason == "Invalid nonce"

    def test_status_error_envelope(self):
        """Verify structured reasons and codes are preserved"""
        raw = {"status": "error", "reason": {"__all__": ["Minimum order size is 10.0 USD."]}, "code": "API0011"}

        with pytest.raises(ExchangeApiError) as exc_info:
            parse_result(raw)

        assert exc_info.value.code == "API0011"
        assert exc_info.value.reason == {"__all__": ["Minimum order size is 10.0 USD."]}

    @pytest.mark.parametrize("raw", [[], "ok", None, 42])
    def test_non_object_reply(self, raw):
        with pytest.raises(InvalidFieldFormat):
            parse_result(raw)


class TestCurrencyMapping:
    """Tests for get_currency_enum / get_currency_string"""

    @pytest.mark.parametrize("code, expected", [
        ("usd_balance", Currency.USD),
        ("btc_balance", Currency.BTC),
        ("eth", Currency.ETH),
        ("XRP", Currency.XRP),
        ("EUR_BALANCE", Currency.EUR),
    ])
    def test_known_codes(self, code, expected):
        assert get_currency_enum(code) == expected

    @pytest.mark.parametrize("code", ["xyz_balance", "usd_available", "fee", "", None])
    def test_unknown_codes_return_none(self, code):
        assert get_currency_enum(code) is None

    def test_every_currency_round_trips(self):
        for currency in Currency:
            assert get_currency_enum(get_currency_string(currency)) == currency

    def test_is_balance_key(self):
        assert is_balance_key("usd_balance")
        assert not is_balance_key("usd_available")
        assert not is_balance_key("fee")


class TestPairMapping:
    """Tests for get_pair_string / get_pair_enum"""

    def test_pair_string(self):
        assert get_pair_string(Pair.BTC_USD) == "btcusd"
        assert get_pair_string(Pair.ETH_BTC) == "ethbtc"

    def test_unlisted_pair(self):
        assert get_pair_string(Pair.LTC_XRP) is None

    def test_pair_enum(self):
        assert get_pair_enum("xrpeur") == Pair.XRP_EUR
        assert get_pair_enum("BTCUSD") == Pair.BTC_USD
        assert get_pair_enum("dogeusd") is None

    def test_supported_pairs_have_names(self):
        pairs = supported_pairs()
        assert Pair.BTC_USD in pairs
        assert Pair.ETH_XRP not in pairs
        assert all(get_pair_enum(get_pair_string(p)) == p for p in pairs)
