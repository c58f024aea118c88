"""
Bitstamp Wire Helpers

Lookup tables and envelope handling shared by the Bitstamp raw client and
the BitstampExchange connector:

- parse_result: unwrap Bitstamp's reply, raising ExchangeApiError on an
  error envelope
- get_currency_enum / get_currency_string: Bitstamp currency codes
- get_pair_string / get_pair_enum: Bitstamp market names ("btcusd")
"""

from typing import Any, Dict, Optional

from core.errors import ExchangeApiError, InvalidFieldFormat
from core.schemas import Currency, Pair


EXCHANGE_NAME = "bitstamp"

BALANCE_SUFFIX = "_balance"


_PAIR_STRINGS: Dict[Pair, str] = {
    Pair.BTC_USD: "btcusd",
    Pair.BTC_EUR: "btceur",
    Pair.EUR_USD: "eurusd",
    Pair.XRP_USD: "xrpusd",
    Pair.XRP_EUR: "xrpeur",
    Pair.XRP_BTC: "xrpbtc",
    Pair.LTC_USD: "ltcusd",
    Pair.LTC_EUR: "ltceur",
    Pair.LTC_BTC: "ltcbtc",
    Pair.ETH_USD: "ethusd",
    Pair.ETH_EUR: "etheur",
    Pair.ETH_BTC: "ethbtc",
}

_PAIR_ENUMS: Dict[str, Pair] = {name: pair for pair, name in _PAIR_STRINGS.items()}

_CURRENCY_STRINGS: Dict[Currency, str] = {
    Currency.BTC: "btc",
    Currency.EUR: "eur",
    Currency.USD: "usd",
    Currency.XRP: "xrp",
    Currency.LTC: "ltc",
    Currency.ETH: "eth",
}

_CURRENCY_ENUMS: Dict[str, Currency] = {name: cur for cur, name in _CURRENCY_STRINGS.items()}


# ============================================
# Envelope
# ============================================

def parse_result(raw: Any) -> Dict[str, Any]:
    """
    Unwrap a decoded Bitstamp reply.

    Bitstamp reports failures inside an ordinary JSON object, in one of two
    shapes:
        {"error": "Invalid nonce"}
        {"status": "error", "reason": {"__all__": ["..."]}, "code": "API0005"}

    Args:
        raw: Decoded JSON reply

    Returns:
        dict: The reply itself when it is a success payload

    Raises:
        ExchangeApiError: If the reply is an error envelope
        InvalidFieldFormat: If the reply is not a JSON object
    """
    if not isinstance(raw, dict):
        raise InvalidFieldFormat(raw)

    if "error" in raw:
        raise ExchangeApiError(EXCHANGE_NAME, raw["error"], raw.get("code"))

    if raw.get("status") == "error":
        raise ExchangeApiError(EXCHANGE_NAME, raw.get("reason", "Unknown error"), raw.get("code"))

    return raw


# ============================================
# Currencies
# ============================================

def get_currency_enum(code: str) -> Optional[Currency]:
    """
    Map a Bitstamp currency code to Currency.

    Accepts either a bare code ("usd") or a balance key ("usd_balance").
    Unknown codes are not an error: None is returned and the caller decides
    what to do with them.

    Example:
        >>> get_currency_enum("usd_balance")
        <Currency.USD: 'USD'>
        >>> get_currency_enum("xyz_balance") is None
        True
    """
    if not isinstance(code, str):
        return None

    code = code.lower()
    if code.endswith(BALANCE_SUFFIX):
        code = code[:-len(BALANCE_SUFFIX)]

    return _CURRENCY_ENUMS.get(code)


def get_currency_string(currency: Currency) -> Optional[str]:
    return _CURRENCY_STRINGS.get(currency)


def is_balance_key(key: str) -> bool:
    """True for "<code>_balance" keys; "<code>_available", fees etc. are not balances."""
    return key.lower().endswith(BALANCE_SUFFIX)


# ============================================
# Pairs
# ============================================

def get_pair_string(pair: Pair) -> Optional[str]:
    """Bitstamp market name for a pair, or None if Bitstamp doesn't list it."""
    return _PAIR_STRINGS.get(pair)


def get_pair_enum(name: str) -> Optional[Pair]:
    return _PAIR_ENUMS.get(name.lower())


def supported_pairs():
    """All pairs tradable on Bitstamp."""
    return list(_PAIR_STRINGS)
