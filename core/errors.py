"""
Exchange Error Taxonomy

All failures surfaced by exchange connectors derive from ExchangeError, so
trading logic can catch one base class and still inspect exactly which
field or precondition failed.

Hierarchy:
    ExchangeError
    ├── InvalidFieldFormat   - field present but not shaped/parseable as expected
    ├── MissingField         - expected field absent from the payload
    ├── MissingPrice         - limit order requested without a price
    ├── PairUnsupported      - pair has no market on this exchange
    ├── UnsupportedCurrency  - unknown currency in strict balance mode
    ├── MissingCredentials   - signed call attempted without API keys
    ├── ExchangeApiError     - exchange answered with an error envelope
    └── ExchangeRequestError - HTTP/transport failure

Lower-level causes (e.g. a ValueError from float conversion) are attached
with ``raise ... from`` and are available as ``__cause__``.
"""

from typing import Any, Optional


class ExchangeError(Exception):
    """Base class for every error raised by an exchange connector."""


class InvalidFieldFormat(ExchangeError):
    """
    A field exists but does not have the expected shape.

    Attributes:
        raw_value: The offending raw JSON value (None when the field was absent)
        field_name: Logical field name, if known
    """

    def __init__(self, raw_value: Any, field_name: Optional[str] = None):
        self.raw_value = raw_value
        self.field_name = field_name
        if field_name:
            message = f"Invalid format for field '{field_name}': {raw_value!r}"
        else:
            message = f"Invalid field format: {raw_value!r}"
        super().__init__(message)


class MissingField(ExchangeError):
    """An expected field is entirely absent from the payload."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Missing field: '{field_name}'")


class MissingPrice(ExchangeError):
    """A limit order was requested without a price."""

    def __init__(self, order_type: Any = None):
        self.order_type = order_type
        suffix = f" for {order_type}" if order_type is not None else ""
        super().__init__(f"A price is required{suffix}")


class PairUnsupported(ExchangeError):
    def __init__(self, pair: Any, exchange: str = ""):
        self.pair = pair
        self.exchange = exchange
        where = f" on {exchange}" if exchange else ""
        super().__init__(f"Pair {pair} is not supported{where}")


class UnsupportedCurrency(ExchangeError):
    def __init__(self, code: str, exchange: str = ""):
        self.code = code
        self.exchange = exchange
        where = f" from {exchange}" if exchange else ""
        super().__init__(f"Unrecognized currency '{code}'{where}")


class MissingCredentials(ExchangeError):
    def __init__(self, exchange: str):
        self.exchange = exchange
        super().__init__(f"{exchange}: API key, secret and customer id are required for private calls")


class ExchangeApiError(ExchangeError):
    """
    The exchange answered with an error envelope.

    Attributes:
        exchange: Exchange identifier
        reason: Error reason as sent by the exchange (string or structured value)
        code: Exchange error code, if any
    """

    def __init__(self, exchange: str, reason: Any, code: Optional[str] = None):
        self.exchange = exchange
        self.reason = reason
        self.code = code
        code_str = f" [{code}]" if code else ""
        super().__init__(f"{exchange} API error{code_str}: {reason}")


class ExchangeRequestError(ExchangeError):
    """HTTP or transport level failure while talking to the exchange."""

    def __init__(self, exchange: str, message: str, status: Optional[int] = None):
        self.exchange = exchange
        self.status = status
        status_str = f" (HTTP {status})" if status is not None else ""
        super().__init__(f"{exchange} request failed{status_str}: {message}")
