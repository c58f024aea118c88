"""
Bitstamp Exchange Connector

This module implements the ExchangeInterface for Bitstamp.

Bitstamp encodes every price, volume and balance as a JSON string and
reports errors inside ordinary-looking JSON objects. This connector is where
those replies are validated and committed to core.schemas types; a reply
that fails validation anywhere fails the whole call.

API Documentation:
    https://www.bitstamp.net/api/

Endpoints Used:
    Public (GET):
        - /ticker/{pair}/      - ticker
        - /order_book/{pair}/  - order book
    Private (signed POST):
        - /buy/{pair}/, /sell/{pair}/                - limit orders
        - /buy/market/{pair}/, /sell/market/{pair}/  - market orders
        - /balance/                                  - balances

Structure:
    exchanges/bitstamp/
    ├── __init__.py          # This file (BitstampExchange class)
    ├── api_client.py        # Raw REST client (httpx, signing, nonce)
    └── utils.py             # Envelope parsing, currency and pair tables
"""

from typing import Optional

from core.config import settings
from core.errors import MissingPrice, PairUnsupported, UnsupportedCurrency
from core.exchange_interface import ExchangeInterface
from core.logging import get_logger
from core.schemas import Balances, OrderInfo, Orderbook, OrderType, Pair, Price, Ticker, Volume
from core.utils.fields import extract_array, extract_float, extract_str, parse_float, parse_price_volume
from core.utils.time import current_utc_timestamp
from .api_client import BitstampAPIClient
from .utils import EXCHANGE_NAME, get_currency_enum, get_pair_string, is_balance_key, parse_result


class BitstampExchange(ExchangeInterface):
    """
    Bitstamp Exchange Connector

    Attributes:
        name: Exchange identifier ("bitstamp")
        capabilities: Dictionary of supported features
        client: Raw Bitstamp client the calls are dispatched to
        strict_currencies: Raise UnsupportedCurrency instead of dropping
            unknown currencies from balances

    Example:
        >>> with BitstampExchange() as exchange:
        ...     book = exchange.orderbook(Pair.BTC_USD)
        ...     best_ask = book.asks[0]
        ...     info = exchange.add_order(OrderType.BUY_LIMIT, Pair.BTC_USD, 0.01, 41000.0)

    Notes:
        - Timestamps are generated locally once a reply has been parsed
        - Order book levels are kept in the order Bitstamp sent them
        - Errors are never recovered locally; see core.errors
    """

    name = EXCHANGE_NAME

    capabilities = {
        "ticker": True,
        "orderbook": True,
        "add_order": True,
        "balances": True
    }

    def __init__(
        self,
        client: Optional[BitstampAPIClient] = None,
        strict_currencies: Optional[bool] = None
    ):
        """
        Initialize the Bitstamp exchange connector.

        Args:
            client: Raw client to use (a BitstampAPIClient built from settings
                if omitted)
            strict_currencies: Overrides settings.strict_currencies
        """
        self.client = client if client is not None else BitstampAPIClient()
        self.strict_currencies = (
            settings.strict_currencies if strict_currencies is None else strict_currencies
        )
        self.logger = get_logger(__name__)

    # ============================================
    # Lifecycle
    # ============================================

    def initialize(self) -> None:
        self.client.open()
        self.logger.info("✓ Bitstamp exchange connector initialized")

    def shutdown(self) -> None:
        self.client.close()
        self.logger.info("✓ Bitstamp exchange connector shut down")

    def health_check(self) -> bool:
        """
        Check if Bitstamp API is accessible.

        Notes:
            - Fetches the BTC/USD ticker, the cheapest public call
        """
        try:
            self.ticker(Pair.BTC_USD)
            return True
        except Exception as e:
            self.logger.error(f"Bitstamp health check failed: {e}")
            return False

    # ============================================
    # Market Data
    # ============================================

    def ticker(self, pair: Pair) -> Ticker:
        result = parse_result(self.client.return_ticker(pair))

        price = extract_float(result, "last")
        ask = extract_float(result, "ask")
        bid = extract_float(result, "bid")
        vol = extract_float(result, "volume")

        return Ticker(
            timestamp=current_utc_timestamp(milliseconds=True),
            pair=pair,
            last_trade_price=price,
            lowest_ask=ask,
            highest_bid=bid,
            volume=vol
        )

    def orderbook(self, pair: Pair) -> Orderbook:
        """
        Fetch the order book for a pair.

        Each level must be ["price", "volume"]; one malformed level fails the
        whole call.
        """
        result = parse_result(self.client.return_order_book(pair))

        ask_offers = [parse_price_volume(ask, "asks") for ask in extract_array(result, "asks")]
        bid_offers = [parse_price_volume(bid, "bids") for bid in extract_array(result, "bids")]

        return Orderbook(
            timestamp=current_utc_timestamp(milliseconds=True),
            pair=pair,
            asks=ask_offers,
            bids=bid_offers
        )

    # ============================================
    # Trading
    # ============================================

    def add_order(
        self,
        order_type: OrderType,
        pair: Pair,
        quantity: Volume,
        price: Optional[Price] = None
    ) -> OrderInfo:
        """
        Place an order on Bitstamp.

        Preconditions are checked before anything is sent: the pair must be
        listed on Bitstamp and limit orders must carry a price. The optional
        limit_price/daily_order parameters of Bitstamp limit orders are not
        part of the uniform contract and are left unset.

        Raises:
            PairUnsupported: Pair not listed on Bitstamp
            MissingPrice: Limit order without price
            MissingField: Reply without "id"
        """
        if get_pair_string(pair) is None:
            raise PairUnsupported(pair, EXCHANGE_NAME)

        if order_type.is_limit and price is None:
            raise MissingPrice(order_type)

        if order_type == OrderType.BUY_LIMIT:
            raw = self.client.buy_limit(pair, quantity, price, None, None)
        elif order_type == OrderType.SELL_LIMIT:
            raw = self.client.sell_limit(pair, quantity, price, None, None)
        elif order_type == OrderType.BUY_MARKET:
            raw = self.client.buy_market(pair, quantity)
        elif order_type == OrderType.SELL_MARKET:
            raw = self.client.sell_market(pair, quantity)
        else:
            raise ValueError(f"Unknown order type: {order_type}")

        order_id = extract_str(parse_result(raw), "id")

        self.logger.info(f"Placed {order_type.value} {pair.value} qty={quantity} price={price} -> id={order_id}")

        return OrderInfo(
            timestamp=current_utc_timestamp(milliseconds=True),
            identifier=[order_id]
        )

    def balances(self) -> Balances:
        """
        Return the balance of every recognized currency.

        Only "<code>_balance" keys are balances; "<code>_available",
        "<code>_reserved" and fee entries are skipped. A balance for a
        currency we don't know is dropped with a warning, or raises
        UnsupportedCurrency in strict mode. A recognized currency with a
        malformed amount always fails the call.
        """
        result = parse_result(self.client.return_balances())

        balances: Balances = {}

        for key, val in result.items():
            if not is_balance_key(key):
                continue

            currency = get_currency_enum(key)
            if currency is None:
                if self.strict_currencies:
                    raise UnsupportedCurrency(key, EXCHANGE_NAME)
                self.logger.warning(f"Dropping balance for unrecognized currency '{key}': {val!r}")
                continue

            balances[currency] = parse_float(val, key)

        return balances


__all__ = ["BitstampExchange", "BitstampAPIClient"]
