"""
Normalized Trading Schemas

This module defines the enums and Pydantic models that every exchange
connector returns. Whatever shape an exchange uses on the wire, connector
output is committed to these types before trading logic sees it.

Models:
    - Ticker: Last trade, best ask/bid and volume for a pair
    - Orderbook: Ask and bid levels, in the order the exchange sent them
    - OrderInfo: Identifiers of a freshly placed order
    - Balances: Currency -> amount mapping (plain dict alias)

Enums:
    - Currency: Supported currencies
    - Pair: Tradable currency pairs
    - OrderType: Limit/market, buy/sell

All timestamps are integer milliseconds since the Unix epoch, generated
locally when the reply was parsed.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


Price = float
Volume = float


# ============================================
# Enumerations
# ============================================

class Currency(str, Enum):
    """Supported currencies."""

    BTC = "BTC"
    EUR = "EUR"
    USD = "USD"
    XRP = "XRP"
    LTC = "LTC"
    ETH = "ETH"


class Pair(str, Enum):
    """
    Tradable currency pairs, named BASE_QUOTE.

    Not every pair is listed on every exchange; connectors report the pairs
    they cannot trade with PairUnsupported.
    """

    BTC_USD = "BTC_USD"
    BTC_EUR = "BTC_EUR"
    EUR_USD = "EUR_USD"
    XRP_USD = "XRP_USD"
    XRP_EUR = "XRP_EUR"
    XRP_BTC = "XRP_BTC"
    LTC_USD = "LTC_USD"
    LTC_EUR = "LTC_EUR"
    LTC_BTC = "LTC_BTC"
    ETH_USD = "ETH_USD"
    ETH_EUR = "ETH_EUR"
    ETH_BTC = "ETH_BTC"
    ETH_XRP = "ETH_XRP"
    LTC_XRP = "LTC_XRP"
    LTC_ETH = "LTC_ETH"

    @property
    def base(self) -> Currency:
        return Currency(self.value.split("_")[0])

    @property
    def quote(self) -> Currency:
        return Currency(self.value.split("_")[1])


class OrderType(str, Enum):
    """Order kinds of the uniform trading contract."""

    BUY_LIMIT = "BuyLimit"
    BUY_MARKET = "BuyMarket"
    SELL_LIMIT = "SellLimit"
    SELL_MARKET = "SellMarket"

    @property
    def is_limit(self) -> bool:
        """Limit orders require a price."""
        return self in (OrderType.BUY_LIMIT, OrderType.SELL_LIMIT)

    @property
    def is_buy(self) -> bool:
        return self in (OrderType.BUY_LIMIT, OrderType.BUY_MARKET)


# ============================================
# Market Data Models
# ============================================

class Ticker(BaseModel):
    """
    Ticker Snapshot

    Attributes:
        timestamp: Local receipt time in milliseconds since epoch
        pair: Market the ticker belongs to
        last_trade_price: Price of the last executed trade
        lowest_ask: Best (lowest) ask price
        highest_bid: Best (highest) bid price
        volume: Traded volume, if the exchange reports one

    Example:
        >>> Ticker(
        ...     timestamp=1704110400000,
        ...     pair=Pair.BTC_USD,
        ...     last_trade_price=42000.0,
        ...     lowest_ask=42001.0,
        ...     highest_bid=41999.5,
        ...     volume=1234.5
        ... )
    """

    timestamp: int = Field(..., description="Local receipt time (ms since epoch)")
    pair: Pair
    last_trade_price: Price
    lowest_ask: Price
    highest_bid: Price
    volume: Optional[Volume] = None

    model_config = ConfigDict(frozen=True)


class Orderbook(BaseModel):
    """
    Order Book Snapshot

    ``asks`` and ``bids`` are lists of (price, volume) tuples kept in exactly
    the order the exchange sent them. No sorting or deduplication is done.
    """

    timestamp: int = Field(..., description="Local receipt time (ms since epoch)")
    pair: Pair
    asks: List[Tuple[Price, Volume]] = Field(default_factory=list)
    bids: List[Tuple[Price, Volume]] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class OrderInfo(BaseModel):
    """
    Placed Order Receipt

    ``identifier`` is a list because some exchanges split one logical order
    into several raw orders. Bitstamp always returns a single id.
    """

    timestamp: int = Field(..., description="Local receipt time (ms since epoch)")
    identifier: List[str]

    model_config = ConfigDict(frozen=True)


Balances = Dict[Currency, float]
