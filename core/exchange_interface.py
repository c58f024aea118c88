"""
Exchange Interface — Abstract Contract for All Exchanges

This module defines the abstract base class that every exchange connector
implements. Trading logic only ever talks to ExchangeInterface; each
connector owns its own field-name mapping and raw-call dispatch, and shares
nothing with other connectors except the schemas in core.schemas and the
error taxonomy in core.errors.

Example:
    class BitstampExchange(ExchangeInterface):
        name = "bitstamp"

        def ticker(self, pair):
            # Bitstamp-specific implementation
            ...

    exchange = BitstampExchange()
    ticker = exchange.ticker(Pair.BTC_USD)

Concurrency:
    Connectors are synchronous and hold a single authenticated session.
    Private calls carry a strictly increasing nonce, so one connector
    instance must not be used from several threads without external
    serialization.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from core.schemas import Balances, OrderInfo, Orderbook, OrderType, Pair, Price, Ticker, Volume


class ExchangeInterface(ABC):
    """
    Abstract Base Class for Exchange Connectors

    Class Attributes:
        name: Unique identifier for the exchange (lowercase, e.g., "bitstamp")
        capabilities: Dictionary indicating which features this exchange supports

    Abstract Methods (MUST be implemented by all exchanges):
        - ticker: Latest ticker for a pair
        - orderbook: Order book snapshot for a pair
        - add_order: Place an order
        - balances: Account balances per currency

    Optional Methods (can be overridden):
        - initialize: Open the underlying session
        - shutdown: Close the underlying session
        - health_check: Verify the exchange API is accessible

    Errors:
        Every method raises a core.errors.ExchangeError subclass on failure.
        No method ever returns partially populated data.
    """

    name: str
    """Unique exchange identifier (lowercase). Example: "bitstamp" """

    capabilities: Dict[str, bool] = {
        "ticker": False,
        "orderbook": False,
        "add_order": False,
        "balances": False
    }
    """Dictionary indicating which features this exchange supports"""

    # ============================================
    # Market Data
    # ============================================

    @abstractmethod
    def ticker(self, pair: Pair) -> Ticker:
        """
        Fetch the latest ticker for a pair.

        Args:
            pair: Market to query

        Returns:
            Ticker: Normalized ticker; timestamp is the local receipt time

        Raises:
            InvalidFieldFormat: If a numeric field is missing or malformed
            ExchangeApiError: If the exchange replied with an error
            ExchangeRequestError: For network or HTTP failures
        """
        ...

    @abstractmethod
    def orderbook(self, pair: Pair) -> Orderbook:
        """
        Fetch an order book snapshot for a pair.

        Returns:
            Orderbook: Asks and bids in exchange order

        Raises:
            InvalidFieldFormat: If any level is malformed (no partial book
                is ever returned)
        """
        ...

    # ============================================
    # Trading
    # ============================================

    @abstractmethod
    def add_order(
        self,
        order_type: OrderType,
        pair: Pair,
        quantity: Volume,
        price: Optional[Price] = None
    ) -> OrderInfo:
        """
        Place an order.

        Args:
            order_type: Limit or market, buy or sell
            pair: Market to trade
            quantity: Amount of base currency
            price: Limit price; required for limit orders, ignored for market orders

        Returns:
            OrderInfo: Exchange order identifier(s)

        Raises:
            MissingPrice: Limit order without price (raised before any network call)
            PairUnsupported: Pair not tradable on this exchange
            MissingField: Reply carries no order id
        """
        ...

    @abstractmethod
    def balances(self) -> Balances:
        """
        Return the account balance for each recognized currency.

        Raises:
            InvalidFieldFormat: If a recognized currency has a malformed amount
        """
        ...

    # ============================================
    # Optional Lifecycle Methods
    # ============================================

    def initialize(self) -> None:
        """Open connections. Default implementation does nothing."""
        pass

    def shutdown(self) -> None:
        """Release connections. Default implementation does nothing."""
        pass

    def health_check(self) -> bool:
        """
        Check if the exchange API is accessible.

        Returns:
            bool: True if exchange is accessible, False otherwise

        Notes:
            Don't raise exceptions; return False on errors
        """
        return True

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    # ============================================
    # Helper Methods
    # ============================================

    def supports(self, feature: str) -> bool:
        """
        Check if this exchange supports a specific feature.

        Example:
            >>> if exchange.supports("add_order"):
            ...     exchange.add_order(OrderType.BUY_MARKET, Pair.BTC_USD, 0.01)
        """
        return self.capabilities.get(feature, False)

    def __repr__(self) -> str:
        """String representation of the exchange."""
        return f"<{self.__class__.__name__}(name='{self.name}')>"
