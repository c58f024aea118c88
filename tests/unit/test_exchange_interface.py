"""
Unit Tests for Exchange Interface

These tests verify that:
- ExchangeInterface is properly defined as an abstract class
- Dummy implementations can inherit and implement the interface
- Exchange capabilities are properly declared
- Lifecycle methods work as expected

Run with:
    pytest tests/unit/test_exchange_interface.py -v
"""

from typing import Optional

import pytest

from core.exchange_interface import ExchangeInterface
from core.schemas import Balances, Currency, OrderInfo, Orderbook, OrderType, Pair, Ticker
from exchanges.bitstamp import BitstampExchange


# ============================================
# Dummy Exchange for Testing
# ============================================

class DummyExchange(ExchangeInterface):
    """
    Minimal implementation of ExchangeInterface for testing purposes.
    """

    name = "dummy"
    capabilities = {
        "ticker": True,
        "orderbook": True,
        "add_order": False,  # Intentionally not supported
        "balances": True
    }

    def __init__(self):
        self.events = []

    def ticker(self, pair: Pair) -> Ticker:
        return Ticker(timestamp=1, pair=pair, last_trade_price=1.0, lowest_ask=1.0, highest_bid=1.0)

    def orderbook(self, pair: Pair) -> Orderbook:
        return Orderbook(timestamp=1, pair=pair)

    def add_order(self, order_type: OrderType, pair: Pair, quantity: float, price: Optional[float] = None) -> OrderInfo:
        raise NotImplementedError("Dummy exchange doesn't place orders")

    def balances(self) -> Balances:
        return {Currency.USD: 0.0}

    def initialize(self) -> None:
        self.events.append("initialize")

    def shutdown(self) -> None:
        self.events.append("shutdown")


# ============================================
# Tests for ExchangeInterface
# ============================================

class TestExchangeInterface:
    """Test the ExchangeInterface abstract class"""

    def test_cannot_instantiate_abstract_interface(self):
        """Verify that ExchangeInterface cannot be instantiated directly"""
        with pytest.raises(TypeError):
            ExchangeInterface()

    def test_partial_implementation_cannot_be_instantiated(self):
        class TickerOnly(ExchangeInterface):
            name = "partial"

            def ticker(self, pair):
                ...

        with pytest.raises(TypeError):
            TickerOnly()

    def test_supports_method_returns_correct_values(self):
        exchange = DummyExchange()

        assert exchange.supports("ticker") is True
        assert exchange.supports("add_order") is False
        assert exchange.supports("websocket") is False

    def test_context_manager_runs_lifecycle(self):
        with DummyExchange() as exchange:
            assert exchange.events == ["initialize"]

        assert exchange.events == ["initialize", "shutdown"]

    def test_default_health_check(self):
        assert DummyExchange().health_check() is True

    def test_repr(self):
        assert repr(DummyExchange()) == "<DummyExchange(name='dummy')>"

    def test_ticker_volume_is_optional(self):
        assert DummyExchange().ticker(Pair.BTC_USD).volume is None


class TestBitstampConformance:
    """Verify the Bitstamp connector satisfies the contract"""

    def test_is_exchange_interface(self):
        assert issubclass(BitstampExchange, ExchangeInterface)
        assert BitstampExchange.name == "bitstamp"

    def test_declares_all_capabilities(self):
        for feature in ("ticker", "orderbook", "add_order", "balances"):
            assert BitstampExchange.capabilities[feature] is True


class TestSchemaEnums:
    """Tests for Pair and OrderType helpers"""

    def test_pair_base_and_quote(self):
        assert Pair.ETH_BTC.base == Currency.ETH
        assert Pair.ETH_BTC.quote == Currency.BTC

    def test_order_type_flags(self):
        assert OrderType.BUY_LIMIT.is_limit and OrderType.BUY_LIMIT.is_buy
        assert OrderType.SELL_LIMIT.is_limit and not OrderType.SELL_LIMIT.is_buy
        assert not OrderType.BUY_MARKET.is_limit
        assert not OrderType.SELL_MARKET.is_limit
