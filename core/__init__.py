"""
Core Package

Contains the exchange-agnostic core logic including:
- ExchangeInterface: Abstract base class defining the uniform trading contract
- Schemas: Enums and Pydantic models for normalized data (Ticker, Orderbook, ...)
- Errors: Exception hierarchy shared by all exchange connectors

This layer ensures all exchanges follow the same interface, making the system modular and scalable.
"""
