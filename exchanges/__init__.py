"""
Exchange Connectors Package

This package contains individual exchange connector modules.
Each exchange has its own subfolder with:
- __init__.py: Main exchange class implementing ExchangeInterface
- api_client.py: Raw REST API client (transport, signing)
- utils.py: Envelope parsing and currency/pair tables

The modular design allows adding new exchanges without modifying existing code.
"""
