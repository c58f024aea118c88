"""
Test Suite

Contains unit tests for the core package and exchange connectors.

Structure:
- tests/unit/: Tests for individual components (field extraction, envelopes, connectors)

Uses pytest. No test touches the network: the raw client is replaced with
mocks, and HTTP is served by httpx.MockTransport.
"""
