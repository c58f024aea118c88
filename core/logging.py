"""
Unified Logging Configuration

This module sets up a centralized logging system for the whole package.
All modules should import and use the logger from this module instead of
using print() statements.

Usage:
    from core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Placed order")

Log Levels (from most to least verbose):
    DEBUG    - Raw request/response details
    INFO     - Orders placed, sessions opened/closed
    WARNING  - Data dropped during normalization (e.g. unknown currencies)
    ERROR    - Failed requests

Configuration:
    Log level is controlled by the LOG_LEVEL setting in .env file.
"""

import logging
import sys
from typing import Optional


ROOT_LOGGER_NAME = "exchange_adapters"


def setup_logging(
    log_level: str = "INFO",
    log_format: Optional[str] = None,
    include_timestamp: bool = True,
    include_module: bool = True
) -> logging.Logger:
    """
    Configure and return the package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string (uses default if None)
        include_timestamp: Include timestamp in log messages
        include_module: Include logger name in log messages

    Returns:
        logging.Logger: Configured logger instance

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Adapter ready")
        2024-01-01 12:00:00 [INFO] exchange_adapters: Adapter ready
    """
    if log_format is None:
        format_parts = []

        if include_timestamp:
            format_parts.append("%(asctime)s")

        format_parts.append("[%(levelname)s]")

        if include_module:
            format_parts.append("%(name)s:")

        format_parts.append("%(message)s")

        log_format = " ".join(format_parts)

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Only the package logger is configured, never the root logger
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    return logger


# ============================================
# Initialize Logger with Settings
# ============================================

try:
    from core.config import settings
    log_level = settings.log_level if hasattr(settings, 'log_level') else "INFO"
except ImportError:
    # Settings not available yet (during initial import)
    log_level = "INFO"

logger = setup_logging(log_level=log_level)


# ============================================
# Convenience Functions
# ============================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Example:
        # In exchanges/bitstamp/api_client.py:
        logger = get_logger(__name__)
        # -> "exchange_adapters.exchanges.bitstamp.api_client"
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_level(level: str) -> None:
    """Change the log level at runtime."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# ============================================
# Log Helper Functions
# ============================================

def log_api_request(exchange: str, endpoint: str, params: dict = None) -> None:
    """
    Log an API request with consistent formatting.

    Signed parameters (key, signature, nonce) must be stripped by the caller.

    Example:
        >>> log_api_request("bitstamp", "/ticker/btcusd/")
        [DEBUG] API Request: bitstamp /ticker/btcusd/
    """
    if params:
        logger.debug(f"API Request: {exchange} {endpoint} | Params: {params}")
    else:
        logger.debug(f"API Request: {exchange} {endpoint}")


def log_api_response(exchange: str, endpoint: str, status: int, response_time: float = None) -> None:
    """
    Log an API response with status and timing information.

    Example:
        >>> log_api_response("bitstamp", "/balance/", 200, 0.342)
        [DEBUG] API Response: bitstamp /balance/ | Status: 200 | Time: 0.342s
    """
    time_str = f" | Time: {response_time:.3f}s" if response_time else ""
    logger.debug(f"API Response: {exchange} {endpoint} | Status: {status}{time_str}")


logger.debug("Logging system initialized")
