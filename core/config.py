"""
Configuration Management Module

This module handles loading, validating, and providing access to application configuration
from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads configuration from .env file
- Provides type-safe access to configuration values
- Handles optional settings with sensible defaults

Usage:
    from core.config import settings

    print(settings.bitstamp_base_url)
    print(settings.has_bitstamp_credentials)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """
    Application Settings

    Values are automatically loaded from environment variables or .env file.

    Attributes:
        bitstamp_base_url: Base URL for the Bitstamp REST API
        bitstamp_api_key: API key (required for private endpoints)
        bitstamp_api_secret: API secret used to sign private requests
        bitstamp_customer_id: Bitstamp customer id, part of the signed message
        environment: Current environment (development, production)
        log_level: Logging level
        request_timeout: Timeout for HTTP requests in seconds
        max_retries: Attempts for public (unsigned) GET requests
        strict_currencies: Fail balance retrieval on unknown currencies
            instead of dropping them
    """

    # ============================================
    # Bitstamp API Configuration
    # ============================================

    bitstamp_base_url: str = Field(
        default="https://www.bitstamp.net/api/v2",
        description="Bitstamp REST API base URL"
    )

    bitstamp_api_key: str = Field(
        default="",
        description="Bitstamp API key (required for private endpoints)"
    )

    bitstamp_api_secret: str = Field(
        default="",
        description="Bitstamp API secret (required for private endpoints)"
    )

    bitstamp_customer_id: str = Field(
        default="",
        description="Bitstamp customer id (required for private endpoints)"
    )

    # ============================================
    # Application Configuration
    # ============================================

    environment: str = Field(
        default="development",
        description="Application environment (development, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # ============================================
    # Transport
    # ============================================

    request_timeout: int = Field(
        default=30,
        description="HTTP request timeout in seconds"
    )

    max_retries: int = Field(
        default=3,
        description="Attempts for public GET requests (signed requests are never retried)"
    )

    # ============================================
    # Normalization Policy
    # ============================================

    strict_currencies: bool = Field(
        default=False,
        description="Raise on unrecognized currencies in balances instead of dropping them"
    )

    model_config = SettingsConfigDict(
        # Look for .env file in the project root
        env_file=".env",
        # Ignore extra fields in .env that aren't defined here
        extra="ignore",
        # Case-insensitive environment variable matching
        case_sensitive=False
    )

    @property
    def has_bitstamp_credentials(self) -> bool:
        """True when key, secret and customer id are all configured."""
        return bool(self.bitstamp_api_key and self.bitstamp_api_secret and self.bitstamp_customer_id)


# ============================================
# Global Settings Instance
# ============================================

# Loaded once and reused
settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration() -> None:
    """
    Validate critical configuration settings on application startup.

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # logging.py imports config.py, so we can't import at module level
    from core.logging import logger, set_log_level

    if not settings.bitstamp_base_url.startswith("http"):
        raise ValueError(f"Invalid BITSTAMP_BASE_URL: '{settings.bitstamp_base_url}'")

    if settings.request_timeout <= 0:
        raise ValueError(f"Invalid REQUEST_TIMEOUT: {settings.request_timeout}. Must be positive")

    if settings.max_retries < 1:
        raise ValueError(f"Invalid MAX_RETRIES: {settings.max_retries}. Must be at least 1")

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if settings.log_level.upper() not in valid_log_levels:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{settings.log_level}'. "
            f"Must be one of: {', '.join(valid_log_levels)}"
        )

    set_log_level(settings.log_level)

    logger.info("Configuration validated successfully")
    logger.info(f"Bitstamp API: {settings.bitstamp_base_url}")
    logger.info(f"Private endpoints: {'enabled' if settings.has_bitstamp_credentials else 'disabled (no credentials)'}")
    logger.info(f"Currency policy: {'strict' if settings.strict_currencies else 'drop unknown'}")
    logger.info(f"Log level: {settings.log_level.upper()}")
