"""
Unit Tests for Configuration Module

These tests verify that the configuration system works correctly:
- Default values are applied when needed
- Validation catches invalid configurations
- Property methods work as expected

Run with:
    pytest tests/unit/test_config.py -v
"""

import pytest
from core.config import Settings, settings, validate_configuration


class TestConfigurationLoading:
    """Test that configuration loads correctly"""

    def test_bitstamp_base_url_loaded(self):
        """Verify Bitstamp API URL is set"""
        assert settings.bitstamp_base_url is not None
        assert settings.bitstamp_base_url.startswith("http")

    def test_log_level_is_set(self):
        """Verify log level is configured"""
        assert isinstance(settings.log_level, str)
        assert len(settings.log_level) > 0

    def test_request_timeout_is_positive(self):
        assert isinstance(settings.request_timeout, int)
        assert settings.request_timeout > 0

    def test_strict_currencies_is_boolean(self):
        assert isinstance(settings.strict_currencies, bool)


class TestSettingsFromEnvironment:
    """Test that environment variables override defaults"""

    def test_env_overrides_defaults(self, monkeypatch):
        """Verify environment variables are picked up"""
        monkeypatch.setenv("BITSTAMP_API_KEY", "key")
        monkeypatch.setenv("STRICT_CURRENCIES", "true")
        monkeypatch.setenv("MAX_RETRIES", "5")

        loaded = Settings(_env_file=None)

        assert loaded.bitstamp_api_key == "key"
        assert loaded.strict_currencies is True
        assert loaded.max_retries == 5


class TestConfigurationProperties:
    """Test property methods and computed values"""

    def test_has_credentials_requires_all_three(self):
        partial = Settings(_env_file=None, bitstamp_api_key="k", bitstamp_api_secret="s", bitstamp_customer_id="")
        complete = Settings(_env_file=None, bitstamp_api_key="k", bitstamp_api_secret="s", bitstamp_customer_id="1")

        assert partial.has_bitstamp_credentials is False
        assert complete.has_bitstamp_credentials is True


class TestConfigurationValidation:
    """Test configuration validation function"""

    def test_validate_configuration_succeeds(self):
        """Verify validation passes with default configuration"""
        try:
            validate_configuration()
        except ValueError as e:
            pytest.fail(f"Configuration validation failed: {e}")

    def test_validation_rejects_bad_log_level(self, monkeypatch):
        monkeypatch.setattr(settings, "log_level", "LOUD")

        with pytest.raises(ValueError, match="LOG_LEVEL"):
            validate_configuration()

    def test_validation_rejects_zero_retries(self, monkeypatch):
        monkeypatch.setattr(settings, "max_retries", 0)

        with pytest.raises(ValueError, match="MAX_RETRIES"):
            validate_configuration()

    def test_validation_applies_log_level(self, monkeypatch):
        """Verify the configured level is applied to the package logger"""
        import logging
        from core.logging import logger

        previous = logger.level
        monkeypatch.setattr(settings, "log_level", "debug")
        try:
            validate_configuration()
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)

    def test_validation_rejects_non_http_url(self, monkeypatch):
        monkeypatch.setattr(settings, "bitstamp_base_url", "ftp://bitstamp")

        with pytest.raises(ValueError, match="BITSTAMP_BASE_URL"):
            validate_configuration()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
