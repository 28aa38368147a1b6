"""Tests for token_cache/utils/logging_config.py."""

import structlog

from token_cache.utils.logging_config import configure_logging


class TestConfigureLogging:
    """Test structlog configuration."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_configures_structlog(self):
        """Should install the JSON processor pipeline."""
        configure_logging("DEBUG")

        config = structlog.get_config()
        assert structlog.is_configured()
        assert isinstance(config["processors"][-1], structlog.processors.JSONRenderer)
        assert config["cache_logger_on_first_use"] is True

    def test_filters_below_level(self):
        """Should drop messages below the configured level."""
        configure_logging("warning")

        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper.debug is wrapper.info
        assert wrapper.warning is not wrapper.info

    def test_console_output(self):
        """Should render key=value lines when JSON output is off."""
        configure_logging("INFO", json_output=False)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
