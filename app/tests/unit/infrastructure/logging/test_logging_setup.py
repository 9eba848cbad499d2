"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging in the test environment
- configure_logging renderer and level selection
- get_logger and get_module_logger context binding
"""

import logging

import pytest
import structlog

from infrastructure.logging import setup
from infrastructure.logging.setup import (
    _is_test_environment,
    configure_logging,
    get_logger,
    get_module_logger,
)


@pytest.fixture
def restore_logging(monkeypatch):
    """Reconfigure the suppressed test logging after a test changes it."""
    yield monkeypatch
    monkeypatch.undo()
    configure_logging()


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_returns_logger(self):
        """configure_logging returns a usable logger."""
        logger = configure_logging()

        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_suppresses_in_test_env(self):
        """In test environment, the root logger swallows everything."""
        configure_logging(log_level="DEBUG")

        assert logging.getLogger().level > logging.CRITICAL

    def test_console_renderer_by_default(self, restore_logging):
        """Outside tests the console renderer is the last processor."""
        restore_logging.setattr(setup, "_is_test_environment", lambda: False)

        configure_logging(log_level="INFO", json_logs=False)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert structlog.contextvars.merge_contextvars in processors
        assert logging.getLogger().level == logging.INFO

    def test_json_renderer_and_extra_processors(self, restore_logging):
        """JSON rendering and extra processors are honored."""
        restore_logging.setattr(setup, "_is_test_environment", lambda: False)

        def extra(logger, method_name, event_dict):
            return event_dict

        configure_logging(log_level="DEBUG", json_logs=True, extra_processors=[extra])

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert processors[-2] is extra
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self, restore_logging):
        """An unknown level name does not break startup."""
        restore_logging.setattr(setup, "_is_test_environment", lambda: False)

        configure_logging(log_level="chatty", json_logs=False)

        assert logging.getLogger().level == logging.WARNING


@pytest.mark.unit
class TestGetLogger:
    """Test suite for get_logger and get_module_logger."""

    def test_get_logger_binds_explicit_name(self):
        """An explicit name is bound as logger_name."""
        logger = get_logger("custom.name")

        assert logger._context["logger_name"] == "custom.name"

    def test_get_logger_detects_calling_module(self):
        """Without a name the calling module is used."""
        logger = get_logger()

        assert logger._context["logger_name"] == __name__

    def test_get_module_logger_binds_component(self):
        """The last module path segment becomes the component."""
        logger = get_module_logger()

        assert logger._context["module_path"] == __name__
        assert logger._context["component"] == __name__.split(".")[-1]

    def test_logging_methods_dont_raise(self):
        """Logging calls are safe while output is suppressed."""
        logger = get_module_logger()

        logger.debug("debug_event", key="value")
        logger.info("info_event")
        logger.warning("warning_event")
        logger.error("error_event", error="boom")
