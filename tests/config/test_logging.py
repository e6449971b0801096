"""Tests for logging configuration."""

import logging

import pytest

from scriptkit.config import configure_logging, get_logger
from scriptkit.config.settings import ScriptKitSettings


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Test logging setup from settings."""

    def test_sets_root_level(self):
        configure_logging(ScriptKitSettings(log_level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG

    @pytest.mark.parametrize("log_format", ["console", "json", "structured"])
    def test_formats(self, log_format):
        configure_logging(ScriptKitSettings(log_format=log_format))
        assert logging.getLogger().handlers

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "scriptkit.log"
        logger = get_logger("scriptkit.test")
        configure_logging(ScriptKitSettings(log_file=log_file, log_level="INFO"))
        logger.info("File logging works", answer=42)
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert log_file.exists()
        assert "File logging works" in log_file.read_text()


class TestGetLogger:
    """Test cached logger lookup."""

    def test_same_logger_returned(self):
        assert get_logger("scriptkit.a") is get_logger("scriptkit.a")

    def test_events_reach_caplog(self, caplog):
        logger = get_logger("scriptkit.caplog")
        # Configuring logging replaces root handlers, including caplog's
        logging.getLogger().addHandler(caplog.handler)
        with caplog.at_level(logging.INFO):
            logger.info("Parsed script", elements=3)
        assert "Parsed script" in caplog.text
