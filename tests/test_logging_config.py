"""
Tests for cloudflare_configure.logging_config module
"""

import json
import logging

import pytest

from cloudflare_configure.logging_config import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level

    yield root

    root.handlers = handlers
    root.setLevel(level)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        """Test the core fields are present."""
        record = logging.LogRecord(
            "cloudflare_configure.reconciler", logging.INFO, __file__, 1,
            "Changed %s", ("always_online",), None,
        )

        log_obj = json.loads(JSONFormatter().format(record))

        assert log_obj["level"] == "INFO"
        assert log_obj["logger"] == "cloudflare_configure.reconciler"
        assert log_obj["message"] == "Changed always_online"
        assert log_obj["timestamp"].endswith("Z")
        assert "extra" not in log_obj

    def test_extra_fields(self):
        """Test user supplied extras are nested."""
        record = logging.LogRecord(
            "cloudflare_configure", logging.WARNING, __file__, 1, "msg", None, None,
        )
        record.zone = "example.com"

        log_obj = json.loads(JSONFormatter().format(record))

        assert log_obj["extra"] == {"zone": "example.com"}


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level(self, restore_root_logger, clean_env):
        """Test the requested level is applied."""
        root = setup_logging(level="debug")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_env_json(self, restore_root_logger, clean_env, monkeypatch):
        """Test CF_LOG_JSON switches to JSON output."""
        monkeypatch.setenv("CF_LOG_JSON", "true")
        monkeypatch.setenv("CF_LOG_LEVEL", "ERROR")

        root = setup_logging()

        assert root.level == logging.ERROR
        assert isinstance(root.handlers[0].formatter, JSONFormatter)


class TestLogFile:
    """Tests for logging to a file."""

    def test_file_handler(self, restore_root_logger, clean_env, tmp_path):
        """Test log lines are also written to the given file."""
        log_path = tmp_path / "configure.log"

        root = setup_logging(level="INFO", log_to_file=str(log_path))
        logging.getLogger("cloudflare_configure.reconciler").info("Set ipv6 to 'on'")
        for handler in root.handlers:
            handler.flush()

        assert len(root.handlers) == 2
        assert "Set ipv6 to 'on'" in log_path.read_text()

        for handler in root.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()
