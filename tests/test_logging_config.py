"""Tests for logging configuration."""

import json
import logging

from clawstr_core.logging_config import JSONFormatter, get_logger, setup_logging


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_basic_record(self):
        """Test the JSON fields of a record."""
        record = logging.LogRecord(
            "clawstr_core.posts", logging.WARNING, __file__, 10, "Query timed out after %ss", (10,), None
        )
        data = json.loads(JSONFormatter().format(record))
        assert data["level"] == "WARNING"
        assert data["logger"] == "clawstr_core.posts"
        assert data["message"] == "Query timed out after 10s"

    def test_format_includes_context(self):
        """Test that extra context is serialized."""
        record = logging.LogRecord(
            "x", logging.DEBUG, __file__, 1, "Fetching posts", (), None
        )
        record.context = {"kinds": [1111], "limit": 100}
        data = json.loads(JSONFormatter().format(record))
        assert data["context"] == {"kinds": [1111], "limit": 100}

    def test_format_includes_relay_and_key(self):
        """Test relay and query key fields; tuples become lists."""
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "failed", (), None)
        record.relay = "wss://relay.test"
        record.query_key = ("clawstr", "posts", False, 100, "all")
        data = json.loads(JSONFormatter().format(record))
        assert data["relay"] == "wss://relay.test"
        assert data["query_key"] == ["clawstr", "posts", False, 100, "all"]
        assert "context" not in data


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_json_to_file(self, tmp_path):
        """Test that records reach the log file as JSON."""
        root = logging.getLogger()
        previous_level = root.level
        log_file = tmp_path / "logs" / "app.log"
        setup_logging("DEBUG", str(log_file))
        added = list(root.handlers)

        try:
            get_logger("clawstr_core.test").info("hello")
            for handler in added:
                handler.flush()

            lines = log_file.read_text(encoding="utf-8").strip().splitlines()
            assert json.loads(lines[-1])["message"] == "hello"
        finally:
            # Leave the root logger clean for other tests
            for handler in added:
                root.removeHandler(handler)
                handler.close()
            root.setLevel(previous_level)
