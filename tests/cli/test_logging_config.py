"""Tests for structured logging configuration."""

import json
import logging

import structlog

from cli.logging_config import MAX_CONTENT_CHARS, _redact_sensitive, setup_logging


class TestLoggingConfig:
    """Test structlog setup modes."""

    def test_level_filtering(self):
        setup_logging(json_mode=False, level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_default_level_is_info(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_processor_chain_includes_redaction(self):
        setup_logging(json_mode=True, level="DEBUG")
        assert _redact_sensitive in structlog.get_config()["processors"]

    def test_single_stream_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_log_file_receives_json(self, tmp_path):
        log_file = tmp_path / "logs" / "agentprog.log"
        setup_logging(json_mode=False, level="INFO", log_file=log_file)
        logging.getLogger("agentprog.test").info("file line")
        for handler in logging.getLogger().handlers:
            handler.flush()
        lines = log_file.read_text().strip().splitlines()
        assert json.loads(lines[-1])["event"] == "file line"


class TestRedaction:
    def test_email_redacted(self):
        event = _redact_sensitive(None, None, {"event": "message_processed", "author": "ada@example.com"})
        assert event["author"] == "REDACTED@email"

    def test_api_key_redacted(self):
        event = _redact_sensitive(None, None, {"event": "x", "detail": "api_key=abcdef1234567890"})
        assert "abcdef1234567890" not in event["detail"]

    def test_content_truncated(self):
        event = _redact_sensitive(None, None, {"event": "x", "content": "a" * 200})
        assert event["content"] == "a" * MAX_CONTENT_CHARS + "..."

    def test_other_keys_not_truncated(self):
        event = _redact_sensitive(None, None, {"event": "x", "title": "a" * 200})
        assert event["title"] == "a" * 200

    def test_non_strings_untouched(self):
        event = _redact_sensitive(None, None, {"event": "x", "count": 3})
        assert event["count"] == 3
