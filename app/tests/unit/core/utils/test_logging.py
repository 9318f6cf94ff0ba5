"""Unit tests for the logging utilities."""

import logging
from unittest.mock import patch

import pytest

from app.core.logging_config import build_logging_config
from app.core.utils.logging import (
    PHISanitizingFilter,
    RequestContextFilter,
    get_logger,
    log_execution_time,
    redact,
    request_id_var,
)


def make_record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord("app.test", logging.INFO, __file__, 1, msg, args, None)


class TestRedact:
    @pytest.mark.parametrize(
        "text, kind",
        [
            ("Contact me at jane.doe@example.com", "EMAIL"),
            ("SSN 123-45-6789 on file", "SSN"),
            ("Call (555) 123-4567 tonight", "PHONE"),
        ],
    )
    def test_identifiers_are_redacted(self, text, kind):
        assert f"[REDACTED:{kind}]" in redact(text)

    def test_plain_text_is_untouched(self):
        text = "Rated mood at 9/10 on 2026-10-01"

        assert redact(text) == text


class TestFilters:
    def test_phi_filter_rewrites_formatted_message(self):
        record = make_record("Journal from %s attached", "sam@example.org")

        assert PHISanitizingFilter().filter(record)

        assert record.getMessage() == "Journal from [REDACTED:EMAIL] attached"
        assert record.args == ()

    def test_phi_filter_keeps_clean_record(self):
        record = make_record("Session %s complete", "abc")

        PHISanitizingFilter().filter(record)

        assert record.args == ("abc",)

    def test_request_context_filter(self):
        record = make_record("handled")
        token = request_id_var.set("req-1")
        try:
            RequestContextFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-1"

    def test_request_context_default(self):
        record = make_record("outside a request")

        RequestContextFilter().filter(record)

        assert record.request_id == "-"


class TestLoggingConfig:
    def test_level_applies_to_app_logger(self):
        config = build_logging_config(level="DEBUG")

        assert config["loggers"]["app"]["level"] == "DEBUG"
        assert config["handlers"]["console"]["filters"] == ["phi_sanitizer", "request_context"]

    def test_file_handlers(self, tmp_path):
        config = build_logging_config(log_to_file=True, log_dir=str(tmp_path))

        assert config["handlers"]["file_handler"]["filename"] == str(tmp_path / "app.log")
        assert "error_file_handler" in config["loggers"]["app"]["handlers"]

    def test_builds_fresh_copy(self):
        build_logging_config(level="ERROR")

        assert build_logging_config()["loggers"]["app"]["level"] == "INFO"


class TestGetLogger:
    def test_configured_app_logger_is_untouched(self):
        with patch.object(logging.getLogger("app"), "handlers", [logging.NullHandler()]):
            logger = get_logger("app.tests.untouched")

        assert logger.handlers == []


def test_log_execution_time_keeps_result_and_errors():
    @log_execution_time
    def double(x):
        return 2 * x

    @log_execution_time
    def fail():
        raise RuntimeError("boom")

    assert double(4) == 8
    assert double.__name__ == "double"
    with pytest.raises(RuntimeError):
        fail()
