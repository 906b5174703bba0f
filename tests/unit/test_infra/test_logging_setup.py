"""Unit tests for logging configuration, formatters and context injection."""
from __future__ import annotations

import json
import logging
import sys

import pytest

from terra_client.core.settings import LoggingSettings
from terra_client.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    configure_logging,
    get_log_context,
    remove_from_log_context,
    set_log_context,
    setup_logging,
    shutdown,
)


def make_record(msg: str = "hello %s", args: tuple = ("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="terra_client.tests",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _reset_logging():
    clear_log_context()
    root = logging.getLogger()
    level = root.level
    yield
    shutdown()
    clear_log_context()
    root.setLevel(level)


@pytest.mark.unit
class TestJSONFormatter:
    """Test suite for JSONFormatter."""

    def test_basic_fields(self):
        """Test level, logger, message and a UTC timestamp are emitted."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "terra_client.tests"
        assert data["message"] == "hello world"
        assert data["timestamp"].endswith("Z")

    def test_extra_and_static_fields(self):
        """Test extra fields and static fields are merged into the object."""
        formatter = JSONFormatter(static={"service": "terra-client"})

        data = json.loads(formatter.format(make_record(status_code=401, path="/v1/health/reminders")))

        assert data["service"] == "terra-client"
        assert data["status_code"] == 401
        assert data["path"] == "/v1/health/reminders"
        assert "msg" not in data
        assert "args" not in data

    def test_exception_stays_on_one_line(self):
        """Test tracebacks are escaped so every record is one JSON line."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record(msg="failed", args=())
            record.exc_info = sys.exc_info()

        output = JSONFormatter().format(record)

        assert "\n" not in output
        assert "RuntimeError: boom" in json.loads(output)["exception"]

    def test_non_serializable_values_use_str(self):
        """Test values json cannot encode fall back to str()."""
        data = json.loads(JSONFormatter().format(make_record(obj=object)))

        assert data["obj"] == str(object)


@pytest.mark.unit
class TestLogContext:
    """Test suite for contextvars-based log context."""

    def test_set_merges_and_remove_drops(self):
        """Test context accumulates across calls and keys can be removed."""
        set_log_context(tenant_id="t1")
        set_log_context(user_id="u1")
        remove_from_log_context("tenant_id")

        assert get_log_context() == {"user_id": "u1"}

    def test_filter_injects_without_overwriting(self):
        """Test context is copied onto records unless the record already has the key."""
        set_log_context(tenant_id="t1", user_id="u1")
        record = make_record(user_id="explicit")

        assert ContextInjectingFilter().filter(record) is True
        assert record.tenant_id == "t1"
        assert record.user_id == "explicit"


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging and setup_logging."""

    def test_json_file_output_includes_context(self, tmp_path):
        """Test child logger records reach the file with context fields."""
        log_file = tmp_path / "logs" / "client.jsonl"
        configure_logging(
            log_level="DEBUG",
            file_path=log_file,
            json_logs=True,
            console_enabled=False,
            capture_warnings=False,
            service_name="terra-test",
        )
        set_log_context(tenant_id="t1")

        logging.getLogger("terra_client.infra.http.client").info("Token refreshed", extra={"attempt": 1})
        shutdown()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        data = json.loads(lines[-1])
        assert data["message"] == "Token refreshed"
        assert data["tenant_id"] == "t1"
        assert data["attempt"] == 1
        assert data["service"] == "terra-test"

    def test_level_filters_records(self, tmp_path):
        """Test records below the root level are dropped."""
        log_file = tmp_path / "client.log"
        configure_logging(log_level="WARNING", file_path=log_file, console_enabled=False, capture_warnings=False)

        logger = logging.getLogger("terra_client.tests")
        logger.info("quiet")
        logger.warning("loud")
        shutdown()

        content = log_file.read_text(encoding="utf-8")
        assert "loud" in content
        assert "quiet" not in content

    def test_setup_logging_from_settings(self, tmp_path):
        """Test setup_logging applies LoggingSettings."""
        log_file = tmp_path / "settings.jsonl"
        settings = LoggingSettings(
            level="debug",
            json_logs=True,
            console_enabled=False,
            file_enabled=True,
            file_path=log_file,
            capture_warnings=False,
        )

        setup_logging(settings, force=True)
        logging.getLogger("terra_client.tests").debug("configured")
        shutdown()

        assert json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])["message"] == "configured"

    def test_shutdown_is_idempotent(self):
        """Test shutdown can run with nothing configured."""
        shutdown()
        shutdown()
