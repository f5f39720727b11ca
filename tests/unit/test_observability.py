"""Unit tests for structured logging utilities in ``observability``.

Validates the null handler, trace binding, and event construction behaviour
downstream consumers rely on.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lib_layered_env import bind_trace_id, get_logger
from lib_layered_env.adapters.dotenv.parser import parse_env
from lib_layered_env.adapters.sources import from_files
from lib_layered_env.observability import TRACE_ID, log_info, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_layered_env")
    bind_trace_id("trace-123")
    try:
        log_info("env_merged", source="final", path=None)
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "source": "final", "path": None}


def test_bind_trace_id_clears_context() -> None:
    """Clearing the trace ID should reset the context variable to None."""

    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    """make_event should merge optional metadata without mutating base keys."""

    assert make_event("env", None, {"keys": 3}) == {"source": "env", "path": None, "keys": 3}
    assert make_event("dotenv", "/srv/.env") == {"source": "dotenv", "path": "/srv/.env"}


def test_values_are_never_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Only key counts and paths reach the log, never variable values."""

    caplog.set_level(logging.DEBUG, logger="lib_layered_env")
    (tmp_path / ".env").write_text("API_KEY=super-secret-value\n", encoding="utf-8")
    from_files(tmp_path, mode="production", env_source={}).load()
    assert caplog.records
    for record in caplog.records:
        assert "super-secret-value" not in repr(getattr(record, "context", {}))


def test_unterminated_value_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_layered_env")
    parse_env('KEY="open', env_source={})
    record = caplog.records[-1]
    assert record.getMessage() == "dotenv_unterminated_value"
    assert getattr(record, "context")["key"] == "KEY"
