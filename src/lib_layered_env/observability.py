"""Structured logging helpers shared by every layer of ``lib_layered_env``.

Purpose
    Keep diagnostics about which files were read, which sources won and why
    validation failed predictable and machine-readable, without forcing an
    application onto a specific logging backend.

Contents
    - ``TRACE_ID``: context variable holding the active trace identifier.
    - ``get_logger``: the package logger (silent until the host adds handlers).
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured records.
    - ``make_event``: builds ``source``/``path`` payloads for source events.

System Integration
    Adapters log file reads and parse summaries, the composition root logs
    merges, and the validator logs aggregated failures. Values are never
    logged, only key names, because ``.env`` files routinely hold secrets.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_layered_env_trace_id", default=None)
"""Trace identifier attached to every record emitted through this module."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_layered_env")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('req-42')
    >>> TRACE_ID.get()
    'req-42'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    _emit(logging.ERROR, message, fields)


def make_event(source: str, path: str | None, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Build the keyword payload for a source lifecycle event.

    Inputs
        source: Name of the layer or adapter being observed.
        path: File associated with the event, if any.
        payload: Optional extra diagnostic fields.
    Outputs
        dict[str, Any]: Data safe to unpack into the ``log_*`` helpers.

    Examples
    --------
    >>> make_event('dotenv', '/srv/.env', {'keys': 2})
    {'source': 'dotenv', 'path': '/srv/.env', 'keys': 2}
    """

    event: dict[str, Any] = {"source": source, "path": path}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a record through the package logger with the trace context attached."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    _LOGGER.log(level, message, extra={"context": context})
