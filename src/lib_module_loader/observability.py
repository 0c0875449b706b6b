"""Structured logging helpers shared by the loader and its adapters.

Purpose
    Keep every emission of logging data predictable and contextual without
    forcing applications to adopt a specific logging backend.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured entries via a
      single private emitter.
    - ``make_event``: convenience builder for structured event payloads.

System Integration
    Used by the module loader adapters, the composition root, and the example
    script so all diagnostics carry the same trace metadata.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_module_loader_trace_id", default=None)
"""Current trace identifier propagated through logging helpers."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_module_loader")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    The library stays silent until the host application configures handlers.
    """

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    What
        Stores ``trace_id`` in :data:`TRACE_ID`; ``None`` clears the binding.
    Side Effects
        Mutates the context variable visible to subsequent logging helpers.

    Examples
    --------
    >>> bind_trace_id('load-1')
    >>> TRACE_ID.get()
    'load-1'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the trace context."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(
    stage: str,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured logging payload for module lifecycle events.

    Inputs
        stage: Lifecycle stage being observed (``resolve``, ``load``, ...).
        path: Filesystem path of the module, if known.
        payload: Optional mapping with extra diagnostic detail.
    Outputs
        dict[str, Any]: Data safe to unpack into :func:`log_*` helpers.

    Examples
    --------
    >>> make_event('load', '/tmp/hello.py', {'module': 'hello'})
    {'stage': 'load', 'path': '/tmp/hello.py', 'module': 'hello'}
    """

    event: dict[str, Any] = {"stage": stage, "path": path}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context
