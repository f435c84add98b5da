"""
structlog handler.

Forwards records to structlog, whatever processors and wrapper class the
application configured. Level filtering configured there happens before the
message thunk is realized.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

import structlog

from ..config import LogBridgeSettings, get_settings
from ..diagnostics import get_logger
from ..handler import BaseHandler, MessageThunk
from ..levels import LogLevel

logger = get_logger("logbridge.handlers.structured")

DEFAULT_LOGGER_NAME = "root"

_LEVEL_MAP = {
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

_METHOD_MAP = {
    LogLevel.VERBOSE: "debug",
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARNING: "warning",
    LogLevel.ERROR: "error",
}


def _resolve(bound: Any) -> Any:
    """Return the concrete wrapper behind a lazy structlog proxy."""
    if hasattr(type(bound), "bind"):
        return bound.bind()
    return bound


def _is_enabled(wrapper: Any, level: int) -> bool:
    # Looked up on the type: the generic BoundLogger proxies any instance attribute.
    # FilteringBoundLogger exposes is_enabled_for, stdlib.BoundLogger isEnabledFor.
    for name in ("is_enabled_for", "isEnabledFor"):
        check = getattr(type(wrapper), name, None)
        if check is not None:
            return bool(check(wrapper, level))
    return True


class StructlogHandler(BaseHandler):
    """Structured-backend adapter.

    One bound logger is kept per subsystem. Subsystem and category travel as
    event keys, the call site as `file`, `function` and `line`. Records
    without a subsystem use the "root" logger.
    """

    def __init__(self, logger_factory: Callable[[str], Any] | None = None):
        self._logger_factory = logger_factory or structlog.get_logger
        self._loggers: dict[str, Any] = {}
        self._lock = threading.Lock()

    def _logger_for(self, subsystem: str | None) -> Any:
        name = subsystem or DEFAULT_LOGGER_NAME
        bound = self._loggers.get(name)
        if bound is None:
            with self._lock:
                bound = self._loggers.get(name)
                if bound is None:
                    bound = self._logger_factory(name)
                    self._loggers[name] = bound
        return bound

    def emit(
        self,
        message: MessageThunk,
        level: LogLevel,
        subsystem: str | None,
        category: str | None,
        file: str,
        function: str,
        line: int,
    ) -> None:
        wrapper = _resolve(self._logger_for(subsystem))
        if not _is_enabled(wrapper, _LEVEL_MAP[level]):
            return

        context: dict[str, Any] = {
            "subsystem": subsystem,
            "category": category,
            "file": file,
            "function": function,
            "line": line,
        }
        if level == LogLevel.VERBOSE:
            context["verbosity"] = "verbose"
        getattr(wrapper, _METHOD_MAP[level])(message(), **context)


def structlog_handler(
    *,
    settings: LogBridgeSettings | None = None,
    logger_factory: Callable[[str], Any] | None = None,
) -> StructlogHandler | None:
    """structlog handler. Return `None` when structlog is disabled by configuration."""
    settings = settings or get_settings()
    if not settings.structlog_enabled:
        logger.debug("structlog handler unavailable", reason="disabled by configuration")
        return None
    return StructlogHandler(logger_factory=logger_factory)
