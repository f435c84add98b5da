"""
Process-wide log dispatcher.

Holds the single active handler. Every call site funnels through `log`,
which hands the unevaluated message thunk to the handler synchronously in
the caller's thread. The first `log` (or `current_handler`) call picks a
default handler unless one was installed explicitly before.
"""

from __future__ import annotations

import threading
from typing import Callable, Iterable

from .diagnostics import get_logger
from .handler import LogHandler, MessageThunk
from .handlers import cloud_logging_handler, structlog_handler
from .levels import LogLevel

logger = get_logger("logbridge.dispatcher")

HandlerProbe = Callable[[], "LogHandler | None"]

# Priority order for default selection. The console handler is never picked
# automatically.
DEFAULT_PROBES: tuple[HandlerProbe, ...] = (structlog_handler, cloud_logging_handler)


def select_default_handler(probes: Iterable[HandlerProbe]) -> LogHandler | None:
    """Return the first handler a probe offers, or `None` to disable logging."""
    for probe in probes:
        handler = probe()
        if handler is not None:
            logger.debug("default log handler selected", handler=type(handler).__name__)
            return handler
    logger.debug("no log handler available, logging disabled")
    return None


class LogDispatcher:
    """Guarded slot for the active handler.

    Args:
        probes: Handler factories consulted, in order, by default selection
    """

    def __init__(self, probes: Iterable[HandlerProbe] | None = None):
        self._probes = tuple(DEFAULT_PROBES if probes is None else probes)
        self._handler: LogHandler | None = None
        self._initialized = False
        self._lock = threading.Lock()

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if not self._initialized:
                self._handler = select_default_handler(self._probes)
                self._initialized = True

    def set_handler(self, handler: LogHandler | None) -> LogHandler | None:
        """Install `handler` (`None` disables logging) and return the previous one."""
        with self._lock:
            previous = self._handler
            self._handler = handler
            self._initialized = True
        return previous

    def current_handler(self) -> LogHandler | None:
        self._ensure_initialized()
        return self._handler

    def log(
        self,
        message: MessageThunk,
        level: LogLevel,
        subsystem: str | None,
        category: str | None,
        file: str,
        function: str,
        line: int,
    ) -> None:
        """Dispatch one record to the active handler.

        Not meant to be called directly, use the leveled functions in
        `logbridge.calls` instead.
        """
        self._ensure_initialized()
        handler = self._handler
        if handler is None:
            return
        handler(message, level, subsystem, category, file, function, line)

    def reset(self) -> None:
        """Forget the active handler so default selection runs again."""
        with self._lock:
            self._handler = None
            self._initialized = False


# =============================================================================
# Global State
# =============================================================================

dispatcher = LogDispatcher()


def set_handler(handler: LogHandler | None) -> LogHandler | None:
    """Replace the current log handler.

    Args:
        handler: The new log handler, or `None` to inhibit logging

    Returns:
        The previously installed log handler.
    """
    return dispatcher.set_handler(handler)


def current_handler() -> LogHandler | None:
    return dispatcher.current_handler()


def log(
    message: MessageThunk,
    level: LogLevel,
    subsystem: str | None,
    category: str | None,
    file: str,
    function: str,
    line: int,
) -> None:
    dispatcher.log(message, level, subsystem, category, file, function, line)
