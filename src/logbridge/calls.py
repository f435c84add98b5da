"""
Call-site logging functions.

    from logbridge import log_info

    log_info("com.myapp", "Weather", "The temperature is %s", temperature)

The message is only formatted if the active handler consumes it. File,
function and line are taken from the caller's frame. Libraries that always
log under the same subsystem can `bind` it once:

    log = bind("com.myapp", "Weather")
    log.info("The temperature is %s", temperature)
"""

from __future__ import annotations

import inspect
from typing import Any

from . import dispatcher as _dispatch
from .levels import LogLevel

# Frames between _call_site and the caller of a public logging function.
_INTERNAL_FRAMES = 2


def _call_site(stacklevel: int) -> tuple[str, str, int]:
    frame = inspect.currentframe()
    for _ in range(_INTERNAL_FRAMES + stacklevel):
        if frame is None or frame.f_back is None:
            break
        frame = frame.f_back
    if frame is None:
        return "<unknown>", "<unknown>", 0
    code = frame.f_code
    return code.co_filename, getattr(code, "co_qualname", code.co_name), frame.f_lineno


def _emit(
    level: LogLevel,
    subsystem: str | None,
    category: str | None,
    fmt: str,
    args: tuple[Any, ...],
    stacklevel: int,
) -> None:
    file, function, line = _call_site(stacklevel)

    def message() -> str:
        return fmt % args if args else fmt

    _dispatch.log(message, level, subsystem, category, file, function, line)


def log_verbose(subsystem: str | None, category: str | None, fmt: str, *args: Any, stacklevel: int = 1) -> None:
    _emit(LogLevel.VERBOSE, subsystem, category, fmt, args, stacklevel)


def log_debug(subsystem: str | None, category: str | None, fmt: str, *args: Any, stacklevel: int = 1) -> None:
    _emit(LogLevel.DEBUG, subsystem, category, fmt, args, stacklevel)


def log_info(subsystem: str | None, category: str | None, fmt: str, *args: Any, stacklevel: int = 1) -> None:
    _emit(LogLevel.INFO, subsystem, category, fmt, args, stacklevel)


def log_warning(subsystem: str | None, category: str | None, fmt: str, *args: Any, stacklevel: int = 1) -> None:
    _emit(LogLevel.WARNING, subsystem, category, fmt, args, stacklevel)


def log_error(subsystem: str | None, category: str | None, fmt: str, *args: Any, stacklevel: int = 1) -> None:
    _emit(LogLevel.ERROR, subsystem, category, fmt, args, stacklevel)


class BoundLog:
    """Leveled logging functions with a fixed subsystem.

    A category given per call overrides the bound one.
    """

    def __init__(self, subsystem: str | None, category: str | None = None):
        self.subsystem = subsystem
        self.category = category

    def _category(self, category: str | None) -> str | None:
        return self.category if category is None else category

    def verbose(self, fmt: str, *args: Any, category: str | None = None, stacklevel: int = 1) -> None:
        _emit(LogLevel.VERBOSE, self.subsystem, self._category(category), fmt, args, stacklevel)

    def debug(self, fmt: str, *args: Any, category: str | None = None, stacklevel: int = 1) -> None:
        _emit(LogLevel.DEBUG, self.subsystem, self._category(category), fmt, args, stacklevel)

    def info(self, fmt: str, *args: Any, category: str | None = None, stacklevel: int = 1) -> None:
        _emit(LogLevel.INFO, self.subsystem, self._category(category), fmt, args, stacklevel)

    def warning(self, fmt: str, *args: Any, category: str | None = None, stacklevel: int = 1) -> None:
        _emit(LogLevel.WARNING, self.subsystem, self._category(category), fmt, args, stacklevel)

    def error(self, fmt: str, *args: Any, category: str | None = None, stacklevel: int = 1) -> None:
        _emit(LogLevel.ERROR, self.subsystem, self._category(category), fmt, args, stacklevel)

    def __repr__(self) -> str:
        return f"BoundLog(subsystem={self.subsystem!r}, category={self.category!r})"


def bind(subsystem: str | None, category: str | None = None) -> BoundLog:
    return BoundLog(subsystem, category)
