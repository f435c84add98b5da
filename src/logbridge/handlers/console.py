"""
Basic console handler.
"""

from __future__ import annotations

import sys
import threading
from typing import Any

from ..config import LogBridgeSettings, LogFormat, get_settings
from ..formatters import ConsoleFormatter, format_json
from ..handler import BaseHandler, MessageThunk
from ..levels import LogLevel


class ConsoleHandler(BaseHandler):
    """Writes every record as one line to a stream.

    Nothing is filtered, so every thunk is realized. Prefer a real backend
    for anything beyond quick setups.

    Args:
        fmt: Output format - "console" (aligned human-readable) or "json"
        stream: Output stream (default: stderr at emit time)
        formatter: Console line formatter
        color: Allow ANSI colors when the stream is a TTY
    """

    def __init__(
        self,
        fmt: LogFormat = LogFormat.CONSOLE,
        stream: Any = None,
        formatter: ConsoleFormatter | None = None,
        color: bool = True,
    ):
        self._fmt = fmt
        self._stream = stream
        self._formatter = formatter or ConsoleFormatter()
        self._color = color
        self._lock = threading.Lock()

    @property
    def stream(self) -> Any:
        return self._stream or sys.stderr

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
        text = message()
        stream = self.stream
        if self._fmt == LogFormat.JSON:
            output = format_json(text, level, subsystem, category, file, function, line)
        else:
            use_color = self._color and bool(getattr(stream, "isatty", lambda: False)())
            output = self._formatter.format(
                text, level, subsystem, category, file, function, line, use_color=use_color
            )

        with self._lock:
            stream.write(output + "\n")
            stream.flush()


def console_handler(
    *,
    settings: LogBridgeSettings | None = None,
    stream: Any = None,
    fmt: LogFormat | None = None,
) -> ConsoleHandler:
    """Console handler. Always available."""
    settings = settings or get_settings()
    return ConsoleHandler(
        fmt=fmt or settings.console_format,
        stream=stream,
        formatter=ConsoleFormatter.from_settings(settings),
        color=settings.console_color,
    )
