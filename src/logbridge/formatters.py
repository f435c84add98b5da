"""
Line formatters and color utilities for the console handler.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson

from .config import LogBridgeSettings
from .levels import LogLevel

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "origin": "\033[35m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


def format_origin(subsystem: str | None, category: str | None) -> str:
    """Join subsystem and category into a single display tag."""
    parts = [part for part in (subsystem, category) if part]
    return "/".join(parts) if parts else "-"


# =============================================================================
# Console Formatter (Aligned Columns)
# =============================================================================


class ConsoleFormatter:
    """Renders one human-readable line per record (fixed width, right-aligned).

    Format: timestamp | LEVEL | subsystem/category | message (file:line function)
    """

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        LogLevel.VERBOSE: "\x1b[2m",
        LogLevel.DEBUG: "\x1b[36m",
        LogLevel.INFO: "\x1b[32m",
        LogLevel.WARNING: "\x1b[33m",
        LogLevel.ERROR: "\x1b[31m",
    }

    def __init__(
        self,
        *,
        timestamp_format: str = "%Y-%m-%d %H:%M:%S",
        level_width: int = 7,
        origin_width: int = 32,
        separator: str = " | ",
    ) -> None:
        self.timestamp_format = timestamp_format
        self.level_width = level_width
        self.origin_width = origin_width
        self.separator = separator

    @classmethod
    def from_settings(cls, settings: LogBridgeSettings) -> ConsoleFormatter:
        return cls(
            timestamp_format=settings.console_timestamp_format,
            level_width=settings.console_level_width,
            origin_width=settings.console_origin_width,
            separator=settings.console_separator,
        )

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    def _colorize_level(self, text: str, level: LogLevel, use_color: bool) -> str:
        if not use_color:
            return text
        return f"{self._LEVEL_COLORS[level]}{text}{self._RESET}"

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        if not use_color:
            return text
        return colorize(text, color)

    def format(
        self,
        message: str,
        level: LogLevel,
        subsystem: str | None,
        category: str | None,
        file: str,
        function: str,
        line: int,
        *,
        timestamp: datetime | None = None,
        use_color: bool = False,
    ) -> str:
        """Format a realized record into an aligned string."""
        moment = (timestamp or datetime.now(timezone.utc)).astimezone()
        location = self._maybe_color(f"({file}:{line} {function})", "dim", use_color)

        return "".join(
            [
                self._maybe_color(moment.strftime(self.timestamp_format), "timestamp", use_color),
                self.separator,
                self._colorize_level(self._fit_right(level.label, self.level_width), level, use_color),
                self.separator,
                self._maybe_color(
                    self._fit_right(format_origin(subsystem, category), self.origin_width),
                    "origin",
                    use_color,
                ),
                self.separator,
                f"{message} {location}",
            ]
        )


def format_json(
    message: str,
    level: LogLevel,
    subsystem: str | None,
    category: str | None,
    file: str,
    function: str,
    line: int,
    *,
    timestamp: datetime | None = None,
) -> str:
    """Format a realized record as a single JSON object."""
    return orjson_dumps(
        {
            "timestamp": timestamp or datetime.now(timezone.utc),
            "level": level.label,
            "subsystem": subsystem,
            "category": category,
            "message": message,
            "file": file,
            "function": function,
            "line": line,
        }
    )
