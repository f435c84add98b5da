"""
Handler contract.

A handler receives every log call as an unevaluated message thunk plus
metadata, and decides whether and how to realize it. Any callable with the
`LogHandler` signature qualifies; built-in adapters derive from `BaseHandler`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Protocol

from .levels import LogLevel

MessageThunk = Callable[[], str]


class LogHandler(Protocol):
    """Capability every logging backend adapter implements."""

    def __call__(
        self,
        message: MessageThunk,
        level: LogLevel,
        subsystem: str | None,
        category: str | None,
        file: str,
        function: str,
        line: int,
    ) -> None: ...


# =============================================================================
# Adapter Abstraction (Strategy Pattern)
# =============================================================================


class BaseHandler(ABC):
    """Abstract base class for built-in handlers.

    Subclasses implement `emit`. A subclass that drops a record must return
    without calling `message`.
    """

    def __call__(
        self,
        message: MessageThunk,
        level: LogLevel,
        subsystem: str | None,
        category: str | None,
        file: str,
        function: str,
        line: int,
    ) -> None:
        self.emit(message, level, subsystem, category, file, function, line)

    @abstractmethod
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
        """Forward a log record to the backend."""
        ...

    def close(self) -> None:
        """Release backend resources."""
