"""
Helpers for testing code that logs through logbridge.

    from logbridge.testing import capture_logs

    with capture_logs() as logs:
        do_something()
    assert logs[0].message == "done"
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from .dispatcher import set_handler
from .handler import MessageThunk
from .levels import LogLevel


@dataclass(frozen=True)
class CapturedLog:
    message: str
    level: LogLevel
    subsystem: str | None
    category: str | None
    file: str
    function: str
    line: int


class RecordingHandler:
    """Handler that realizes and keeps every record, in call order."""

    def __init__(self) -> None:
        self.records: list[CapturedLog] = []
        self._lock = threading.Lock()

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
        record = CapturedLog(message(), level, subsystem, category, file, function, line)
        with self._lock:
            self.records.append(record)


@contextmanager
def capture_logs() -> Iterator[list[CapturedLog]]:
    """Record all log calls while active, then restore the previous handler."""
    recorder = RecordingHandler()
    previous = set_handler(recorder)
    try:
        yield recorder.records
    finally:
        set_handler(previous)
