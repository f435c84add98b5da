"""
Log levels.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Ordered severity tag attached to every message.

    The facility never filters on it; handlers decide what each level means
    for their backend.
    """

    VERBOSE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4

    @property
    def label(self) -> str:
        return self.name
