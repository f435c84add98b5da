"""
logbridge: a small generic logging facility.

Call sites log through leveled functions; a single global handler decides
where messages go:
- structlog: structured logging (default when enabled)
- cloud: Google Cloud Logging (default on GCP when structlog is disabled)
- console: aligned lines on stderr (opt-in via `set_handler`)

If no backend is available, logging is disabled. Messages are formatted
only when the active handler consumes them.
"""

from .calls import BoundLog, bind, log_debug, log_error, log_info, log_verbose, log_warning
from .dispatcher import current_handler, log, set_handler
from .handler import BaseHandler, LogHandler, MessageThunk
from .handlers import cloud_logging_handler, console_handler, structlog_handler
from .levels import LogLevel

__version__ = "1.0.0"


def marketing_version() -> str:
    """Official version number."""
    return __version__


__all__ = [
    "BaseHandler",
    "BoundLog",
    "LogHandler",
    "LogLevel",
    "MessageThunk",
    "__version__",
    "bind",
    "cloud_logging_handler",
    "console_handler",
    "current_handler",
    "log",
    "log_debug",
    "log_error",
    "log_info",
    "log_verbose",
    "log_warning",
    "marketing_version",
    "set_handler",
    "structlog_handler",
]
