"""
Built-in log handlers.

- structlog: structured logging backend (default when enabled)
- cloud: Google Cloud Logging (platform logging, default on GCP)
- console: aligned lines on stderr (explicit opt-in only)
"""

from .cloud import CloudLoggingHandler, cloud_logging_handler
from .console import ConsoleHandler, console_handler
from .structured import StructlogHandler, structlog_handler

__all__ = [
    "CloudLoggingHandler",
    "ConsoleHandler",
    "StructlogHandler",
    "cloud_logging_handler",
    "console_handler",
    "structlog_handler",
]
