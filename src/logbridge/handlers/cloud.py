"""
Google Cloud Logging handler.

The hosting platform's native structured logging facility. Available when
the process runs on Google Cloud (or configuration forces it on) and a
Cloud Logging client can be created.
"""

from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING, Any, Callable, Mapping

from ..config import LogBridgeSettings, PlatformLogging, get_settings
from ..diagnostics import get_logger
from ..handler import BaseHandler, MessageThunk
from ..levels import LogLevel

if TYPE_CHECKING:
    from google.cloud.logging import Client as GCloudLoggingClient

logger = get_logger("logbridge.handlers.cloud")

# Set by Cloud Run services and jobs, App Engine, Cloud Functions and most
# GCP-hosted containers.
RUNTIME_MARKERS = ("K_SERVICE", "CLOUD_RUN_JOB", "GAE_ENV", "FUNCTION_TARGET", "GOOGLE_CLOUD_PROJECT")

_SEVERITY_MAP = {
    LogLevel.VERBOSE: "DEFAULT",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARNING",
    LogLevel.ERROR: "ERROR",
}


def platform_supported(settings: LogBridgeSettings, environ: Mapping[str, str] | None = None) -> bool:
    """Whether the host platform offers Cloud Logging."""
    if settings.platform_logging == PlatformLogging.OFF:
        return False
    if settings.platform_logging == PlatformLogging.ON:
        return True
    environ = os.environ if environ is None else environ
    return any(environ.get(marker) for marker in RUNTIME_MARKERS)


class CloudLoggingHandler(BaseHandler):
    """Platform-logging adapter.

    Keeps one Cloud Logging logger per (subsystem, category) pair, labelled
    with that pair. The call site is sent as the entry's source location.
    """

    def __init__(self, client: GCloudLoggingClient | Any, log_name: str = "logbridge"):
        self._client = client
        self._log_name = log_name
        self._loggers: dict[tuple[str | None, str | None], Any] = {}
        self._lock = threading.Lock()

    def _logger_for(self, subsystem: str | None, category: str | None) -> Any:
        key = (subsystem, category)
        handle = self._loggers.get(key)
        if handle is None:
            with self._lock:
                handle = self._loggers.get(key)
                if handle is None:
                    labels = {name: value for name, value in (("subsystem", subsystem), ("category", category)) if value}
                    handle = self._client.logger(self._log_name, labels=labels)
                    self._loggers[key] = handle
        return handle

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
        handle = self._logger_for(subsystem, category)
        handle.log_text(
            message(),
            severity=_SEVERITY_MAP[level],
            source_location={"file": file, "line": line, "function": function},
        )

    def close(self) -> None:
        self._client.close()


def _load_client_factory() -> Callable[..., GCloudLoggingClient] | None:
    try:
        from google.cloud import logging as gcloud_logging
    except ImportError:
        logger.debug("cloud logging handler unavailable", reason="google-cloud-logging not installed")
        return None
    return gcloud_logging.Client


def _create_client(
    settings: LogBridgeSettings,
    client_factory: Callable[..., GCloudLoggingClient] | None = None,
) -> GCloudLoggingClient | None:
    if client_factory is None:
        client_factory = _load_client_factory()
        if client_factory is None:
            return None

    # Installed alongside google-cloud-logging.
    from google.auth.exceptions import GoogleAuthError

    try:
        return client_factory(project=settings.gcloud_project)
    except (GoogleAuthError, OSError) as exc:
        logger.debug("cloud logging handler unavailable", reason=str(exc))
        return None


def cloud_logging_handler(
    *,
    settings: LogBridgeSettings | None = None,
    client: GCloudLoggingClient | Any = None,
) -> CloudLoggingHandler | None:
    """Google Cloud Logging handler. Return `None` on non-supported platforms."""
    settings = settings or get_settings()
    if not platform_supported(settings):
        logger.debug("cloud logging handler unavailable", reason="platform not supported")
        return None

    if client is None:
        client = _create_client(settings)
    if client is None:
        return None
    return CloudLoggingHandler(client, log_name=settings.gcloud_log_name)
