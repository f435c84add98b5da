"""
Self diagnostics for logbridge internals.

Internal events never travel through the dispatcher, so an installed handler
is never re-entered by the facility itself. They are rendered by structlog
and handed to the stdlib logger of the same name, leaving the host
application in charge of whether they show up.
"""

import logging

import structlog

ROOT_LOGGER_NAME = "logbridge"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger bound to a stdlib logger."""
    return structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER_NAME),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
