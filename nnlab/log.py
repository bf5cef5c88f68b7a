"""
Logging helpers.

Modules obtain their logger with ``get_logger(__name__)``. Events go through
structlog to the standard library logger of the same name, and the ``nnlab``
logger only has a NullHandler until an application calls
``configure_logging``.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

import structlog  # type: ignore[import-untyped]

ROOT_LOGGER = "nnlab"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str = ROOT_LOGGER):
    """Return a structlog logger wrapping the stdlib logger ``name``."""
    return structlog.wrap_logger(logging.getLogger(name),
                                 wrapper_class=structlog.stdlib.BoundLogger)


def _timestamp_processor(logger, method_name, event_dict):
    """Add a short UTC timestamp."""
    event_dict["timestamp"] = datetime.now(timezone.utc).strftime("%H:%M:%S")
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """
    Configure human-readable console output for nnlab events.

    Args:
        level: Minimum level to emit ("DEBUG", "INFO", "WARNING", ...)
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            _timestamp_processor,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger(ROOT_LOGGER)
    for old in list(root.handlers):
        if not isinstance(old, logging.NullHandler):
            root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))
    root.propagate = False
