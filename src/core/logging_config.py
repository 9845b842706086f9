"""Structured logging configuration.

This module initializes structlog with a stable structured format.
Container code logs soft failures here and never branches on it.
"""

from __future__ import annotations

from typing import Any

import structlog

_CONFIGURED = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with JSON output.
    """
    _configure_structlog()
    return structlog.get_logger(name)


def _configure_structlog() -> None:
    """Apply the shared processor chain once per process."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        # capture_logs in tests swaps processors, which cached loggers ignore
        cache_logger_on_first_use=False,
    )
    _CONFIGURED = True
