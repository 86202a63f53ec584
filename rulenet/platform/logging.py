"""
structlog setup for applications and scripts.

The library only calls ``structlog.get_logger``; it never configures logging
on import. Call ``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
from typing import TextIO

import structlog

from rulenet.platform.config import Settings, load_settings


def configure_logging(
    settings: Settings | None = None,
    stream: TextIO | None = None,
) -> Settings:
    """
    Configure structlog from settings (loaded from the environment if None).

    ``stream`` receives the rendered lines; None means stdout. Scripts that
    print machine-readable output on stdout should pass ``sys.stderr``.

    Returns the settings that were applied.
    """
    settings = settings or load_settings()

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
    return settings
