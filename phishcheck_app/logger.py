# phishcheck_app/logger.py
"""
structlog setup for the analyzer.

Each event is rendered with its name under event_type, plus level, an ISO
UTC timestamp and the emitting module. LOG_FORMAT=console switches the JSON
renderer for a human-readable one; LOG_LEVEL filters.
"""

import logging
import os
import sys

import structlog


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(event_key="event_type", colors=sys.stderr.isatty())
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("event_type"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging(os.getenv("LOG_LEVEL", "INFO"), os.getenv("LOG_FORMAT", "json").strip().lower())


def get_logger(name: str):
    """Logger bound to the module name: get_logger(__name__).info("analysis_requested", url=url)."""
    return structlog.get_logger(name).bind(logger=name)
