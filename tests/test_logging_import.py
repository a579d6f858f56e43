"""
Test that the structlog logger can be imported and used.
"""

from __future__ import annotations


def test_logging_import():
    from phishcheck_app.logger import get_logger

    logger = get_logger("test")
    assert logger is not None
    for level in ("info", "debug", "warning", "error"):
        assert hasattr(logger, level)
    logger.info("test_message", key="value")
