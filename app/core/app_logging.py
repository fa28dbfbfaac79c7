"""Logging configuration helpers."""

import logging

from app.core.config import settings


def configure_logging() -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("app")
    logger.setLevel(settings.LOG_LEVEL.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
