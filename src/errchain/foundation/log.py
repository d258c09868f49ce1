"""Library loggers.

errchain never configures logging on import. Every module logs through a child
of the ``errchain`` logger, which carries a NullHandler until the application
attaches its own handlers.
"""

from __future__ import annotations

import logging

from .config import get_settings

logger = logging.getLogger("errchain")
logger.addHandler(logging.NullHandler())


def get_logger(area: str) -> logging.Logger:
    """Logger for one library area, e.g. ``get_logger("chain")`` -> ``errchain.chain``."""
    return logger.getChild(area)


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Set the ``errchain`` logger level, defaulting to ``ERRCHAIN_LOG_LEVEL``."""
    logger.setLevel(level if level is not None else get_settings().log_level)
    return logger
