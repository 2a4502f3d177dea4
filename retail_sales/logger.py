import logging
import os
import sys
from typing import Optional

_configured = set()


def setup_logger(name: str = "retail_sales", level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger instance for a pipeline stage.

    The level defaults to the LOG_LEVEL environment variable (INFO if unset).
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)

    _configured.add(name)
    return logger


def set_level(level: str) -> None:
    """Apply a level to every logger created through setup_logger."""
    for name in _configured:
        logging.getLogger(name).setLevel(level.upper())
