"""Logging configuration for the application."""

import logging
import sys
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Route log records to stdout at the configured level.

    Falls back to INFO when the level name is not recognised.
    """
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
