"""Logging configuration for the Job Tracker AI pipeline."""

import logging
import sys
from typing import Optional

from job_tracker_ai.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a stdout logger; level defaults to LOG_LEVEL from the environment."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        default_level = logging.getLevelName(LOG_LEVEL.upper())
        # Unknown names come back as "Level X" strings
        logger.setLevel(default_level if isinstance(default_level, int) else logging.INFO)
    if level is not None:
        logger.setLevel(level)
    return logger
