"""
Centralized logging configuration for the travel agency processor.
"""

import logging
import sys
from typing import Optional, TextIO

from travel_agency.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None, stream: TextIO = sys.stdout) -> None:
    """
    Configure the root logger with a single stream handler.

    Args:
        level: Level name (e.g. "DEBUG"); defaults to settings.log_level
        stream: Where log records go; the stdin runner passes stderr so the
            report on stdout stays clean
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.log_level).upper())

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)
