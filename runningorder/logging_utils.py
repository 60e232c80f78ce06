"""
Logging setup.

Library modules only ask for a logger; handlers are installed once by the
command line entry point.
"""

from __future__ import annotations

import logging
import os
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def level_from_env() -> str:
    level = os.getenv("LOG_LEVEL")
    if level:
        return level.upper()
    return "DEBUG" if os.getenv("DEBUG", "0") == "1" else "WARNING"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Send log records to stderr. Does nothing if the root logger already has
    handlers (e.g. when embedded in another application).
    """
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=level or level_from_env(), format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
