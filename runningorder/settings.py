"""
Configuration defaults.

Values come from the environment so deployments can point the tool at a
different page or zone without code changes. Nothing here is mutated at
runtime; callers pass the values they need explicitly.
"""

from __future__ import annotations

import os
from datetime import date
from zoneinfo import ZoneInfo


DEFAULT_URL = "http://www.metaldays.net/Line_up"
# The festival takes place in Tolmin, Slovenia.
DEFAULT_TIMEZONE = "Europe/Ljubljana"
DEFAULT_TIMEOUT = 30.0


def running_order_url() -> str:
    return os.getenv("RUNNINGORDER_URL", DEFAULT_URL)


def timezone_name() -> str:
    return os.getenv("RUNNINGORDER_TZ", DEFAULT_TIMEZONE)


def request_timeout() -> float:
    raw = os.getenv("RUNNINGORDER_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT


def load_timezone(name: str | None = None) -> ZoneInfo:
    """
    Load the festival timezone. Raises ZoneInfoNotFoundError for unknown names.
    """
    return ZoneInfo(name or timezone_name())


def current_year() -> int:
    return date.today().year
