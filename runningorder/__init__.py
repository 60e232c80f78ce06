"""
Festival running order (days -> stages -> events) scraped from the
MetalDays line-up page.
"""

from runningorder.errors import DocumentParseError, ParseError, StructureMismatch, TimeFormatError
from runningorder.model import Day, Event, RunningOrder, Stage, TimeStamps
from runningorder.parse import parse_running_order

__all__ = [
    "Day",
    "DocumentParseError",
    "Event",
    "ParseError",
    "RunningOrder",
    "Stage",
    "StructureMismatch",
    "TimeFormatError",
    "TimeStamps",
    "parse_running_order",
]
