"""
Turning day and event labels into absolute time ranges.

Day labels look like "Saturday 22.07." and carry no year, so the year is
always supplied by the caller. Event labels look like "22:30 - 00:00" or "-"
for events that have no slot yet.

All instants are computed in the festival timezone and returned as unix
timestamps.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, tzinfo
from typing import Optional

from runningorder.errors import TimeFormatError
from runningorder.model import TimeStamps


WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

DAY_LABEL_RE = re.compile(r"^(?P<weekday>[A-Za-z]+) (?P<day>\d{2})\.(?P<month>\d{2})\.$")
CLOCK_RE = re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})$")

UNSCHEDULED = "-"
RANGE_SEPARATOR = " - "

# Clock times before this hour belong to the night after the nominal day.
ROLLOVER_HOUR = 10

ONE_DAY = timedelta(days=1)


def day_start(year: int, label: str, tz: tzinfo) -> datetime:
    """
    Return midnight of the date named by `label` in `year`.
    """
    m = DAY_LABEL_RE.match(label)
    if not m:
        raise TimeFormatError(label, "expected '<Weekday> DD.MM.'")

    # Weekday names are matched case-insensitively.
    if m.group("weekday").capitalize() not in WEEKDAYS:
        raise TimeFormatError(label, f"unknown weekday {m.group('weekday')!r}")

    try:
        return datetime(year, int(m.group("month")), int(m.group("day")), tzinfo=tz)
    except ValueError as exc:
        raise TimeFormatError(label, str(exc)) from exc


def resolve_day_range(year: int, label: str, tz: tzinfo) -> TimeStamps:
    """
    Time range covering the whole calendar day named by `label`.

    The end is midnight of the following calendar day, so days with a DST
    switch are 23 or 25 hours long.
    """
    start = day_start(year, label, tz)
    # Adding to an aware datetime is wall clock arithmetic; the offset of the
    # result is looked up again.
    end = start + ONE_DAY
    return TimeStamps(int(start.timestamp()), int(end.timestamp()))


def _clock_time(value: str, day: datetime, label: str) -> datetime:
    m = CLOCK_RE.match(value)
    if not m:
        raise TimeFormatError(label, f"expected 'HH:MM', got {value!r}")

    hour = int(m.group("hour"))
    minute = int(m.group("minute"))
    if hour > 23 or minute > 59:
        raise TimeFormatError(label, f"{value!r} is out of range")

    instant = day.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if instant.hour < ROLLOVER_HOUR:
        instant = instant + ONE_DAY

    return instant


def resolve_event_range(day: datetime, label: str) -> Optional[TimeStamps]:
    """
    Time range of an event on the day starting at `day` (an aware datetime).

    Returns None for the "-" placeholder. Times before 10:00 are moved to the
    next calendar day since the shows run past midnight.
    """
    if label.strip() == UNSCHEDULED:
        return None

    parts = label.split(RANGE_SEPARATOR)
    if len(parts) != 2:
        raise TimeFormatError(label, f"expected 'HH:MM{RANGE_SEPARATOR}HH:MM'")

    start = _clock_time(parts[0], day, label)
    end = _clock_time(parts[1], day, label)

    return TimeStamps(int(start.timestamp()), int(end.timestamp()))


def day_from_timestamp(timestamp: int, tz: tzinfo) -> datetime:
    return datetime.fromtimestamp(timestamp, tz)
