"""
Central data model definitions used across the project.

A RunningOrder holds Days, a Day holds Stages, a Stage holds Events. The
objects are built once per parse and not changed afterwards.

The `node` fields point into the parsed document and are only used while
the running order is being extracted; they are cleared before the result is
returned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bs4.element import Tag


@dataclass(frozen=True)
class TimeStamps:
    """
    Two unix timestamps marking the start and the end of a time span.
    """

    start: int
    end: int

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass
class Event:
    """
    One slot on a stage, normally a band.
    """

    time: str
    timestamps: Optional[TimeStamps]
    label: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "timestamps": self.timestamps.to_dict() if self.timestamps else None,
            "label": self.label,
            "url": self.url,
        }


@dataclass
class Stage:
    label: str
    events: List[Event] = field(default_factory=list)
    node: Optional[Tag] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class Day:
    """
    One festival day. `label` is the date as printed on the page, e.g.
    "Saturday 22.07.".
    """

    label: str
    stages: List[Stage] = field(default_factory=list)
    timestamps: Optional[TimeStamps] = None
    node: Optional[Tag] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "stages": [s.to_dict() for s in self.stages],
            "timestamps": self.timestamps.to_dict() if self.timestamps else None,
        }


@dataclass
class RunningOrder:
    days: List[Day] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"days": [d.to_dict() for d in self.days]}

    def iter_events(self):
        """
        Yield (day, stage, event) for every event in document order.
        """
        for day in self.days:
            for stage in day.stages:
                for event in stage.events:
                    yield day, stage, event
