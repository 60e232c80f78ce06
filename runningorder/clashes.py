"""
Clash detection.

Two events clash when their time ranges overlap:
    start < other_end AND end > other_start

Events without timestamps (not scheduled yet) never clash.
"""

from __future__ import annotations

from typing import Iterable

from runningorder.model import Event, RunningOrder


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def find_clashes(events: Iterable[Event]) -> list[tuple[Event, Event]]:
    """
    Find overlapping event pairs (A,B), each pair appears once, A before B
    in the given order.
    """
    scheduled = [e for e in events if e.timestamps is not None]

    clashes: list[tuple[Event, Event]] = []
    for i in range(len(scheduled)):
        a = scheduled[i]
        for j in range(i + 1, len(scheduled)):
            b = scheduled[j]
            if _overlaps(a.timestamps.start, a.timestamps.end, b.timestamps.start, b.timestamps.end):
                clashes.append((a, b))

    return clashes


def select_events(ro: RunningOrder, bands: Iterable[str] = ()) -> list[Event]:
    """
    Events of the running order, restricted to `bands` (case-insensitive)
    when any are given.
    """
    wanted = {b.strip().lower() for b in bands if b.strip()}
    out: list[Event] = []
    for _, _, event in ro.iter_events():
        if wanted and event.label.lower() not in wanted:
            continue
        out.append(event)
    return out
