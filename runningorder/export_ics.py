"""
iCalendar (.ics) export.

Every scheduled event of a running order becomes one VEVENT. Times are
written in UTC, so calendar apps show them in the viewer's own zone.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from runningorder.model import RunningOrder


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_utc(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _uid(stage: str, start: int, label: str) -> str:
    slug = "-".join(f"{stage} {label}".lower().split())
    return f"{start}-{slug}@runningorder"


def export_running_order_to_ics(ro: RunningOrder, out_path: str | Path) -> int:
    """
    Export scheduled events to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//runningorder//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    count = 0
    for _, stage, event in ro.iter_events():
        if event.timestamps is None:
            continue

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_ics_escape(_uid(stage.label, event.timestamps.start, event.label))}")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART:{_dt_utc(event.timestamps.start)}")
        lines.append(f"DTEND:{_dt_utc(event.timestamps.end)}")
        lines.append(f"SUMMARY:{_ics_escape(event.label)}")
        lines.append(f"LOCATION:{_ics_escape(stage.label)}")
        if event.url:
            lines.append(f"URL:{event.url}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
