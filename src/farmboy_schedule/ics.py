"""
ICS rendering for the schedule feed.

Output is fully determined by the shift list: no DTSTAMP, no UIDs, no
current-time dependency. Text values are written as-is unless escaping is
requested (see ics_escape).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Union

from .models import Shift
from .shifts import STATUS_UPDATED
from .timeutil import ics_utc

MS_PER_HOUR = 3_600_000


# -------------------------
# Small utilities
# -------------------------

def fmt_value(value: Any) -> str:
    """Numbers as 8 / 7.5 (never 8.0), None as null, everything else str()."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def ics_escape(text: str) -> str:
    # Escape per RFC5545 for TEXT values
    text = text.replace("\\", "\\\\")
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\n", "\\n")
    text = text.replace(";", r"\;")
    text = text.replace(",", r"\,")
    return text


# -------------------------
# ICS helpers
# -------------------------

def ics_calendar_header() -> List[str]:
    return [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "CALSCALE:GREGORIAN",
        "PRODID:-//IDK//IDK//EN",
        "X-WR-CALNAME:Farm Boy Schedule",
        "X-APPLE-CALENDAR-COLOR:#FF2968",
        "REFRESH-INTERVAL;VALUE=DURATION:PT4H",
        "X-PUBLISHED-TTL:PT4H",
    ]


def ics_calendar_footer() -> List[str]:
    return ["END:VCALENDAR"]


def shift_summary(shift: Shift) -> str:
    hours = (shift.end_time - shift.start_time) / MS_PER_HOUR
    summary = f"Farm Boy ({fmt_value(hours)} hour shift)"
    if shift.status == STATUS_UPDATED:
        summary += " Updated"
    return summary


def shift_location(shift: Shift) -> str:
    return (
        f"Location: {fmt_value(shift.store)}. "
        f"Department: {fmt_value(shift.department)}. "
        f"Role: {fmt_value(shift.role)}."
    )


def ics_event(shift: Shift, sequence: int, escape: bool = False) -> List[str]:
    text = ics_escape if escape else (lambda s: s)
    return [
        "BEGIN:VEVENT",
        f"DTSTART:{ics_utc(shift.start_time)}",
        f"DTEND:{ics_utc(shift.end_time)}",
        f"SUMMARY:{text(shift_summary(shift))}",
        f"LOCATION:{text(shift_location(shift))}",
        f"DESCRIPTION:{text('Paid hours: ' + fmt_value(shift.paid_hours))}",
        f"SEQUENCE:{sequence}",
        "STATUS:CONFIRMED",
        "END:VEVENT",
    ]


# -------------------------
# Rendering / output
# -------------------------

def render(shifts: Iterable[Shift], escape: bool = False) -> str:
    lines: List[str] = []
    lines.extend(ics_calendar_header())
    for i, shift in enumerate(shifts):
        lines.extend(ics_event(shift, i + 1, escape=escape))
    lines.extend(ics_calendar_footer())
    return "\r\n".join(lines) + "\r\n"


def write_ics(path: Union[str, Path], content: str) -> None:
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)
