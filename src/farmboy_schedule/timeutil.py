"""
Civil time -> UTC instant conversion.

Instants are integer milliseconds since the Unix epoch throughout the package,
which is also what ends up in the JSON cache.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ParseError, ZoneError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

TZ_NAME_DEFAULT = "America/Toronto"


def get_zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ZoneError(f"Unknown time zone: {tz_name!r}") from exc


def to_ms(dt: datetime) -> int:
    # timedelta arithmetic keeps exact integer milliseconds (no float rounding)
    return (dt - EPOCH) // timedelta(milliseconds=1)


def from_ms(ms: int) -> datetime:
    return EPOCH + timedelta(milliseconds=ms)


def now_ms() -> int:
    return to_ms(datetime.now(timezone.utc))


def normalize(civil: Any, tz_name: str = TZ_NAME_DEFAULT) -> int:
    """
    Interpret `civil` (ISO 8601 text, e.g. "2024-07-15T09:00:00") as wall-clock
    time in `tz_name` and return the absolute instant in ms.

    A string that already carries an offset ("...+00:00", "...Z") keeps it.
    Ambiguous wall times (fall back) resolve to the first occurrence; times in
    the spring-forward gap use the offset in force before the transition.
    """
    zone = get_zone(tz_name)
    if not isinstance(civil, str):
        raise ParseError(f"Expected a timestamp string, got {civil!r}")
    try:
        parsed = datetime.fromisoformat(civil.strip())
    except ValueError as exc:
        raise ParseError(f"Cannot parse timestamp {civil!r}") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=zone, fold=0)
    return to_ms(parsed)


def ics_utc(ms: int) -> str:
    # 20240715T130000Z
    return from_ms(ms).strftime("%Y%m%dT%H%M%SZ")
