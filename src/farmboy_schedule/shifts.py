"""
Raw schedule rows -> Shift records, and merging them into the cache.

Raw rows look like (backend JSON, civil times in America/Toronto):

    {"startTime": "2024-07-15T09:00:00", "endTime": "2024-07-15T17:30:00",
     "updated_at": "2024-07-10T12:34:56.789+00:00", "store": "Kanata",
     "department": "Produce", "role": "Clerk", "duration": 8,
     "status": 0, "id": 1234, "workDate": "2024-07-15"}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from .models import Shift
from .timeutil import TZ_NAME_DEFAULT, normalize

logger = logging.getLogger(__name__)

STATUS_UPDATED = 1
STATUS_CANCELLED = 2


def is_cancelled(raw: Dict[str, Any]) -> bool:
    return raw.get("status") == STATUS_CANCELLED


def map_shift(raw: Dict[str, Any], tz_name: str = TZ_NAME_DEFAULT) -> Shift:
    updated_at = raw.get("updated_at")
    return Shift(
        start_time=normalize(raw.get("startTime"), tz_name),
        end_time=normalize(raw.get("endTime"), tz_name),
        updated_time=normalize(updated_at, tz_name) if updated_at is not None else None,
        store=raw.get("store"),
        department=raw.get("department"),
        role=raw.get("role"),
        paid_hours=raw.get("duration"),
        status=raw.get("status"),
    )


def map_and_filter(
    raw_shifts: Iterable[Dict[str, Any]],
    run_instant: int,
    tz_name: str = TZ_NAME_DEFAULT,
) -> List[Shift]:
    """
    Drop cancelled rows, map the rest to Shift, keep only shifts starting
    strictly after `run_instant`. Input order is preserved (the API already
    returns rows ordered by start time, nulls last).
    """
    out: List[Shift] = []
    for raw in raw_shifts:
        if is_cancelled(raw):
            continue
        if raw.get("startTime") is None:
            # unscheduled row, can never be upcoming
            logger.debug("Skipping shift without start time: id=%s", raw.get("id"))
            continue
        shift = map_shift(raw, tz_name)
        if shift.start_time > run_instant:
            out.append(shift)
    return out


def merge(cached: Iterable[Shift], fresh: Iterable[Shift], run_instant: int) -> List[Shift]:
    """
    Keep cached shifts that have already started, then append the fresh ones.

    Cached future shifts are always replaced by the latest fetch, even when
    that fetch is empty.
    """
    kept = [s for s in cached if run_instant >= s.start_time]
    return kept + list(fresh)
