from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


# -------------------------
# Data models
# -------------------------

@dataclass(frozen=True)
class Shift:
    # instants in ms since epoch (UTC)
    start_time: int
    end_time: int
    updated_time: Optional[int]

    store: Any
    department: Any
    role: Any

    paid_hours: Any         # hours, as sent by the backend ("duration")
    status: Optional[int]   # 0 normal, 1 updated; cancelled (2) never stored

    def to_dict(self) -> Dict[str, Any]:
        # key names match cache files written by earlier versions of the job
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "updatedTime": self.updated_time,
            "store": self.store,
            "department": self.department,
            "role": self.role,
            "paidHours": self.paid_hours,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Shift":
        return cls(
            start_time=int(d["startTime"]),
            end_time=int(d["endTime"]),
            updated_time=int(d["updatedTime"]) if d.get("updatedTime") is not None else None,
            store=d.get("store"),
            department=d.get("department"),
            role=d.get("role"),
            paid_hours=d.get("paidHours"),
            status=d.get("status"),
        )


@dataclass
class Storage:
    """Persisted state: last session token plus every known shift."""

    token: Optional[str] = None
    shifts: List[Shift] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.token is not None:
            out["token"] = self.token
        out["shifts"] = [s.to_dict() for s in self.shifts]
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Storage":
        if not isinstance(d, dict):
            raise TypeError(f"storage must be a JSON object, got {type(d).__name__}")
        token = d.get("token")
        shifts = d.get("shifts", [])
        if not isinstance(shifts, list):
            raise TypeError("storage 'shifts' must be a list")
        decoded: List[Shift] = []
        for i, raw in enumerate(shifts):
            # one unreadable record (e.g. "endTime": null) must not cost the rest
            try:
                decoded.append(Shift.from_dict(raw))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable cached shift #%d: %r", i, exc)
        return cls(token=str(token) if token else None, shifts=decoded)
