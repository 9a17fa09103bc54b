from __future__ import annotations

import logging
from datetime import datetime, timezone
from unittest import mock

import pytest
import requests

from farmboy_schedule.config import Settings
from farmboy_schedule.models import Shift

HOUR = 3_600_000

# 2024-07-01 12:00 UTC (08:00 in Toronto)
RUN_INSTANT = int(datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture
def run_instant() -> int:
    return RUN_INSTANT


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_host="api.example.test",
        api_key="anon-key",
        username="worker@example.test",
        password="hunter2",
        run_instant=RUN_INSTANT,
        storage_path=str(tmp_path / "scheduleData.json"),
        ics_path=str(tmp_path / "schedule.ics"),
    )


def make_shift(start: int, hours: float = 8, status: int = 0, **kw) -> Shift:
    fields = dict(
        start_time=start,
        end_time=start + int(hours * HOUR),
        updated_time=start - 24 * HOUR,
        store="Kanata",
        department="Produce",
        role="Clerk",
        paid_hours=hours - 0.5,
        status=status,
    )
    fields.update(kw)
    return Shift(**fields)


def raw_shift(start: str, end: str, status: int = 0, **kw) -> dict:
    row = {
        "startTime": start,
        "endTime": end,
        "updated_at": "2024-06-20T15:00:00.123456+00:00",
        "store": "Kanata",
        "department": "Produce",
        "role": "Clerk",
        "duration": 7.5,
        "status": status,
        "id": 1,
        "workDate": start[:10],
    }
    row.update(kw)
    return row


def fake_response(payload=None, status_code: int = 200):
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Client Error")
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def root_log_level():
    """Put the root logger level back after code that reconfigures logging."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture
def session():
    return mock.Mock(spec=requests.Session)
