"""
Backend access: password-grant login and schedule fetch.

The backend is a PostgREST-style API behind a token endpoint:

    POST https://{host}/auth/v1/token?grant_type=password   -> {"access_token": ...}
    GET  https://{host}/rest/v1/schedules?select=...         -> [raw shift, ...]
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from .config import Settings
from .errors import AuthError, FetchError

logger = logging.getLogger(__name__)

CLIENT_ID = "farmboy-schedule-creator/1.0.0, https://github.com/adryd325/farmboy-schedule-creator"

TOKEN_PATH = "/auth/v1/token?grant_type=password"
SCHEDULE_PATH = (
    "/rest/v1/schedules"
    "?select=startTime,endTime,role,store,department,workDate,id,duration,status,updated_at"
    "&order=startTime.asc.nullslast"
)


def common_headers(api_key: Optional[str]) -> Dict[str, str]:
    headers = {
        "User-Agent": CLIENT_ID,
        "x-client-info": CLIENT_ID,
        "Accept-Language": "en-US,en;q=0.5",
        "Content-Type": "text/plain;charset=UTF-8",
    }
    if api_key is not None:
        headers["apiKey"] = api_key
    return headers


class ScheduleClient:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"https://{self.settings.api_host}{path}"

    def _headers(self, bearer: Optional[str]) -> Dict[str, str]:
        headers = common_headers(self.settings.api_key)
        headers["authorization"] = f"Bearer {bearer}"
        return headers

    def login(self) -> str:
        """Exchange username/password for a session token."""
        body = json.dumps({"email": self.settings.username, "password": self.settings.password})
        try:
            r = self.session.post(
                self._url(TOKEN_PATH),
                headers=self._headers(self.settings.api_key),
                data=body,
                timeout=self.settings.request_timeout,
            )
            r.raise_for_status()
            payload = r.json()
        except (requests.RequestException, ValueError) as exc:
            raise AuthError(f"Login failed: {exc}") from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise AuthError("Login response did not contain an access token")
        return str(token)

    def get_schedule(self, token: str) -> List[Dict[str, Any]]:
        try:
            r = self.session.get(
                self._url(SCHEDULE_PATH),
                headers=self._headers(token),
                timeout=self.settings.request_timeout,
            )
            r.raise_for_status()
            payload = r.json()
        except (requests.RequestException, ValueError) as exc:
            raise FetchError(f"Schedule fetch failed: {exc}") from exc

        if not isinstance(payload, list):
            raise FetchError(f"Expected a list of shifts, got {type(payload).__name__}")
        return payload

    def fetch(self, cached_token: Optional[str]) -> Tuple[List[Dict[str, Any]], str]:
        """
        Return (raw schedule, token used).

        Tries the cached token first; on any failure logs in once and retries.
        A failure after the fresh login propagates.
        """
        if cached_token:
            logger.info("Attempting to use cached token")
            try:
                return self.get_schedule(cached_token), cached_token
            except FetchError as exc:
                logger.info("Cached token rejected: %s", exc)

        logger.info("Logging in")
        token = self.login()
        return self.get_schedule(token), token
