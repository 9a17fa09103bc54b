from __future__ import annotations

import logging
import sys
from typing import Optional

import requests

from .api import ScheduleClient
from .config import Settings, build_settings
from .errors import ConfigurationError
from .ics import render, write_ics
from .models import Storage
from .shifts import map_and_filter, merge
from .storage import load_storage, save_storage

logger = logging.getLogger(__name__)


def run(settings: Settings, session: Optional[requests.Session] = None) -> Storage:
    storage = load_storage(settings.storage_path)

    client = ScheduleClient(settings, session=session)
    raw_schedule, token = client.fetch(storage.token)
    storage.token = token

    # Clean up data for our own use
    fresh = map_and_filter(raw_schedule, settings.run_instant, settings.timezone)
    logger.debug("Upcoming shifts: %s", fresh)

    storage.shifts = merge(storage.shifts, fresh, settings.run_instant)
    save_storage(settings.storage_path, storage)

    write_ics(settings.ics_path, render(storage.shifts, escape=settings.escape_text))
    logger.info(
        "Wrote %d shifts (%d upcoming) to %s", len(storage.shifts), len(fresh), settings.ics_path
    )
    return storage


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        settings = build_settings()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1
    logging.getLogger().setLevel(settings.log_level)

    run(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
