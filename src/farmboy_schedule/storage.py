from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from .errors import CacheLoadError
from .models import Storage

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_storage(path: PathLike) -> Storage:
    """Strict reader: any missing or malformed cache raises CacheLoadError."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        return Storage.from_dict(payload)
    except (OSError, ValueError, KeyError, TypeError) as exc:
        raise CacheLoadError(f"Cannot load storage from {path}: {exc}") from exc


def load_storage(path: PathLike) -> Storage:
    try:
        storage = read_storage(path)
    except CacheLoadError as exc:
        logger.info("Failed to read or parse data storage")
        logger.debug("%s", exc)
        return Storage()
    logger.debug("Loaded %d cached shifts from %s", len(storage.shifts), path)
    return storage


def save_storage(path: PathLike, storage: Storage) -> None:
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(storage.to_dict(), separators=(",", ":"))
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
