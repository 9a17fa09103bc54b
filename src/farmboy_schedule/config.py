"""
Run configuration.

Credentials come from the environment; everything else may be set in an
optional YAML file (config.yml, or the path in FB_CONFIG). The resulting
Settings object is built once per run and handed to each component.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigurationError
from .timeutil import TZ_NAME_DEFAULT, get_zone, now_ms

logger = logging.getLogger(__name__)

REQUIRED_ENV = ("FB_API_HOST", "FB_API_KEY", "FB_PASSWORD", "FB_USERNAME")

CONFIG_PATH_DEFAULT = "config.yml"
STORAGE_PATH_DEFAULT = "./scheduleData.json"
ICS_PATH_DEFAULT = "./schedule.ics"
REQUEST_TIMEOUT_DEFAULT = 30


@dataclass(frozen=True)
class Settings:
    api_host: Optional[str]
    api_key: Optional[str]
    username: Optional[str]
    password: Optional[str]

    run_instant: int  # ms since epoch, captured once at startup

    timezone: str = TZ_NAME_DEFAULT
    storage_path: str = STORAGE_PATH_DEFAULT
    ics_path: str = ICS_PATH_DEFAULT
    request_timeout: Optional[float] = REQUEST_TIMEOUT_DEFAULT
    escape_text: bool = False
    log_level: str = "INFO"


def check_env(env: Mapping[str, str]) -> List[str]:
    """
    Return the names of unset variables.

    Only two or more missing variables abort the run; a single missing one is
    reported and the run carries on without it.
    """
    missing = [name for name in REQUIRED_ENV if env.get(name) is None]
    if len(missing) > 1:
        message = "Missing the following environment variables: " + ", ".join(missing)
        raise ConfigurationError(message)
    if missing:
        logger.warning("Missing environment variable: %s", missing[0])
    return missing


def load_config(path: str = CONFIG_PATH_DEFAULT) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Cannot parse {path}: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(cfg).__name__}")
    return cfg


def _timeout(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"request_timeout must be a number, got {value!r}") from exc
    return timeout if timeout > 0 else None


def _log_level(value: Any) -> str:
    level = str(value or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log_level: {value!r}")
    return level


def build_settings(
    env: Optional[Mapping[str, str]] = None,
    cfg: Optional[Dict[str, Any]] = None,
    run_instant: Optional[int] = None,
) -> Settings:
    env = os.environ if env is None else env
    check_env(env)
    if cfg is None:
        cfg = load_config(env.get("FB_CONFIG") or CONFIG_PATH_DEFAULT)

    tz_name = str(cfg.get("timezone") or TZ_NAME_DEFAULT)
    # fail at startup rather than mid-run on a typo'd zone
    get_zone(tz_name)

    return Settings(
        api_host=env.get("FB_API_HOST"),
        api_key=env.get("FB_API_KEY"),
        username=env.get("FB_USERNAME"),
        password=env.get("FB_PASSWORD"),
        run_instant=now_ms() if run_instant is None else run_instant,
        timezone=tz_name,
        storage_path=str(cfg.get("storage_path") or STORAGE_PATH_DEFAULT),
        ics_path=str(cfg.get("ics_path") or ICS_PATH_DEFAULT),
        request_timeout=_timeout(cfg.get("request_timeout", REQUEST_TIMEOUT_DEFAULT)),
        escape_text=bool(cfg.get("escape_text", False)),
        log_level=_log_level(cfg.get("log_level")),
    )
