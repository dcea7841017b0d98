# tripstats/services/config_svc.py
from __future__ import annotations

import logging
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..db import _read_config_yaml, get_db_path
from .trip_store import TripStore

logger = logging.getLogger(__name__)

DEFAULTS = {
    "timezone": "UTC",
}


def get_config() -> dict:
    cfg = _read_config_yaml()
    return {
        "db_path": get_db_path(),
        "timezone": cfg.get("timezone", DEFAULTS["timezone"]),
    }


def resolve_tz(name: str | None) -> tzinfo:
    """IANA zone for reporting; unknown names fall back to UTC."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning("Unknown timezone %r, using UTC: %s", name, e)
        return timezone.utc


def get_store() -> TripStore:
    cfg = get_config()
    return TripStore(cfg["db_path"], tz=resolve_tz(cfg["timezone"]))
