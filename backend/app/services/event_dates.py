from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dtparser

from app.core.club_config import CUSTOM_DATETIME_FORMATS
from app.core.errors import MalformedInputError

logger = logging.getLogger(__name__)


def _as_naive_utc(dt: datetime) -> datetime:
    # Stored columns are naive; aware inputs are normalised to UTC first
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def parse_event_datetime(value) -> Optional[datetime]:
    """
    Parse an event time: ISO-8601 first, then "DD.MM.YYYY HH:mm", then "DD.MM.YYYY".
    Returns None when nothing matches (never raises).
    """
    if isinstance(value, datetime):
        return _as_naive_utc(value)
    if not isinstance(value, str) or not value.strip():
        return None

    raw = value.strip()
    try:
        return _as_naive_utc(dtparser.isoparse(raw))
    except (ValueError, OverflowError):
        pass

    for fmt in CUSTOM_DATETIME_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None


def resolve_event_datetime(value, current: Optional[datetime], *, field: str, strict: bool = False) -> Optional[datetime]:
    """
    Value to store for an event time on update.

    Missing input keeps `current`. Unparseable input also keeps `current`
    (logged), unless strict is on, in which case MalformedInputError is raised.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return current

    parsed = parse_event_datetime(value)
    if parsed is not None:
        return parsed

    if strict:
        raise MalformedInputError(f"Could not parse {field}: {value!r}")

    logger.warning("Could not parse %s=%r, keeping stored value %s", field, value, current)
    return current


def require_event_datetime(value, *, field: str) -> datetime:
    parsed = parse_event_datetime(value)
    if parsed is None:
        raise MalformedInputError(f"Could not parse {field}: {value!r}")
    return parsed
