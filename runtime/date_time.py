"""User-facing date/time helpers: timezone and clock-format resolution plus rendering.

Env:
  USER_TIMEZONE     process-wide default timezone (falls back to TZ, then UTC)
  USER_TIME_FORMAT  process-wide default clock format, "12" or "24" (default: 12)
"""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from models.options import TimeFormat

__all__ = [
    "DEFAULT_TIMEZONE",
    "format_user_time",
    "load_timezone",
    "resolve_user_time_format",
    "resolve_user_timezone",
]

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

_UTC_ALIASES = {"UTC", "Z", "GMT", "ETC/UTC"}
# +05:30, -0800, UTC+5, GMT-03:00
_OFFSET_RE = re.compile(r"^(?:UTC|GMT)?\s*([+-])(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE)
_MAX_OFFSET = timedelta(hours=14)

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def load_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Return a tzinfo for an IANA name or fixed offset, or None when it cannot be loaded."""
    key = (name or "").strip()
    if not key:
        return None
    if key.upper() in _UTC_ALIASES:
        return timezone.utc
    m = _OFFSET_RE.match(key)
    if m:
        sign, hours, minutes = m.groups()
        minutes = int(minutes or 0)
        if minutes >= 60:
            return None
        delta = timedelta(hours=int(hours), minutes=minutes)
        if delta > _MAX_OFFSET:
            return None
        return timezone(-delta if sign == "-" else delta)
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


def _process_timezone() -> str:
    for var in ("USER_TIMEZONE", "TZ"):
        raw = os.getenv(var, "").strip().lstrip(":")
        if raw and load_timezone(raw) is not None:
            return raw
    return DEFAULT_TIMEZONE


def resolve_user_timezone(preference: Optional[str] = None) -> str:
    if preference and preference.strip():
        candidate = preference.strip()
        if load_timezone(candidate) is not None:
            return candidate
        logger.debug("Ignoring unknown timezone preference %r", preference)
    return _process_timezone()


def _coerce_time_format(value: Union[str, TimeFormat, None]) -> Optional[TimeFormat]:
    if isinstance(value, TimeFormat):
        return value
    if isinstance(value, str):
        try:
            return TimeFormat(value.strip())
        except ValueError:
            return None
    return None


def resolve_user_time_format(preference: Union[str, TimeFormat, None] = None) -> TimeFormat:
    """Map a "12"/"24" preference to TimeFormat, defaulting to USER_TIME_FORMAT or 12-hour."""
    resolved = _coerce_time_format(preference)
    if resolved is not None:
        return resolved
    return _coerce_time_format(os.getenv("USER_TIME_FORMAT")) or TimeFormat.TWELVE


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _clock(moment: datetime, time_format: TimeFormat) -> str:
    if time_format is TimeFormat.TWENTY_FOUR:
        return f"{moment.hour:02d}:{moment.minute:02d}"
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


def format_user_time(
    instant: datetime,
    timezone_name: str,
    time_format: Union[str, TimeFormat, None] = TimeFormat.TWELVE,
) -> Optional[str]:
    """Render ``instant`` as e.g. ``Wednesday, January 28th, 2026 at 8:31 PM``.

    Naive datetimes are taken as UTC. Returns None when the timezone cannot be
    loaded or the conversion fails; callers treat that as "no timestamp".
    """
    tz = load_timezone(timezone_name)
    if tz is None:
        logger.warning("Cannot format time for unknown timezone %r", timezone_name)
        return None
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    try:
        local = instant.astimezone(tz)
    except (OverflowError, ValueError) as exc:
        logger.warning("Cannot convert %s to %s: %s", instant, timezone_name, exc)
        return None
    clock = _clock(local, resolve_user_time_format(time_format))
    return (
        f"{_WEEKDAYS[local.weekday()]}, {_MONTHS[local.month - 1]} "
        f"{local.day}{_ordinal(local.day)}, {local.year} at {clock}"
    )
