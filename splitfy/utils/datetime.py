"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from splitfy.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    Falls back to UTC when ``APP_TIMEZONE`` is empty or cannot be resolved.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        return ZoneInfo(_DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``.

    ``DateTime`` columns are declared without timezone support, so the
    localized naive representation is what gets stored.
    """

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def trailing_days(reference: datetime, days: int) -> list[date]:
    """Return the ``days`` calendar dates ending at ``reference`` (oldest first)."""

    end = reference.date()
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def start_of_day(value: datetime) -> datetime:
    """Truncate ``value`` to midnight, keeping its ``tzinfo``."""

    return value.replace(hour=0, minute=0, second=0, microsecond=0)
