"""
Process default time zone.

The default zone is what "now" is measured in when no zone is given. It is
configured once during startup (``civiltime.bootstrap``) and only read
afterwards; it defaults to UTC.
"""

import logging
from datetime import datetime, timezone, tzinfo

from .zone_ids import same_zone, zone_key


logger = logging.getLogger(__name__)

_system_timezone: tzinfo = timezone.utc


def get_system_timezone() -> tzinfo:
    """
    Get the process default time zone.

    Examples:
        >>> zone_key(get_system_timezone())
        'UTC'
    """
    return _system_timezone


def set_system_time_zone_if_required(zone: tzinfo) -> bool:
    """
    Set the process default time zone if it differs from ``zone``.

    Args:
        zone: The configured default zone

    Returns:
        True if the default zone was changed, False if it already matched
    """
    global _system_timezone
    original = _system_timezone
    if same_zone(original, zone):
        return False

    _system_timezone = zone
    logger.info(f"Time zone set to {zone_key(zone)} (was {zone_key(original)})")
    return True


def get_system_now() -> datetime:
    """
    Get the current datetime in the process default time zone.

    Returns:
        Current datetime (timezone-aware)
    """
    return datetime.now(_system_timezone)


def ensure_timezone_aware(dt: datetime) -> datetime:
    """
    Ensure a datetime object is timezone-aware.

    A naive datetime is assumed to be in the process default time zone; an
    aware one is returned unchanged.

    Examples:
        >>> naive_dt = datetime(2025, 7, 25, 14, 30, 0)
        >>> ensure_timezone_aware(naive_dt).tzinfo is not None
        True
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=_system_timezone)
    return dt


def to_utc_instant(dt: datetime) -> datetime:
    """Normalise an aware (or default-zone naive) datetime to a UTC instant."""
    return ensure_timezone_aware(dt).astimezone(timezone.utc)
