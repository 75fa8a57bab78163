"""
Conversion between instants and wall-clock readings.

Instants are timezone-aware datetimes normalised to UTC; wall-clock readings
are naive datetimes. A reading only names an instant together with a zone,
and readings inside a DST gap or overlap are resolved the same way every
time:

* gap readings are pushed forward by the length of the gap
  (02:30 on a spring-forward night becomes 03:30 in the new offset);
* overlap readings take the earlier offset (the first occurrence).

Callers that need the other interpretation must classify the reading with
``AmbiguityStatus.of`` first.

The ``convert_*`` functions taking a numeric hour offset are kept only to
migrate data stored before zones were identified by name. They emit
``DeprecationWarning``.
"""

import warnings
from datetime import datetime, timedelta, timezone, tzinfo

from .special import is_special_time
from .timezone import to_utc_instant
from .zone_ids import fixed_offset_zone
from .zone_rules import get_zone_rule_provider


def convert_local_datetime_to_instant(
    reading: datetime | None, zone: tzinfo
) -> datetime | None:
    """
    Convert a wall-clock reading in ``zone`` to a UTC instant.

    Args:
        reading: Naive wall-clock date-time, or None
        zone: Zone the reading is interpreted in (required)

    Returns:
        The instant in UTC, or None if ``reading`` is None

    Examples:
        >>> from zoneinfo import ZoneInfo
        >>> convert_local_datetime_to_instant(datetime(2024, 3, 10, 2, 30), ZoneInfo("America/New_York"))
        datetime.datetime(2024, 3, 10, 7, 30, tzinfo=datetime.timezone.utc)
    """
    if reading is None:
        return None
    # fold=0 gives the pre-transition offset: gap pushed forward, overlap earlier
    return reading.replace(tzinfo=zone, fold=0).astimezone(timezone.utc)


def convert_instant_to_local_datetime(
    instant: datetime | None, zone: tzinfo
) -> datetime | None:
    """
    Convert an instant to the wall-clock reading it shows in ``zone``.

    A naive ``instant`` is taken to be in the process default zone.

    Returns:
        The naive wall-clock reading, or None if ``instant`` is None
    """
    if instant is None:
        return None
    return to_utc_instant(instant).astimezone(zone).replace(tzinfo=None, fold=0)


def get_instant_days_offset_from_now(offset_in_days: int) -> datetime:
    """Instant ``offset_in_days`` days from now (negative for the past)."""
    return datetime.now(timezone.utc) + timedelta(days=offset_in_days)


def _warn_deprecated(name: str, replacement: str) -> None:
    warnings.warn(
        f"{name} is deprecated, use {replacement} instead",
        DeprecationWarning,
        stacklevel=3,
    )


def _zone_for_offset_hours(offset_hours: float) -> tzinfo:
    return fixed_offset_zone(timedelta(seconds=int(offset_hours * 60 * 60)))


def _legacy_face_value(value: datetime) -> datetime:
    """Legacy values carry the local reading as their UTC face value."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def convert_to_zone_id(offset_hours: float) -> tzinfo:
    """
    Fixed offset zone for a legacy numeric offset in hours.

    Deprecated: store and pass zone identifiers instead.
    """
    _warn_deprecated("convert_to_zone_id", "a zone identifier")
    return _zone_for_offset_hours(offset_hours)


def convert_to_offset(zone: tzinfo) -> float:
    """
    Inverse of ``convert_to_zone_id``: current offset of ``zone`` in hours.

    Deprecated: store and pass zone identifiers instead.
    """
    _warn_deprecated("convert_to_offset", "a zone identifier")
    offset = get_zone_rule_provider().offset_at(datetime.now(timezone.utc), zone)
    return offset.total_seconds() / 60 / 60


def convert_to_user_time_zone(
    value: datetime | None, offset_hours: float
) -> datetime | None:
    """
    Shift ``value`` by a legacy offset, in whole milliseconds.

    Deprecated: a user time zone is a view of an instant and belongs in
    formatting, see ``format_instant``.
    """
    _warn_deprecated("convert_to_user_time_zone", "format_instant")
    if value is None:
        return None
    return value + timedelta(milliseconds=int(60 * 60 * 1000 * offset_hours))


def now(offset_hours: float) -> datetime:
    """
    Current time shifted by a legacy offset.

    The result is an aware UTC datetime whose face value is the local reading,
    the shape legacy session data was stored in.
    """
    _warn_deprecated("now", "get_system_now")
    return datetime.now(timezone.utc) + timedelta(
        milliseconds=int(60 * 60 * 1000 * offset_hours)
    )


def convert_local_date_to_utc(
    local_date: datetime | None, offset_hours: float
) -> datetime | None:
    """
    Convert a legacy local value to a UTC instant by its numeric offset.

    The UTC face value of ``local_date`` is the wall-clock reading in the
    legacy zone. Special instants are markers rather than times and are
    returned unchanged.

    Deprecated: only needed until all stored session data has been migrated
    to UTC.

    Args:
        local_date: Legacy value (aware, or naive and taken as UTC face value)
        offset_hours: Legacy zone offset in hours, e.g. 5.5

    Returns:
        The UTC instant, ``local_date`` itself if it is special, or None
    """
    _warn_deprecated("convert_local_date_to_utc", "convert_local_datetime_to_instant")
    if local_date is None:
        return None

    face_value = _legacy_face_value(local_date)
    if is_special_time(face_value):
        return local_date

    return convert_local_datetime_to_instant(
        face_value.replace(tzinfo=None), _zone_for_offset_hours(offset_hours)
    )
