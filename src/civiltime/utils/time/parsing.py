"""
Parsing of date-time text.

Two kinds of parsing are kept apart:

* text typed by users (session form fields, zone names) fails softly and
  returns None, so callers can report a validation message;
* text produced by the system itself (``parse_instant``) must always be in
  the canonical format, and a failure raises ``AssumptionError``.

Malformed patterns are programming errors and raise ``PatternError`` in
both cases.
"""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Final

from ..core.exceptions import AssumptionError, ZoneRulesError
from .patterns import compile_pattern
from .zone_rules import get_zone_rule_provider


logger = logging.getLogger(__name__)

DEFAULT_DATE_TIME_FORMAT: Final = "yyyy-MM-dd h:mm a Z"
COMBINED_DATE_HOUR_FORMAT: Final = "EEE, dd MMM, yyyy H.mm"
SESSIONS_FORM_DATE_TIME_FORMAT: Final = "EEE, dd MMM, yyyy H m"

_default_date_time_format: str = DEFAULT_DATE_TIME_FORMAT


def get_default_date_time_format() -> str:
    """Canonical zoned format used by ``parse_instant``."""
    return _default_date_time_format


def set_default_date_time_format(pattern: str) -> None:
    """
    Change the canonical zoned format; meant for startup only.

    Raises:
        PatternError: If ``pattern`` is malformed
        ValueError: If ``pattern`` has no zone or offset field
    """
    global _default_date_time_format
    if not compile_pattern(pattern).has_zone_fields:
        raise ValueError(f"Default date-time format needs a zone field: {pattern}")
    if pattern != _default_date_time_format:
        logger.info(f"Default date-time format set to '{pattern}'")
    _default_date_time_format = pattern


def parse_local_datetime(text: str | None, pattern: str | None) -> datetime | None:
    """
    Parse a wall-clock reading from ``text`` according to ``pattern``.

    Zone fields in the pattern are read but not applied; the result is the
    local reading.

    Args:
        text: The string containing the date and time
        pattern: The pattern of the date and time string

    Returns:
        The parsed naive datetime, or None if either argument is None or the
        text does not match the pattern

    Examples:
        >>> parse_local_datetime("05/05/2012 14:04", "dd/MM/yyyy HH:mm")
        datetime.datetime(2012, 5, 5, 14, 4)
        >>> parse_local_datetime("not-a-date", "dd/MM/yyyy") is None
        True
    """
    if text is None or pattern is None:
        return None

    compiled = compile_pattern(pattern)
    try:
        value = compiled.parse(text)
    except ValueError:
        return None
    return value.replace(tzinfo=None)


def combine_date_time(input_date: str | None, input_time_hours: str | None) -> datetime | None:
    """
    Combine a session form date and an hour from 0 to 24.

    Hour 24 stands for 23:59 of the same date rather than midnight of the
    next one; any other hour is combined with minute 0.

    Args:
        input_date: Date in ``EEE, dd MMM, yyyy`` format
        input_time_hours: The hour, 0-24

    Returns:
        The reading at the given date and hour, or None on error

    Examples:
        >>> combine_date_time("Tue, 01 Apr, 2014", "24")
        datetime.datetime(2014, 4, 1, 23, 59)
    """
    if input_date is None or input_time_hours is None:
        return None

    if input_time_hours == "24":
        date_time_text = f"{input_date} 23.59"
    else:
        date_time_text = f"{input_date} {input_time_hours}.00"
    return parse_local_datetime(date_time_text, COMBINED_DATE_HOUR_FORMAT)


def parse_local_datetime_for_sessions_form(
    date: str | None, hour: str | None, minute: str | None
) -> datetime | None:
    """
    Parse separate date, hour and minute strings.

    Example: date ``Tue, 01 Apr, 2014``, hour ``23``, minute ``59``.

    Args:
        date: Date in ``EEE, dd MMM, yyyy`` format
        hour: Hour of day (0-23)
        minute: Minute of hour (0-59)

    Returns:
        The parsed reading, or None if any argument is None or invalid
    """
    if date is None or hour is None or minute is None:
        return None
    return parse_local_datetime(f"{date} {hour} {minute}", SESSIONS_FORM_DATE_TIME_FORMAT)


def parse_instant(date_time_text: str) -> datetime:
    """
    Parse an instant stored in the canonical zoned format.

    Only for text produced by this system; see ``get_default_date_time_format``.

    Returns:
        The instant in UTC

    Raises:
        AssumptionError: If the text is not in the canonical format
    """
    pattern = _default_date_time_format
    try:
        value = compile_pattern(pattern).parse(date_time_text)
    except (TypeError, ValueError) as e:
        raise AssumptionError(
            f"Date in String is in wrong format: {date_time_text!r} (expected '{pattern}')",
            context=date_time_text,
        ) from e

    if value.tzinfo is None:
        raise AssumptionError(
            f"Date in String has no zone: {date_time_text!r}",
            context=date_time_text,
        )
    return value.astimezone(timezone.utc)


def parse_zone_id(time_zone: str | None) -> tzinfo | None:
    """
    Resolve a zone identifier such as ``Asia/Singapore`` or ``UTC+04:00``.

    Returns:
        The zone, or None if ``time_zone`` is None or unknown
    """
    if time_zone is None:
        return None

    try:
        return get_zone_rule_provider().get_zone(time_zone)
    except ZoneRulesError:
        return None
