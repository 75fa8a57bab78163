"""
Display formatting of wall-clock readings and instants.

Formatting is best-effort: a missing value or pattern renders as an empty
string so that a page with incomplete data still renders. Exactly 12:00 is
shown as ``NOON`` in place of the AM/PM marker.
"""

from datetime import datetime, tzinfo
from typing import Final

from .patterns import compile_pattern, substitute_meridiem
from .sessions_form import adjust_local_datetime_for_sessions_form_inputs
from .timezone import to_utc_instant


NOON: Final = "NOON"

DATE_FORMAT: Final = "dd/MM/yyyy"
SESSIONS_FORM_DATE_FORMAT: Final = "EEE, dd MMM, yyyy"
TIME_12H_FORMAT: Final = "EEE, dd MMM yyyy, hh:mm a"
SESSIONS_DATE_TIME_FORMAT: Final = "EEE, dd MMM yyyy, hh:mm a z"
DISAMBIGUATION_DATE_TIME_FORMAT: Final = "EEE, dd MMM yyyy, hh:mm a z ('UTC'xxx)"
INSTRUCTOR_HOME_PAGE_FORMAT: Final = "d MMM h:mm a"
INSTRUCTOR_COURSES_PAGE_FORMAT: Final = "d MMM yyyy"
ACTIVITY_LOG_TIME_FORMAT: Final = "dd/MM/yyyy HH:mm:ss.SSS"


def _format(value: datetime, pattern: str) -> str:
    if value.hour == 12 and value.minute == 0:
        pattern = substitute_meridiem(pattern, NOON)
    return compile_pattern(pattern).format(value)


def format_local_datetime(reading: datetime | None, pattern: str | None) -> str:
    """
    Format a wall-clock reading according to ``pattern``.

    Args:
        reading: Naive wall-clock date-time, or None
        pattern: Date-time pattern, or None

    Returns:
        The formatted text, or "" if either argument is None

    Raises:
        PatternError: If ``pattern`` is malformed or needs a zone

    Examples:
        >>> format_local_datetime(datetime(2012, 5, 5, 12, 0), "hh:mm a")
        '12:00 NOON'
    """
    if reading is None or pattern is None:
        return ""
    return _format(reading, pattern)


def format_instant(instant: datetime | None, zone: tzinfo | None, pattern: str | None) -> str:
    """
    Format ``instant`` as seen in ``zone`` according to ``pattern``.

    Returns:
        The formatted text, or "" if any argument is None

    Raises:
        OverflowError: If the view in ``zone`` falls outside the years
            1-9999 that ``datetime`` can represent, e.g. 9999-12-31 23:59 UTC
            seen east of UTC
    """
    if instant is None or zone is None or pattern is None:
        return ""
    return _format(to_utc_instant(instant).astimezone(zone), pattern)


def format_date(reading: datetime | None) -> str:
    """Format as ``dd/MM/yyyy``, e.g. ``05/05/2012``."""
    return format_local_datetime(reading, DATE_FORMAT)


def format_date_for_sessions_form(reading: datetime | None) -> str:
    """Format as ``EEE, dd MMM, yyyy``, e.g. ``Sat, 05 May, 2012``."""
    return format_local_datetime(reading, SESSIONS_FORM_DATE_FORMAT)


def adjust_and_format_date_for_sessions_form_inputs(reading: datetime | None) -> str:
    """
    Snap ``reading`` to a session form value, then format its date part.

    Snapping can move the date back a day (00:10 becomes 23:59 of the
    previous day), so the date shown is that of the adjusted reading.
    """
    return format_date_for_sessions_form(
        adjust_local_datetime_for_sessions_form_inputs(reading)
    )


def format_time_12h(reading: datetime | None) -> str:
    """
    Format as ``EEE, dd MMM yyyy, hh:mm a``.

    Example: ``Sat, 05 May 2012, 02:04 PM``; 12:00 PM is shown as
    ``12:00 NOON``.
    """
    return format_local_datetime(reading, TIME_12H_FORMAT)


def format_date_time_for_sessions(instant: datetime | None, session_time_zone: tzinfo | None) -> str:
    """Format as ``EEE, dd MMM yyyy, hh:mm a z`` in the session's zone."""
    return format_instant(instant, session_time_zone, SESSIONS_DATE_TIME_FORMAT)


def format_date_time_for_disambiguation(instant: datetime | None, zone: tzinfo | None) -> str:
    """
    Format with the numeric offset so both readings of an overlap differ.

    Example: ``Sun, 05 Nov 2017, 01:30 AM EDT (UTC-04:00)``.
    """
    return format_instant(instant, zone, DISAMBIGUATION_DATE_TIME_FORMAT)


def format_date_time_for_instructor_home_page(reading: datetime | None) -> str:
    """Format as ``d MMM h:mm a``, e.g. ``5 May 11:59 PM``."""
    return format_local_datetime(reading, INSTRUCTOR_HOME_PAGE_FORMAT)


def format_date_time_for_instructor_courses_page(instant: datetime | None, zone: tzinfo | None) -> str:
    """Format as ``d MMM yyyy`` in ``zone``, e.g. ``5 May 2017``."""
    return format_instant(instant, zone, INSTRUCTOR_COURSES_PAGE_FORMAT)


def format_activity_log_time(instant: datetime | None, zone: tzinfo | None) -> str:
    """
    Format an activity log entry time as ``dd/MM/yyyy HH:mm:ss.SSS``.

    Args:
        instant: The instant to be formatted
        zone: The zone used to calculate the local date and time

    Returns:
        The formatted text
    """
    return format_instant(instant, zone, ACTIVITY_LOG_TIME_FORMAT)


def format_instant_to_iso8601_utc(instant: datetime | None) -> str | None:
    """
    Format ``instant`` as an ISO-8601 UTC instant.

    Fractional seconds are written only when present, in groups of three
    digits.

    Examples:
        >>> from datetime import timezone
        >>> format_instant_to_iso8601_utc(datetime(2012, 5, 5, 13, 4, tzinfo=timezone.utc))
        '2012-05-05T13:04:00Z'
    """
    if instant is None:
        return None

    utc = to_utc_instant(instant).replace(tzinfo=None)
    if not utc.microsecond:
        timespec = "seconds"
    elif utc.microsecond % 1000 == 0:
        timespec = "milliseconds"
    else:
        timespec = "microseconds"
    return utc.isoformat(timespec=timespec) + "Z"


def _truncating_divmod(dividend: int, divisor: int) -> tuple[int, int]:
    quotient = abs(dividend) // divisor
    if dividend < 0:
        quotient = -quotient
    return quotient, dividend - quotient * divisor


def convert_to_standard_duration(time_in_milliseconds: int | None) -> str:
    """
    Format a duration as ``minutes:seconds:milliseconds``.

    Integer division truncates and nothing is zero-padded.

    Examples:
        >>> convert_to_standard_duration(1200)
        '0:1:200'
        >>> convert_to_standard_duration(61234)
        '1:1:234'
    """
    if time_in_milliseconds is None:
        return ""

    minutes, remainder = _truncating_divmod(time_in_milliseconds, 60000)
    seconds, milliseconds = _truncating_divmod(remainder, 1000)
    return f"{minutes}:{seconds}:{milliseconds}"
