"""
Snapping wall-clock readings to values the session form can show.

The session form offers a date plus an hour from 1 to 24, where 24 stands
for 23:59 of that date (see ``combine_date_time``). Midnight itself cannot be
picked and is always expressed as 23:59 of the previous day.
"""

from datetime import datetime, timedelta

_HALF_HOUR = timedelta(minutes=30)


def is_sessions_form_compatible(reading: datetime) -> bool:
    """Whether ``reading`` is on the hour (but not midnight) or is 23:59."""
    return (reading.minute == 0 and reading.hour != 0) or (
        reading.hour == 23 and reading.minute == 59
    )


def adjust_local_datetime_for_sessions_form_inputs(
    reading: datetime | None,
) -> datetime | None:
    """
    Adjust ``reading`` to the nearest value the session form can represent.

    Compatible readings are returned unchanged. Anything else is first
    rounded to the nearest hour, half past rounding up, and a result of
    00:00 is then moved back one minute to 23:59 of the previous day.

    Args:
        reading: Naive wall-clock date-time, or None

    Returns:
        The adjusted reading, or None if ``reading`` is None

    Examples:
        >>> adjust_local_datetime_for_sessions_form_inputs(datetime(2016, 3, 5, 10, 30))
        datetime.datetime(2016, 3, 5, 11, 0)
        >>> adjust_local_datetime_for_sessions_form_inputs(datetime(2016, 3, 5, 0, 10))
        datetime.datetime(2016, 3, 4, 23, 59)
    """
    if reading is None:
        return None
    if is_sessions_form_compatible(reading):
        return reading

    floor = reading.replace(minute=0, second=0, microsecond=0)
    ceiling = floor + timedelta(hours=1)
    if ceiling - reading <= _HALF_HOUR:
        rounded = ceiling
    else:
        rounded = floor

    # Only the rounded value is remapped, never the raw input
    if rounded.hour == 0:
        return rounded - timedelta(minutes=1)
    return rounded
