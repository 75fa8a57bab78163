"""
Zone identifier helpers.

Zones are plain ``tzinfo`` objects: ``ZoneInfo`` for geopolitical regions and
``datetime.timezone`` for fixed offsets. Two zones are the same when their
canonical strings are equal, which ``zone_key`` computes.
"""

import re
from datetime import timedelta, timezone, tzinfo

# Same limits as ISO offsets: at most eighteen hours either side of UTC
MAX_OFFSET_SECONDS = 18 * 60 * 60

# ASCII digits only; str patterns otherwise match any Unicode digit
_FIXED_OFFSET_PATTERN = re.compile(
    r"^(?P<prefix>UTC|GMT|UT)?"
    + r"(?P<sign>[+-])(?P<hours>\d{1,2})"
    + r"(?::?(?P<minutes>\d{2})(?::?(?P<seconds>\d{2}))?)?$",
    re.ASCII,
)


def format_offset(offset: timedelta, separator: str = ":") -> str:
    """
    Render an offset as ``+hh:mm`` (or ``+hh:mm:ss`` when seconds are present).

    Examples:
        >>> format_offset(timedelta(hours=5, minutes=30))
        '+05:30'
        >>> format_offset(timedelta(hours=-3), separator="")
        '-0300'
    """
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    total = abs(total)
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{sign}{hours:02d}{separator}{minutes:02d}"
    if seconds:
        text += f"{separator}{seconds:02d}"
    return text


def fixed_offset_key(offset: timedelta) -> str:
    """Canonical identifier of a fixed offset zone, ``UTC`` for a zero offset."""
    if not offset:
        return "UTC"
    return "UTC" + format_offset(offset)


def fixed_offset_zone(offset: timedelta) -> timezone:
    """
    Build a fixed offset zone named by its canonical identifier.

    Raises:
        ValueError: If the offset is outside +/-18:00
    """
    if abs(offset.total_seconds()) > MAX_OFFSET_SECONDS:
        raise ValueError(f"Zone offset out of range: {offset}")
    if not offset:
        return timezone.utc
    return timezone(offset, fixed_offset_key(offset))


def parse_fixed_offset_zone(zone_id: str) -> timezone | None:
    """
    Parse fixed offset identifiers such as ``UTC+05:30``, ``GMT-3`` or ``+0800``.

    Returns ``None`` when ``zone_id`` is not a fixed offset identifier (for
    instance a region such as ``Asia/Singapore``) or is out of range.

    Examples:
        >>> parse_fixed_offset_zone("UTC+05:30").tzname(None)
        'UTC+05:30'
        >>> parse_fixed_offset_zone("Z") is timezone.utc
        True
        >>> parse_fixed_offset_zone("Asia/Singapore") is None
        True
    """
    if zone_id == "Z":
        return timezone.utc

    match = _FIXED_OFFSET_PATTERN.match(zone_id)
    if match is None:
        return None

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes") or 0)
    seconds = int(match.group("seconds") or 0)
    if minutes > 59 or seconds > 59:
        return None

    total = hours * 3600 + minutes * 60 + seconds
    if total > MAX_OFFSET_SECONDS:
        return None
    if match.group("sign") == "-":
        total = -total
    return fixed_offset_zone(timedelta(seconds=total))


def zone_key(zone: tzinfo) -> str:
    """
    Canonical string of a zone.

    Region zones use their IANA key; fixed offsets use ``UTC+hh:mm`` and
    collapse to ``UTC`` at zero offset.
    """
    if isinstance(zone, timezone):
        return fixed_offset_key(zone.utcoffset(None))
    key = getattr(zone, "key", None)
    if isinstance(key, str):
        return key
    return str(zone)


def same_zone(first: tzinfo | None, second: tzinfo | None) -> bool:
    """Zone equality by canonical string."""
    if first is None or second is None:
        return first is second
    return zone_key(first) == zone_key(second)
