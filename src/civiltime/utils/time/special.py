"""
Special instants.

A handful of fixed instants in 1970 are stored in place of real times to
mark symbolic values ("use the opening time", "never", ...). Their face
value must never be formatted or shifted between zones; callers check
``is_special_time`` first and short-circuit.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Final


TIME_REPRESENTS_FOLLOW_OPENING: Final = datetime(1970, 12, 31, tzinfo=timezone.utc)
TIME_REPRESENTS_FOLLOW_VISIBLE: Final = datetime(1970, 6, 22, tzinfo=timezone.utc)
TIME_REPRESENTS_LATER: Final = datetime(1970, 1, 1, tzinfo=timezone.utc)
TIME_REPRESENTS_NEVER: Final = datetime(1970, 11, 27, tzinfo=timezone.utc)
TIME_REPRESENTS_NOW: Final = datetime(1970, 2, 14, tzinfo=timezone.utc)


class SpecialTime(Enum):
    """Symbolic meaning of each special instant."""

    FOLLOW_OPENING = TIME_REPRESENTS_FOLLOW_OPENING
    FOLLOW_VISIBLE = TIME_REPRESENTS_FOLLOW_VISIBLE
    LATER = TIME_REPRESENTS_LATER
    NEVER = TIME_REPRESENTS_NEVER
    NOW = TIME_REPRESENTS_NOW


SPECIAL_INSTANTS: Final = frozenset(member.value for member in SpecialTime)


def is_special_time(instant: datetime | None) -> bool:
    """
    Whether ``instant`` is one of the special instants.

    Membership is exact equality; an instant one microsecond away is an
    ordinary time. None is never special, and neither is a naive value.

    Examples:
        >>> is_special_time(TIME_REPRESENTS_NEVER)
        True
        >>> is_special_time(None)
        False
    """
    if instant is None or instant.tzinfo is None:
        return False
    return instant in SPECIAL_INSTANTS


def describe_special_time(instant: datetime | None) -> SpecialTime | None:
    """The symbolic marker ``instant`` stands for, or None for ordinary times."""
    if not is_special_time(instant):
        return None
    return SpecialTime(instant)
