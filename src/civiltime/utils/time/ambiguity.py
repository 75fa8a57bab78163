"""
Daylight Saving Time ambiguity of wall-clock readings.
"""

from datetime import datetime, tzinfo
from enum import Enum

from .zone_rules import get_zone_rule_provider


class AmbiguityStatus(Enum):
    """
    Ambiguity of a wall-clock reading in a given zone, brought about by DST.

    The status is always derived on demand from the active zone rules and
    never stored. Offsets are not part of the status; ask the zone rule
    provider for them.
    """

    UNAMBIGUOUS = "unambiguous"
    """The reading resolves to exactly one instant."""

    GAP = "gap"
    """
    The reading falls inside the gap when clocks spring forward.

    Strictly speaking it does not exist and must be readjusted to be valid.
    """

    OVERLAP = "overlap"
    """The reading occurs twice, while clocks fall back."""

    @classmethod
    def of(cls, reading: datetime | None, zone: tzinfo | None) -> "AmbiguityStatus | None":
        """
        Classify ``reading`` interpreted in ``zone``.

        Args:
            reading: Naive wall-clock date-time
            zone: Zone in which the reading is interpreted

        Returns:
            The ambiguity status, or None if either argument is None

        Examples:
            >>> from zoneinfo import ZoneInfo
            >>> AmbiguityStatus.of(datetime(2024, 3, 10, 2, 30), ZoneInfo("America/New_York"))
            <AmbiguityStatus.GAP: 'gap'>
        """
        if reading is None or zone is None:
            return None

        offsets = get_zone_rule_provider().valid_offsets(reading, zone)
        if len(offsets) == 1:
            return cls.UNAMBIGUOUS
        if not offsets:
            return cls.GAP
        return cls.OVERLAP


def is_ambiguous(reading: datetime, zone: tzinfo) -> bool:
    """True when ``reading`` is a gap or an overlap in ``zone``."""
    return AmbiguityStatus.of(reading, zone) is not AmbiguityStatus.UNAMBIGUOUS
