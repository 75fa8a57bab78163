"""
Tests for zone identifier helpers.

This module tests offset rendering, fixed offset zone parsing and the
canonical zone strings used for zone equality.
"""

from datetime import timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from src.civiltime.utils.time.zone_ids import (
    fixed_offset_key,
    fixed_offset_zone,
    format_offset,
    parse_fixed_offset_zone,
    same_zone,
    zone_key,
)


class TestFormatOffset:
    """Test rendering of UTC offsets."""

    def test_positive_offset_with_minutes(self) -> None:
        """Test that half-hour offsets keep their minutes."""
        assert format_offset(timedelta(hours=5, minutes=30)) == "+05:30"

    def test_negative_offset_without_separator(self) -> None:
        """Test compact rendering of a negative offset."""
        assert format_offset(timedelta(hours=-3), separator="") == "-0300"

    def test_zero_offset(self) -> None:
        """Test that a zero offset is rendered with a plus sign."""
        assert format_offset(timedelta(0)) == "+00:00"

    def test_offset_with_seconds(self) -> None:
        """Test that seconds are only written when present."""
        assert format_offset(timedelta(hours=1, seconds=15)) == "+01:00:15"


class TestFixedOffsetZones:
    """Test creation of fixed offset zones."""

    def test_zero_offset_is_utc(self) -> None:
        """Test that a zero offset collapses to UTC."""
        assert fixed_offset_zone(timedelta(0)) is timezone.utc
        assert fixed_offset_key(timedelta(0)) == "UTC"

    def test_zone_is_named_by_canonical_key(self) -> None:
        """Test that fixed zones report their canonical identifier as name."""
        zone = fixed_offset_zone(timedelta(hours=8))
        assert zone.tzname(None) == "UTC+08:00"

    def test_out_of_range_offset_rejected(self) -> None:
        """Test that offsets beyond eighteen hours are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            _ = fixed_offset_zone(timedelta(hours=19))


class TestParseFixedOffsetZone:
    """Test parsing of fixed offset identifiers."""

    @pytest.mark.parametrize(
        ("zone_id", "expected_key"),
        [
            ("UTC+05:30", "UTC+05:30"),
            ("GMT-3", "UTC-03:00"),
            ("+0800", "UTC+08:00"),
            ("UT+01", "UTC+01:00"),
            ("UTC+00:00", "UTC"),
            ("Z", "UTC"),
        ],
    )
    def test_valid_identifiers(self, zone_id: str, expected_key: str) -> None:
        """Test that the usual spellings of fixed offsets are recognised."""
        zone = parse_fixed_offset_zone(zone_id)
        assert zone is not None
        assert zone_key(zone) == expected_key

    @pytest.mark.parametrize(
        "zone_id",
        ["Asia/Singapore", "UTC", "UTC+19:00", "UTC+05:75", "+", "UTC+\u0665", "GMT-\uff13"],
    )
    def test_non_fixed_identifiers(self, zone_id: str) -> None:
        """Test that region ids and out-of-range offsets are not fixed offsets."""
        assert parse_fixed_offset_zone(zone_id) is None


class TestZoneEquality:
    """Test canonical zone strings and zone equality."""

    def test_region_key(self) -> None:
        """Test that region zones use their IANA key."""
        assert zone_key(ZoneInfo("Europe/London")) == "Europe/London"

    def test_equal_fixed_zones_built_differently(self) -> None:
        """Test that differently spelled identical offsets are the same zone."""
        first = parse_fixed_offset_zone("GMT+8")
        second = fixed_offset_zone(timedelta(hours=8))
        assert same_zone(first, second)

    def test_region_differs_from_fixed_offset(self) -> None:
        """Test that a region is never the same zone as its current offset."""
        assert not same_zone(ZoneInfo("Asia/Singapore"), fixed_offset_zone(timedelta(hours=8)))

    def test_none_handling(self) -> None:
        """Test that None is only the same zone as None."""
        assert same_zone(None, None)
        assert not same_zone(timezone.utc, None)
