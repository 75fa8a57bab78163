"""
Tests for parsing of date-time text.

This module tests the soft-failing parsers for user input and the strict
parser for the canonical internal format.
"""
# pyright: reportPrivateUsage=false

import logging
from datetime import datetime, timezone

import pytest

from src.civiltime.utils.core.exceptions import AssumptionError, PatternError
from src.civiltime.utils.time.parsing import (
    DEFAULT_DATE_TIME_FORMAT,
    combine_date_time,
    get_default_date_time_format,
    parse_instant,
    parse_local_datetime,
    parse_local_datetime_for_sessions_form,
    parse_zone_id,
    set_default_date_time_format,
)
from src.civiltime.utils.time.zone_ids import zone_key


class TestParseLocalDatetime:
    """Test parse_local_datetime."""

    def test_valid_text(self) -> None:
        """Test a reading matching the pattern."""
        assert parse_local_datetime("05/05/2012 14:04", "dd/MM/yyyy HH:mm") == datetime(2012, 5, 5, 14, 4)

    @pytest.mark.parametrize(
        ("text", "pattern"),
        [
            (None, "dd/MM/yyyy HH:mm"),
            ("05/05/2012 14:04", None),
            ("not-a-date", "dd/MM/yyyy"),
            ("05/05/2012", "dd/MM/yyyy"),
            ("30/13/2012 10:00", "dd/MM/yyyy HH:mm"),
        ],
    )
    def test_soft_failures(self, text: str | None, pattern: str | None) -> None:
        """Test that missing or unparseable input gives None."""
        assert parse_local_datetime(text, pattern) is None

    @pytest.mark.parametrize(
        "text",
        [
            "\uff11\uff10/12/2013 10:00",
            "10/12/\u0662\u0660\u0661\u0663 10:00",
            "10/12/2013 \u0661\u0660:00",
        ],
    )
    def test_non_ascii_digits_rejected(self, text: str) -> None:
        """Test that full-width and Arabic-Indic digits are not read as numbers."""
        assert parse_local_datetime(text, "dd/MM/yyyy HH:mm") is None

    def test_zone_is_dropped(self) -> None:
        """Test that zone fields are read but the reading stays local."""
        parsed = parse_local_datetime("2014-04-01 11:59 PM +0800", DEFAULT_DATE_TIME_FORMAT)
        assert parsed == datetime(2014, 4, 1, 23, 59)
        assert parsed is not None and parsed.tzinfo is None

    def test_malformed_pattern_raises(self) -> None:
        """Test that a broken pattern is a programming error, not a soft failure."""
        with pytest.raises(PatternError):
            _ = parse_local_datetime("05/05/2012", "dd/MM/yyyy 'open")


class TestCombineDateTime:
    """Test combining a form date with an hour."""

    @pytest.mark.parametrize(
        ("hours", "expected"),
        [
            ("0", datetime(2014, 4, 1, 0, 0)),
            ("9", datetime(2014, 4, 1, 9, 0)),
            ("23", datetime(2014, 4, 1, 23, 0)),
            ("24", datetime(2014, 4, 1, 23, 59)),
        ],
    )
    def test_hours(self, hours: str, expected: datetime) -> None:
        """Test that hour 24 means 23:59 of the same date."""
        assert combine_date_time("Tue, 01 Apr, 2014", hours) == expected

    @pytest.mark.parametrize(
        ("date", "hours"),
        [
            (None, "10"),
            ("Tue, 01 Apr, 2014", None),
            ("Tue, 01 Apr, 2014", "25"),
            ("Tue, 01 Apr, 2014", "ten"),
            ("01/04/2014", "10"),
            ("Tue, 01 Apr, \uff12\uff10\uff11\uff14", "10"),
            ("Tue, 01 Apr, 2014", "\u0663"),
        ],
    )
    def test_invalid_input(self, date: str | None, hours: str | None) -> None:
        """Test that invalid form input gives None."""
        assert combine_date_time(date, hours) is None


class TestParseForSessionsForm:
    """Test parsing of separate date, hour and minute fields."""

    def test_valid_fields(self) -> None:
        """Test a complete set of form fields."""
        assert parse_local_datetime_for_sessions_form("Tue, 01 Apr, 2014", "23", "59") == datetime(2014, 4, 1, 23, 59)

    @pytest.mark.parametrize(
        ("date", "hour", "minute"),
        [
            (None, "10", "0"),
            ("Tue, 01 Apr, 2014", None, "0"),
            ("Tue, 01 Apr, 2014", "10", None),
            ("Tue, 01 Apr, 2014", "10", "60"),
            ("Mon, 01 Apr, 2014", "10", "0"),
        ],
    )
    def test_invalid_fields(self, date: str | None, hour: str | None, minute: str | None) -> None:
        """Test missing fields, out-of-range minutes and a wrong day name."""
        assert parse_local_datetime_for_sessions_form(date, hour, minute) is None


class TestParseInstant:
    """Test strict parsing of the canonical format."""

    def test_canonical_text(self) -> None:
        """Test that canonical text gives a UTC instant."""
        instant = parse_instant("2014-04-01 11:59 PM +0800")
        assert instant == datetime(2014, 4, 1, 15, 59, tzinfo=timezone.utc)
        assert instant.tzinfo is timezone.utc

    def test_wrong_format_is_hard_failure(self) -> None:
        """Test that non-canonical text raises AssumptionError."""
        with pytest.raises(AssumptionError, match="wrong format") as exc_info:
            _ = parse_instant("01/04/2014 23:59")
        assert exc_info.value.context == "01/04/2014 23:59"
        assert not exc_info.value.recoverable

    def test_configured_format(self) -> None:
        """Test parsing after the canonical format is changed."""
        set_default_date_time_format("yyyy-MM-dd'T'HH:mmxxx")
        assert parse_instant("2014-04-01T23:59-04:00") == datetime(2014, 4, 2, 3, 59, tzinfo=timezone.utc)


class TestDefaultDateTimeFormat:
    """Test configuration of the canonical format."""

    def test_default(self) -> None:
        """Test the built-in canonical format."""
        assert get_default_date_time_format() == "yyyy-MM-dd h:mm a Z"

    def test_change_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that changing the format is logged."""
        with caplog.at_level(logging.INFO):
            set_default_date_time_format("yyyy-MM-dd HH:mm Z")
        assert get_default_date_time_format() == "yyyy-MM-dd HH:mm Z"
        assert "Default date-time format set to 'yyyy-MM-dd HH:mm Z'" in caplog.text

    def test_format_without_zone_rejected(self) -> None:
        """Test that the canonical format must identify a zone."""
        with pytest.raises(ValueError, match="zone field"):
            set_default_date_time_format("yyyy-MM-dd HH:mm")
        assert get_default_date_time_format() == DEFAULT_DATE_TIME_FORMAT


class TestParseZoneId:
    """Test resolving zone identifiers from user input."""

    @pytest.mark.parametrize(
        ("zone_id", "expected_key"),
        [
            ("Asia/Singapore", "Asia/Singapore"),
            ("UTC+04:00", "UTC+04:00"),
            ("UTC", "UTC"),
        ],
    )
    def test_known_zones(self, zone_id: str, expected_key: str) -> None:
        """Test region, fixed offset and UTC identifiers."""
        zone = parse_zone_id(zone_id)
        assert zone is not None
        assert zone_key(zone) == expected_key

    @pytest.mark.parametrize(
        "zone_id", [None, "Not/AZone", "UTC+25:00", "UTC+\u0665", "UTC+\uff10\uff18:00"]
    )
    def test_unknown_zones(self, zone_id: str | None) -> None:
        """Test that unknown identifiers give None."""
        assert parse_zone_id(zone_id) is None
