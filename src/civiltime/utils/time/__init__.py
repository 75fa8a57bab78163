"""
Civil-time utilities for civiltime.

This package converts between instants and wall-clock readings in named
zones, classifies DST ambiguity, and formats and parses date-times with the
presentation rules used across the application.
"""

from .ambiguity import AmbiguityStatus, is_ambiguous
from .conversion import (
    convert_instant_to_local_datetime,
    convert_local_date_to_utc,
    convert_local_datetime_to_instant,
    convert_to_offset,
    convert_to_user_time_zone,
    convert_to_zone_id,
    get_instant_days_offset_from_now,
    now,
)
from .formatting import (
    adjust_and_format_date_for_sessions_form_inputs,
    convert_to_standard_duration,
    format_activity_log_time,
    format_date,
    format_date_for_sessions_form,
    format_date_time_for_disambiguation,
    format_date_time_for_instructor_courses_page,
    format_date_time_for_instructor_home_page,
    format_date_time_for_sessions,
    format_instant,
    format_instant_to_iso8601_utc,
    format_local_datetime,
    format_time_12h,
)
from .parsing import (
    combine_date_time,
    parse_instant,
    parse_local_datetime,
    parse_local_datetime_for_sessions_form,
    parse_zone_id,
)
from .sessions_form import (
    adjust_local_datetime_for_sessions_form_inputs,
    is_sessions_form_compatible,
)
from .special import SpecialTime, describe_special_time, is_special_time
from .timezone import get_system_now, get_system_timezone
from .zone_ids import same_zone, zone_key
from .zone_rules import ZoneRuleProvider, get_zone_rule_provider
from .zones import get_cities_for_time_zone, get_time_zone_values

__all__ = [
    "AmbiguityStatus",
    "is_ambiguous",
    "convert_instant_to_local_datetime",
    "convert_local_date_to_utc",
    "convert_local_datetime_to_instant",
    "convert_to_offset",
    "convert_to_user_time_zone",
    "convert_to_zone_id",
    "get_instant_days_offset_from_now",
    "now",
    "adjust_and_format_date_for_sessions_form_inputs",
    "convert_to_standard_duration",
    "format_activity_log_time",
    "format_date",
    "format_date_for_sessions_form",
    "format_date_time_for_disambiguation",
    "format_date_time_for_instructor_courses_page",
    "format_date_time_for_instructor_home_page",
    "format_date_time_for_sessions",
    "format_instant",
    "format_instant_to_iso8601_utc",
    "format_local_datetime",
    "format_time_12h",
    "combine_date_time",
    "parse_instant",
    "parse_local_datetime",
    "parse_local_datetime_for_sessions_form",
    "parse_zone_id",
    "adjust_local_datetime_for_sessions_form_inputs",
    "is_sessions_form_compatible",
    "SpecialTime",
    "describe_special_time",
    "is_special_time",
    "get_system_now",
    "get_system_timezone",
    "same_zone",
    "zone_key",
    "ZoneRuleProvider",
    "get_zone_rule_provider",
    "get_cities_for_time_zone",
    "get_time_zone_values",
]
