"""
Global test configuration fixtures for civiltime tests.

The engine keeps a small amount of process-wide state (zone rule provider,
zone directory, default zone and canonical format). Every test starts from
the defaults and any change it makes is undone afterwards. Tests that
reconfigure logging wrap their body in ``preserve_root_logging``.
"""

from __future__ import annotations

from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo

import pytest

from src.civiltime.config.schema import CivilTimeConfig, LoggingConfig, TimeConfig, ZoneRulesConfig
from src.civiltime.utils.time import parsing, timezone as system_timezone, zone_rules, zones


@pytest.fixture(autouse=True)
def reset_process_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Restore every piece of process-wide state after each test."""
    monkeypatch.setattr(zone_rules, "_active_provider", zone_rules.SystemZoneRuleProvider())
    monkeypatch.setattr(zones, "_directory", None)
    monkeypatch.setattr(system_timezone, "_system_timezone", timezone.utc)
    monkeypatch.setattr(parsing, "_default_date_time_format", parsing.DEFAULT_DATE_TIME_FORMAT)


@pytest.fixture
def new_york() -> tzinfo:
    """America/New_York: DST gap 02:00-03:00 in March, overlap 01:00-02:00 in November."""
    return ZoneInfo("America/New_York")


@pytest.fixture
def london() -> tzinfo:
    """Europe/London: DST gap 01:00-02:00 in March, overlap 01:00-02:00 in October."""
    return ZoneInfo("Europe/London")


@pytest.fixture
def singapore() -> tzinfo:
    """Asia/Singapore: UTC+08:00 all year."""
    return ZoneInfo("Asia/Singapore")


@pytest.fixture
def initialized_directory() -> zones.ZoneDirectory:
    """The process-wide zone directory, built from the default city table."""
    return zones.initialize_zone_directory()


@pytest.fixture
def base_config() -> CivilTimeConfig:
    """Configuration with every value at its default."""
    return CivilTimeConfig()


@pytest.fixture
def singapore_config() -> CivilTimeConfig:
    """Configuration using Singapore as default zone and the packaged tz database."""
    return CivilTimeConfig(
        time=TimeConfig(system_time_zone="Asia/Singapore"),
        zone_rules=ZoneRulesConfig(source="tzdata"),
        logging=LoggingConfig(level="DEBUG"),
    )
