"""
Tests for engine startup.

This module tests logging setup, registration of zone rules (including the
degraded mode kept after a registration failure) and the single-call
initialization of process-wide state.
"""

import logging
import logging.handlers
from pathlib import Path
from unittest.mock import patch

import pytest
import tzdata

from src.civiltime.bootstrap import initialize, register_zone_rules, setup_logging
from src.civiltime.config.schema import CivilTimeConfig, LoggingConfig, TimeConfig
from src.civiltime.utils.core.exceptions import ZoneRulesError
from src.civiltime.utils.time.parsing import get_default_date_time_format
from src.civiltime.utils.time.timezone import get_system_timezone
from src.civiltime.utils.time.zone_ids import zone_key
from src.civiltime.utils.time.zone_rules import TzdataResourceZoneRuleProvider, get_zone_rule_provider
from src.civiltime.utils.time.zones import get_time_zone_values
from tests.utils.test_helpers import (
    create_temp_config_file,
    failing_zone_rule_provider,
    preserve_root_logging,
)


class TestSetupLogging:
    """Test logging configuration."""

    def test_console_only_by_default(self) -> None:
        """Test that only a console handler is installed without a log file."""
        with preserve_root_logging() as root_logger:
            setup_logging()
            handlers = list(root_logger.handlers)

        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].level == logging.INFO

    def test_rotating_file_handler(self, tmp_path: Path) -> None:
        """Test that a configured log file gets a rotating handler at DEBUG."""
        log_file = tmp_path / "logs" / "civiltime.log"
        with preserve_root_logging() as root_logger:
            setup_logging(LoggingConfig(level="WARNING", log_file=log_file, max_bytes=2048, backup_count=2))
            handlers = list(root_logger.handlers)

        file_handlers = [h for h in handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(handlers) == 2
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG
        assert file_handlers[0].maxBytes == 2048
        assert file_handlers[0].backupCount == 2
        assert log_file.parent.is_dir()

    def test_repeated_setup_replaces_handlers(self) -> None:
        """Test that handlers do not accumulate."""
        with preserve_root_logging() as root_logger:
            setup_logging()
            setup_logging()
            assert len(root_logger.handlers) == 1


class TestRegisterZoneRules:
    """Test selecting the zone rule source."""

    def test_register_tzdata(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a working source becomes active and its version is logged."""
        with caplog.at_level(logging.INFO):
            provider = register_zone_rules("tzdata")

        assert isinstance(provider, TzdataResourceZoneRuleProvider)
        assert get_zone_rule_provider() is provider
        assert f"Registered zone rules version {tzdata.IANA_VERSION} from tzdata" in caplog.text

    def test_unknown_source_keeps_current_provider(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test degraded mode after an unknown source."""
        original = get_zone_rule_provider()

        with caplog.at_level(logging.ERROR):
            provider = register_zone_rules("joda")

        assert provider is original
        assert get_zone_rule_provider() is original
        assert "Failed to register zone rules from 'joda', continuing with system rules" in caplog.text

    def test_failing_provider_is_not_installed(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test degraded mode when the provider cannot report its version."""
        original = get_zone_rule_provider()

        with patch(
            "src.civiltime.bootstrap.create_zone_rule_provider",
            return_value=failing_zone_rule_provider(),
        ):
            with caplog.at_level(logging.ERROR):
                provider = register_zone_rules("tzdata")

        assert provider is original
        assert "zone rules unavailable" in caplog.text


class TestInitialize:
    """Test single-call engine initialization."""

    def test_initialize_with_defaults(self) -> None:
        """Test startup without configuration."""
        with preserve_root_logging():
            directory = initialize()

        assert len(directory.zones) == 39
        assert len(get_time_zone_values()) == 39
        assert get_zone_rule_provider().name == "system"
        assert zone_key(get_system_timezone()) == "UTC"
        assert get_default_date_time_format() == "yyyy-MM-dd h:mm a Z"

    def test_initialize_with_config(self, singapore_config: CivilTimeConfig) -> None:
        """Test that every configured value is applied."""
        with preserve_root_logging():
            _ = initialize(singapore_config)

        assert get_zone_rule_provider().name == "tzdata"
        assert zone_key(get_system_timezone()) == "Asia/Singapore"

    def test_initialize_from_file(self) -> None:
        """Test startup from a YAML configuration file."""
        config_data: dict[str, object] = {
            "time": {
                "system_time_zone": "UTC+05:30",
                "default_date_time_format": "yyyy-MM-dd HH:mm xxx",
            },
        }
        with create_temp_config_file(config_data) as config_path, preserve_root_logging():
            _ = initialize(config_path)

        assert zone_key(get_system_timezone()) == "UTC+05:30"
        assert get_default_date_time_format() == "yyyy-MM-dd HH:mm xxx"

    def test_initialize_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing configuration file fails startup."""
        with pytest.raises(FileNotFoundError):
            _ = initialize(tmp_path / "missing.yml")

    def test_initialize_degraded_mode(self) -> None:
        """Test that startup continues on system rules when registration fails."""
        config = CivilTimeConfig(time=TimeConfig(system_time_zone="Europe/London"))

        with patch(
            "src.civiltime.bootstrap.create_zone_rule_provider",
            side_effect=ZoneRulesError("tzdata resources missing"),
        ):
            with preserve_root_logging():
                directory = initialize(config)

        assert len(directory.zones) == 39
        assert get_zone_rule_provider().name == "system"
        assert zone_key(get_system_timezone()) == "Europe/London"
