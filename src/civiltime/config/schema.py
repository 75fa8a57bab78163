"""Configuration schema for civiltime using nested Pydantic models."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from ..utils.core.exceptions import PatternError
from ..utils.time.parsing import DEFAULT_DATE_TIME_FORMAT, parse_zone_id
from ..utils.time.patterns import compile_pattern


class TimeConfig(BaseModel):
    """Process-wide time settings."""

    system_time_zone: str = Field(
        default="UTC",
        description="Zone used when no zone is given (e.g. UTC, Asia/Singapore, UTC+08:00)",
        min_length=1,
    )
    default_date_time_format: str = Field(
        default=DEFAULT_DATE_TIME_FORMAT,
        description="Canonical zoned format of instants stored as text",
        min_length=1,
    )

    @field_validator("system_time_zone")
    @classmethod
    def validate_system_time_zone(cls, v: str) -> str:
        """Ensure the zone identifier resolves."""
        if parse_zone_id(v) is None:
            raise ValueError(f"Unknown time zone: {v}")
        return v

    @field_validator("default_date_time_format")
    @classmethod
    def validate_default_date_time_format(cls, v: str) -> str:
        """Ensure the pattern compiles and carries a zone or offset field."""
        try:
            compiled = compile_pattern(v)
        except PatternError as e:
            raise ValueError(str(e)) from e
        if not compiled.has_zone_fields:
            raise ValueError("Default date-time format must contain a zone or offset field")
        return v


class ZoneRulesConfig(BaseModel):
    """Source of time zone rules."""

    source: Literal["system", "tzdata"] = Field(
        default="system",
        description="'system' for the host tz database, 'tzdata' for the packaged IANA database",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Console log level",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional rotating log file",
    )
    max_bytes: Annotated[int, Field(ge=1024)] = Field(
        default=5 * 1024 * 1024,
        description="Size at which the log file is rotated",
    )
    backup_count: Annotated[int, Field(ge=0, le=100)] = Field(
        default=5,
        description="Number of rotated log files to keep",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class CivilTimeConfig(BaseModel):
    """Root configuration."""

    time: TimeConfig = Field(default_factory=TimeConfig)
    zone_rules: ZoneRulesConfig = Field(default_factory=ZoneRulesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
