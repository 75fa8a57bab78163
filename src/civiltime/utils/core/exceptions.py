"""
Basic exception classes for civiltime.

This module contains fundamental exception classes that are used throughout
the codebase without creating import cycles.

Ordinary bad user input is never reported through these classes: parsers
for end-user text return ``None`` instead. The exceptions below signal
programming errors, broken configuration or corrupted internal data.
"""

from __future__ import annotations

from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    CONFIGURATION = "configuration"
    PATTERN = "pattern"
    ZONE_RULES = "zone_rules"
    ASSUMPTION = "assumption"
    UNKNOWN = "unknown"


class CivilTimeError(Exception):
    """Base exception class for civiltime specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.user_message: str = user_message or message
        self.context: object | None = context
        self.recoverable: bool = recoverable


class ConfigurationError(CivilTimeError):
    """Configuration-related errors, including use before initialization."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            user_message=user_message,
            context=context,
        )


class PatternError(CivilTimeError):
    """A date-time pattern could not be compiled or applied.

    Patterns are trusted input written by developers, so this is always a
    programming error rather than something to show to an end user.
    """

    def __init__(
        self,
        message: str,
        pattern: str | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PATTERN,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            context=pattern,
        )
        self.pattern: str | None = pattern


class ZoneRulesError(CivilTimeError):
    """Unknown zone identifiers or failures of a zone rule provider."""

    def __init__(
        self,
        message: str,
        zone_id: str | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.ZONE_RULES,
            severity=ErrorSeverity.MEDIUM,
            recoverable=recoverable,
            context=zone_id,
        )
        self.zone_id: str | None = zone_id


class AssumptionError(CivilTimeError):
    """Internal data violated a format it is guaranteed to have."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.ASSUMPTION,
            severity=ErrorSeverity.CRITICAL,
            recoverable=False,
            context=context,
        )
