"""
civiltime - conversion, formatting and parsing of civil date-times across time zones.
"""

from .bootstrap import initialize
from .utils.core.exceptions import (
    AssumptionError,
    CivilTimeError,
    ConfigurationError,
    PatternError,
    ZoneRulesError,
)

__all__ = [
    "initialize",
    "AssumptionError",
    "CivilTimeError",
    "ConfigurationError",
    "PatternError",
    "ZoneRulesError",
]
