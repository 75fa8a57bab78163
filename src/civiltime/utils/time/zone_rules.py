"""
Zone rule providers.

A zone rule provider resolves zone identifiers to ``tzinfo`` objects and
answers offset queries against the IANA time zone database. The engine never
embeds rule data itself; it only asks the active provider.

Two providers are available:

* ``SystemZoneRuleProvider`` uses ``zoneinfo`` with the interpreter's default
  search path (the host's tz database, then the ``tzdata`` package).
* ``TzdataResourceZoneRuleProvider`` reads zone files exclusively from the
  ``tzdata`` package resources, so the rule version follows the installed
  dependency rather than the host.

The active provider is process-wide and is meant to be chosen once during
startup (see ``civiltime.bootstrap``).
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Protocol, runtime_checkable

from typing_extensions import override
from zoneinfo import TZPATH, ZoneInfo, ZoneInfoNotFoundError

import tzdata

from ..core.exceptions import ZoneRulesError
from .zone_ids import parse_fixed_offset_zone


logger = logging.getLogger(__name__)


@runtime_checkable
class ZoneRuleProvider(Protocol):
    """Source of time zone rules."""

    name: str

    def get_zone(self, zone_id: str) -> tzinfo: ...

    def valid_offsets(self, reading: datetime, zone: tzinfo) -> list[timedelta]: ...

    def offset_at(self, instant: datetime, zone: tzinfo) -> timedelta: ...

    def current_rule_version(self, zone_id: str = "UTC") -> str: ...


class BaseZoneRuleProvider:
    """
    Offset queries shared by the ``zoneinfo`` based providers.

    Subclasses only decide where zone files come from and how the rule
    version is reported.
    """

    name: str = "base"

    def get_zone(self, zone_id: str) -> tzinfo:
        """
        Resolve a zone identifier.

        Fixed offset identifiers (``UTC+05:30``, ``-03:00``, ``Z``) never reach
        the rule database.

        Raises:
            ZoneRulesError: If the identifier is unknown to this provider
        """
        fixed = parse_fixed_offset_zone(zone_id)
        if fixed is not None:
            return fixed

        try:
            return self._load_zone(zone_id)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise ZoneRulesError(
                f"Unknown time zone '{zone_id}' for provider {self.name}",
                zone_id=zone_id,
            ) from e

    def _load_zone(self, zone_id: str) -> tzinfo:
        raise NotImplementedError

    def valid_offsets(self, reading: datetime, zone: tzinfo) -> list[timedelta]:
        """
        Offsets under which ``reading`` names a real instant in ``zone``.

        Both PEP 495 folds are tried; an offset is kept only if the reading
        survives the round trip through UTC under it. The result is empty
        inside a gap, has one entry normally and two entries (earlier offset
        first) inside an overlap.
        """
        naive = reading.replace(tzinfo=None, fold=0)
        offsets: list[timedelta] = []
        for fold in (0, 1):
            offset = naive.replace(tzinfo=zone, fold=fold).utcoffset()
            if offset is None or offset in offsets:
                continue
            instant = (naive - offset).replace(tzinfo=timezone.utc)
            if instant.astimezone(zone).replace(tzinfo=None) == naive:
                offsets.append(offset)
        return offsets

    def offset_at(self, instant: datetime, zone: tzinfo) -> timedelta:
        """
        UTC offset in effect in ``zone`` at ``instant``.

        Raises:
            ValueError: If ``instant`` is naive
        """
        if instant.tzinfo is None:
            raise ValueError("Instant must be timezone-aware")
        offset = instant.astimezone(zone).utcoffset()
        return offset if offset is not None else timedelta(0)

    def current_rule_version(self, zone_id: str = "UTC") -> str:
        raise NotImplementedError


class SystemZoneRuleProvider(BaseZoneRuleProvider):
    """Rules from ``zoneinfo``'s default search path."""

    name: str = "system"

    @override
    def _load_zone(self, zone_id: str) -> tzinfo:
        return ZoneInfo(zone_id)

    @override
    def current_rule_version(self, zone_id: str = "UTC") -> str:
        """
        Version of the host tz database, read from ``tzdata.zi`` when present.

        Falls back to the ``tzdata`` package version, which is what
        ``zoneinfo`` uses when the host has no database.
        """
        _ = self.get_zone(zone_id)
        for search_path in TZPATH:
            version = _read_tzdata_zi_version(Path(search_path) / "tzdata.zi")
            if version is not None:
                return version
        return tzdata.IANA_VERSION


class TzdataResourceZoneRuleProvider(BaseZoneRuleProvider):
    """Rules loaded from the resources of the ``tzdata`` distribution."""

    name: str = "tzdata"

    def __init__(self) -> None:
        self._cached_zone: Callable[[str], tzinfo] = lru_cache(maxsize=None)(self._read_zone)

    @override
    def _load_zone(self, zone_id: str) -> tzinfo:
        return self._cached_zone(zone_id)

    @staticmethod
    def _read_zone(zone_id: str) -> tzinfo:
        parts = zone_id.split("/")
        if not zone_id or "\\" in zone_id or any(part in ("", ".", "..") for part in parts):
            raise ValueError(f"Invalid zone key: {zone_id!r}")

        resource = resources.files("tzdata.zoneinfo").joinpath(*parts)
        if not resource.is_file():
            raise ZoneInfoNotFoundError(f"No time zone found with key {zone_id}")

        with resource.open("rb") as fp:
            return ZoneInfo.from_file(fp, key=zone_id)

    @override
    def current_rule_version(self, zone_id: str = "UTC") -> str:
        _ = self.get_zone(zone_id)
        return tzdata.IANA_VERSION


def _read_tzdata_zi_version(path: Path) -> str | None:
    """Read the ``# version 2024a`` header of a ``tzdata.zi`` file."""
    try:
        with path.open("r", encoding="utf-8") as f:
            first_line = f.readline().strip()
    except OSError:
        return None

    prefix = "# version "
    if first_line.startswith(prefix):
        return first_line[len(prefix):]
    return None


ZONE_RULE_SOURCES: dict[str, type[BaseZoneRuleProvider]] = {
    SystemZoneRuleProvider.name: SystemZoneRuleProvider,
    TzdataResourceZoneRuleProvider.name: TzdataResourceZoneRuleProvider,
}

_active_provider: ZoneRuleProvider = SystemZoneRuleProvider()


def create_zone_rule_provider(source: str) -> ZoneRuleProvider:
    """
    Instantiate the provider registered under ``source``.

    Raises:
        ZoneRulesError: If ``source`` is not a known provider name
    """
    try:
        provider_class = ZONE_RULE_SOURCES[source]
    except KeyError as e:
        raise ZoneRulesError(
            f"Unknown zone rule source '{source}', expected one of {sorted(ZONE_RULE_SOURCES)}",
            recoverable=False,
        ) from e
    return provider_class()


def get_zone_rule_provider() -> ZoneRuleProvider:
    """Provider used by every zone lookup in the process."""
    return _active_provider


def set_zone_rule_provider(provider: ZoneRuleProvider) -> ZoneRuleProvider:
    """
    Replace the process-wide provider and return the previous one.

    Only meant to be called during startup, before concurrent use begins.
    """
    global _active_provider
    previous = _active_provider
    _active_provider = provider
    logger.debug(f"Zone rule provider changed from {previous.name} to {provider.name}")
    return previous
