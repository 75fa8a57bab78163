"""
Fixed-offset zone directory with representative cities.

The directory lists one zone per common UTC offset together with major
cities using it, for display in zone pickers. It is built exactly once by
``initialize_zone_directory`` during startup and is read-only afterwards.

The cities were picked from each offset in the list of UTC time offsets and
checked against a world clock. DST is not reflected here.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo
from types import MappingProxyType
from typing import Final

from ..core.exceptions import ConfigurationError
from .zone_ids import zone_key
from .zone_rules import get_zone_rule_provider


logger = logging.getLogger(__name__)

TIME_ZONE_CITIES: Final = (
    ("UTC-12:00", "Baker Island, Howland Island"),
    ("UTC-11:00", "American Samoa, Niue"),
    ("UTC-10:00", "Hawaii, Cook Islands"),
    ("UTC-09:30", "Marquesas Islands"),
    ("UTC-09:00", "Gambier Islands, Alaska"),
    ("UTC-08:00", "Los Angeles, Vancouver, Tijuana"),
    ("UTC-07:00", "Phoenix, Calgary, Ciudad Juárez"),
    ("UTC-06:00", "Chicago, Guatemala City, Mexico City, San José, San Salvador, Tegucigalpa, Winnipeg"),
    ("UTC-05:00", "New York, Lima, Toronto, Bogotá, Havana, Kingston"),
    ("UTC-04:30", "Caracas"),
    ("UTC-04:00", "Santiago, La Paz, San Juan de Puerto Rico, Manaus, Halifax"),
    ("UTC-03:30", "St. John's"),
    ("UTC-03:00", "Buenos Aires, Montevideo, São Paulo"),
    ("UTC-02:00", "Fernando de Noronha, South Georgia and the South Sandwich Islands"),
    ("UTC-01:00", "Cape Verde, Greenland, Azores islands"),
    ("UTC", "Accra, Abidjan, Casablanca, Dakar, Dublin, Lisbon, London"),
    ("UTC+01:00", "Belgrade, Berlin, Brussels, Lagos, Madrid, Paris, Rome, Tunis, Vienna, Warsaw"),
    ("UTC+02:00", "Athens, Sofia, Cairo, Kiev, Istanbul, Beirut, Helsinki, Jerusalem, Johannesburg, Bucharest"),
    ("UTC+03:00", "Nairobi, Baghdad, Doha, Khartoum, Minsk, Riyadh"),
    ("UTC+03:30", "Tehran"),
    ("UTC+04:00", "Baku, Dubai, Moscow"),
    ("UTC+04:30", "Kabul"),
    ("UTC+05:00", "Karachi, Tashkent"),
    ("UTC+05:30", "Colombo, Delhi"),
    ("UTC+05:45", "Kathmandu"),
    ("UTC+06:00", "Almaty, Dhaka, Yekaterinburg"),
    ("UTC+06:30", "Yangon"),
    ("UTC+07:00", "Jakarta, Bangkok, Novosibirsk, Hanoi"),
    ("UTC+08:00", "Perth, Beijing, Manila, Singapore, Kuala Lumpur, Denpasar, Krasnoyarsk"),
    ("UTC+08:45", "Eucla"),
    ("UTC+09:00", "Seoul, Tokyo, Pyongyang, Ambon, Irkutsk"),
    ("UTC+09:30", "Adelaide"),
    ("UTC+10:00", "Canberra, Yakutsk, Port Moresby"),
    ("UTC+10:30", "Lord Howe Islands"),
    ("UTC+11:00", "Vladivostok, Noumea"),
    ("UTC+12:00", "Auckland, Suva"),
    ("UTC+12:45", "Chatham Islands"),
    ("UTC+13:00", "Phoenix Islands, Tokelau, Tonga"),
    ("UTC+14:00", "Line Islands"),
)


@dataclass(frozen=True)
class ZoneDirectory:
    """Zones in display order and the cities for each, keyed by canonical zone string."""

    zones: tuple[tzinfo, ...]
    cities: Mapping[str, str]

    @classmethod
    def build(cls, entries: tuple[tuple[str, str], ...] = TIME_ZONE_CITIES) -> "ZoneDirectory":
        """
        Resolve every zone of ``entries`` through the active zone rule provider.

        Raises:
            ZoneRulesError: If an entry names an unknown zone
        """
        provider = get_zone_rule_provider()
        zones: list[tzinfo] = []
        cities: dict[str, str] = {}
        for zone_id, zone_cities in entries:
            zone = provider.get_zone(zone_id)
            key = zone_key(zone)
            if key not in cities:
                zones.append(zone)
            cities[key] = zone_cities
        return cls(zones=tuple(zones), cities=MappingProxyType(cities))

    def get_cities(self, zone: tzinfo | str) -> str | None:
        key = zone if isinstance(zone, str) else zone_key(zone)
        return self.cities.get(key)


_directory: ZoneDirectory | None = None


def initialize_zone_directory(
    entries: tuple[tuple[str, str], ...] = TIME_ZONE_CITIES,
) -> ZoneDirectory:
    """
    Build the process-wide zone directory.

    Calling it again is a no-op that returns the existing directory.
    """
    global _directory
    if _directory is None:
        _directory = ZoneDirectory.build(entries)
        logger.debug(f"Zone directory initialized with {len(_directory.zones)} zones")
    return _directory


def get_zone_directory() -> ZoneDirectory:
    """
    The process-wide zone directory.

    Raises:
        ConfigurationError: If ``initialize_zone_directory`` has not run yet
    """
    if _directory is None:
        raise ConfigurationError(
            "Zone directory accessed before initialization; call civiltime.bootstrap.initialize() first"
        )
    return _directory


def get_cities_for_time_zone(zone: tzinfo | str) -> str | None:
    """Cities listed for ``zone``, or None if the zone is not in the directory."""
    return get_zone_directory().get_cities(zone)


def get_time_zone_values() -> list[tzinfo]:
    """A fresh list of the directory's zones in display order."""
    return list(get_zone_directory().zones)
