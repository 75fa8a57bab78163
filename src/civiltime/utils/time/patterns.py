"""
Date-time pattern engine.

Patterns use the letter syntax of LDML / ``java.time`` formatters, e.g.
``EEE, dd MMM yyyy, hh:mm a z``. A run of one repeated ASCII letter is a
field; text in single quotes is literal (``''`` is a single quote); every
other character is literal as well.

Supported fields:

=========  ==========================  =======================================
Letter     Meaning                     Counts
=========  ==========================  =======================================
``y u``    year                        ``yy`` two digits, otherwise padded
``M L``    month                       ``M`` ``MM`` ``MMM`` (Jan) ``MMMM``
``d``      day of month                ``d`` ``dd``
``E``      day of week                 ``E``-``EEE`` (Sat) ``EEEE`` (Saturday)
``a``      AM/PM marker                ``a``
``H``      hour of day 0-23            ``H`` ``HH``
``h``      clock hour 1-12             ``h`` ``hh``
``K``      hour of AM/PM 0-11          ``K`` ``KK``
``k``      clock hour of day 1-24      ``k`` ``kk``
``m s``    minute, second              one or two
``S``      fraction of second          1-9 digits
``z``      zone name                   ``z``-``zzz`` abbreviation, ``zzzz`` id
``Z``      offset                      ``Z``-``ZZZ`` +0800, ``ZZZZ`` GMT+08:00,
                                       ``ZZZZZ`` +08:00
``x X``    ISO offset                  1-3 letters, ``X`` prints Z for zero
=========  ==========================  =======================================

Zone abbreviations are whatever ``tzinfo.tzname()`` reports. The tz database
only carries abbreviations in real local use, so some zones print a numeric
form (Asia/Singapore is ``+08``, not ``SGT``); fixed offset zones print their
canonical key such as ``UTC+08:00``.

Month and day names are always English so output does not depend on the
host locale. Patterns are trusted input: an unsupported pattern raises
``PatternError`` as soon as it is compiled.
"""

from __future__ import annotations

import calendar
import re
import string
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from functools import lru_cache
from typing import Final, final

from ..core.exceptions import PatternError, ZoneRulesError
from .zone_ids import fixed_offset_zone, format_offset, zone_key
from .zone_rules import get_zone_rule_provider


MONTH_NAMES: Final = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBREVIATIONS: Final = tuple(name[:3] for name in MONTH_NAMES)
DAY_NAMES: Final = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
DAY_ABBREVIATIONS: Final = tuple(name[:3] for name in DAY_NAMES)
MERIDIEM_MARKERS: Final = ("AM", "PM")

# Largest count accepted for each supported letter
_MAX_COUNTS: Final = {
    "y": 9, "u": 9,
    "M": 4, "L": 4,
    "d": 2,
    "E": 4,
    "a": 1,
    "H": 2, "h": 2, "K": 2, "k": 2,
    "m": 2, "s": 2,
    "S": 9,
    "z": 4,
    "Z": 5,
    "x": 3, "X": 3,
}
_ZONE_LETTERS: Final = frozenset("zZxX")
_QUOTED_SECTION = re.compile(r"('[^']*')")


@dataclass(frozen=True, slots=True)
class FieldToken:
    """A run of ``count`` repetitions of a pattern letter."""

    letter: str
    count: int


@dataclass(frozen=True, slots=True)
class LiteralToken:
    """Text copied verbatim."""

    text: str


Token = FieldToken | LiteralToken


def tokenize_pattern(pattern: str) -> tuple[Token, ...]:
    """
    Split ``pattern`` into field and literal tokens.

    Raises:
        PatternError: For unterminated quotes, unknown letters or bad counts

    Examples:
        >>> tokenize_pattern("dd/MM")
        (FieldToken(letter='d', count=2), LiteralToken(text='/'), FieldToken(letter='M', count=2))
    """
    tokens: list[Token] = []
    literal: list[str] = []
    i = 0
    length = len(pattern)

    def flush_literal() -> None:
        if literal:
            tokens.append(LiteralToken("".join(literal)))
            literal.clear()

    while i < length:
        char = pattern[i]

        if char == "'":
            if pattern.startswith("''", i):
                literal.append("'")
                i += 2
                continue
            i += 1
            while True:
                if i >= length:
                    raise PatternError(f"Unterminated quote in pattern: {pattern}", pattern)
                if pattern[i] == "'":
                    if pattern.startswith("''", i):
                        literal.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                literal.append(pattern[i])
                i += 1
            continue

        if char in string.ascii_letters:
            count = 1
            while i + count < length and pattern[i + count] == char:
                count += 1
            max_count = _MAX_COUNTS.get(char)
            if max_count is None:
                raise PatternError(f"Unsupported pattern letter '{char}' in: {pattern}", pattern)
            if count > max_count:
                raise PatternError(f"Too many pattern letters: {char * count}", pattern)
            flush_literal()
            tokens.append(FieldToken(char, count))
            i += count
            continue

        literal.append(char)
        i += 1

    flush_literal()
    return tuple(tokens)


def substitute_meridiem(pattern: str, replacement: str) -> str:
    """
    Replace every unquoted AM/PM letter in ``pattern`` with quoted text.

    Examples:
        >>> substitute_meridiem("hh:mm a", "NOON")
        "hh:mm 'NOON'"
    """
    quoted = "'" + replacement.replace("'", "''") + "'"
    sections = _QUOTED_SECTION.split(pattern)
    # Quoted sections sit at odd indices after splitting on a capturing group
    return "".join(
        section if index % 2 else section.replace("a", quoted)
        for index, section in enumerate(sections)
    )


def _choice(names: tuple[str, ...]) -> str:
    return "(" + "|".join(re.escape(name) for name in sorted(names, key=len, reverse=True)) + ")"


def _digits(count: int) -> str:
    if count == 1:
        return r"(\d{1,2})"
    return rf"(\d{{{count}}})"


def _field_regex(token: FieldToken) -> str:
    letter, count = token.letter, token.count
    match letter:
        case "y" | "u":
            if count == 2:
                return r"(\d{2})"
            return rf"(\d{{{max(count, 1)},9}})"
        case "M" | "L":
            if count == 3:
                return _choice(MONTH_ABBREVIATIONS)
            if count == 4:
                return _choice(MONTH_NAMES)
            return _digits(count)
        case "E":
            return _choice(DAY_NAMES) if count == 4 else _choice(DAY_ABBREVIATIONS)
        case "a":
            return _choice(MERIDIEM_MARKERS)
        case "S":
            return rf"(\d{{{count}}})"
        case "z":
            return r"([A-Za-z][A-Za-z0-9_/+\-:]*)"
        case "Z" if count <= 3:
            return r"([+-]\d{4})"
        case "Z" if count == 4:
            return r"(GMT(?:[+-]\d{2}:\d{2})?)"
        case "Z" | "x" | "X":
            return r"(Z|[+-]\d{2}(?::?\d{2})?)"
        case _:
            return _digits(count)


def _resolve_zone_text(text: str) -> tzinfo:
    """Zone from a parsed ``z``, ``Z``, ``x`` or ``X`` field."""
    if text == "Z":
        return fixed_offset_zone(timedelta(0))
    if text.startswith("GMT"):
        text = text[3:] or "+00:00"
    if text[0] in "+-":
        digits = text[1:].replace(":", "")
        hours = int(digits[:2])
        minutes = int(digits[2:4] or 0)
        if minutes > 59:
            raise ValueError(f"Invalid offset: {text}")
        offset = timedelta(hours=hours, minutes=minutes)
        return fixed_offset_zone(-offset if text[0] == "-" else offset)
    try:
        return get_zone_rule_provider().get_zone(text)
    except ZoneRulesError as e:
        raise ValueError(f"Unknown zone: {text}") from e


def _check_range(name: str, value: int, low: int, high: int) -> int:
    if not low <= value <= high:
        raise ValueError(f"Invalid value for {name}: {value}")
    return value


@final
class CompiledPattern:
    """
    A tokenized pattern able to format and parse date-times.

    Instances are immutable and shared through ``compile_pattern``.
    """

    def __init__(self, pattern: str, tokens: tuple[Token, ...]) -> None:
        self.pattern: str = pattern
        self.tokens: tuple[Token, ...] = tokens
        self.fields: tuple[FieldToken, ...] = tuple(
            token for token in tokens if isinstance(token, FieldToken)
        )
        self.has_zone_fields: bool = any(
            token.letter in _ZONE_LETTERS for token in self.fields
        )
        self._regex: re.Pattern[str] = re.compile(
            "".join(
                _field_regex(token) if isinstance(token, FieldToken) else re.escape(token.text)
                for token in tokens
            ),
            re.ASCII,
        )

    def __repr__(self) -> str:
        return f"CompiledPattern({self.pattern!r})"

    # == FORMATTING ==

    def format(self, value: datetime) -> str:
        """
        Render ``value``.

        Raises:
            PatternError: If the pattern has zone fields and ``value`` is naive
        """
        if self.has_zone_fields and value.tzinfo is None:
            raise PatternError(
                f"Pattern '{self.pattern}' needs a zone but the value has none",
                self.pattern,
            )
        return "".join(
            self._format_field(token, value) if isinstance(token, FieldToken) else token.text
            for token in self.tokens
        )

    @staticmethod
    def _format_field(token: FieldToken, value: datetime) -> str:
        letter, count = token.letter, token.count
        match letter:
            case "y" | "u":
                if count == 2:
                    return f"{value.year % 100:02d}"
                return f"{value.year:0{count}d}"
            case "M" | "L":
                if count == 4:
                    return MONTH_NAMES[value.month - 1]
                if count == 3:
                    return MONTH_ABBREVIATIONS[value.month - 1]
                return f"{value.month:0{count}d}"
            case "d":
                return f"{value.day:0{count}d}"
            case "E":
                if count == 4:
                    return DAY_NAMES[value.weekday()]
                return DAY_ABBREVIATIONS[value.weekday()]
            case "a":
                return MERIDIEM_MARKERS[value.hour // 12]
            case "H":
                return f"{value.hour:0{count}d}"
            case "h":
                return f"{value.hour % 12 or 12:0{count}d}"
            case "K":
                return f"{value.hour % 12:0{count}d}"
            case "k":
                return f"{value.hour or 24:0{count}d}"
            case "m":
                return f"{value.minute:0{count}d}"
            case "s":
                return f"{value.second:0{count}d}"
            case "S":
                return f"{value.microsecond:06d}000"[:count]
            case "z":
                zone = value.tzinfo
                assert zone is not None
                if count == 4:
                    return zone_key(zone)
                return value.tzname() or zone_key(zone)
            case _:
                return CompiledPattern._format_offset(token, value.utcoffset() or timedelta(0))

    @staticmethod
    def _format_offset(token: FieldToken, offset: timedelta) -> str:
        letter, count = token.letter, token.count
        if letter == "Z":
            if count <= 3:
                return format_offset(offset, separator="")
            if count == 4:
                return "GMT" + format_offset(offset) if offset else "GMT"
            return format_offset(offset) if offset else "Z"

        if letter == "X" and not offset:
            return "Z"
        if count == 1:
            text = format_offset(offset, separator="")
            return text[:3] if text.endswith("00") and len(text) == 5 else text
        return format_offset(offset, separator=":" if count == 3 else "")

    # == PARSING ==

    def parse(self, text: str) -> datetime:
        """
        Parse ``text``, which must match the whole pattern.

        Year, month, day and an hour are required; minute, second and
        fraction default to zero. The result is naive unless the pattern has
        a zone field.

        Raises:
            ValueError: If ``text`` does not match or names an invalid date-time
        """
        match = self._regex.fullmatch(text)
        if match is None:
            raise ValueError(f"Text '{text}' does not match pattern '{self.pattern}'")

        values: dict[str, str] = {}
        for token, group in zip(self.fields, match.groups()):
            previous = values.setdefault(token.letter, group)
            if previous != group:
                raise ValueError(f"Conflicting values for '{token.letter}' in '{text}'")

        return self._resolve(values, text)

    def _resolve(self, values: dict[str, str], text: str) -> datetime:
        year_text = values.get("y", values.get("u"))
        month_text = values.get("M", values.get("L"))
        day_text = values.get("d")
        if year_text is None or month_text is None or day_text is None:
            raise ValueError(f"Pattern '{self.pattern}' does not determine a date")

        year = int(year_text)
        if self._year_count() == 2:
            year += 2000
        year = _check_range("year", year, 1, 9999)
        month = _check_range("month", self._month_value(month_text), 1, 12)
        # Days past the end of the month are clamped to its last day
        day = _check_range("day of month", int(day_text), 1, 31)
        day = min(day, calendar.monthrange(year, month)[1])

        hour = self._hour_value(values)
        minute = _check_range("minute", int(values.get("m", "0")), 0, 59)
        second = _check_range("second", int(values.get("s", "0")), 0, 59)
        fraction = values.get("S", "")
        microsecond = int((fraction + "000000")[:6])

        extra_day = False
        if hour == 24:
            # 24:00 is midnight at the end of the day
            if minute or second or microsecond:
                raise ValueError(f"Invalid time 24:{minute:02d} in '{text}'")
            hour = 0
            extra_day = True

        result = datetime(year, month, day, hour, minute, second, microsecond)

        day_name = values.get("E")
        if day_name is not None:
            names = DAY_NAMES if len(day_name) > 3 else DAY_ABBREVIATIONS
            if names.index(day_name) != result.weekday():
                raise ValueError(f"Day of week '{day_name}' conflicts with date in '{text}'")

        if extra_day:
            result += timedelta(days=1)

        # Offset fields take precedence over zone names
        zone_texts = [values[letter] for letter in ("Z", "x", "X", "z") if letter in values]
        if zone_texts:
            result = result.replace(tzinfo=_resolve_zone_text(zone_texts[0]))
        return result

    def _year_count(self) -> int:
        return next(token.count for token in self.fields if token.letter in "yu")

    @staticmethod
    def _month_value(text: str) -> int:
        if text.isdigit():
            return int(text)
        names = MONTH_NAMES if len(text) > 3 else MONTH_ABBREVIATIONS
        return names.index(text) + 1

    @staticmethod
    def _hour_value(values: dict[str, str]) -> int:
        if "H" in values:
            return _check_range("hour of day", int(values["H"]), 0, 24)
        if "k" in values:
            return _check_range("clock hour of day", int(values["k"]), 1, 24) % 24

        marker = values.get("a")
        if "h" in values and marker is not None:
            # 0 is accepted as a synonym for 12
            clock_hour = _check_range("clock hour of AM/PM", int(values["h"]), 0, 12)
            return clock_hour % 12 + 12 * MERIDIEM_MARKERS.index(marker)
        if "K" in values and marker is not None:
            hour = _check_range("hour of AM/PM", int(values["K"]), 0, 11)
            return hour + 12 * MERIDIEM_MARKERS.index(marker)
        raise ValueError("Pattern does not determine the hour")


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> CompiledPattern:
    """
    Compile ``pattern``, caching the result.

    Raises:
        PatternError: If the pattern is malformed
    """
    return CompiledPattern(pattern, tokenize_pattern(pattern))
