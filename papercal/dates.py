"""
Resolution of special day "when" values into month/day keys.

A "when" value is either a relative occurrence such as ``((3rd sunday))/10``
or a fixed date written in the source's ``date_format`` layout. Weekdays are
numbered 0=Sunday .. 6=Saturday everywhere in this module.
"""

import calendar
import logging
import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Tuple

from .errors import InvalidWeekStart, InvalidWhenSpec, OutOfRangeOccurrence
from .models import SpecialDayKey

logger = logging.getLogger(__name__)

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

WEEKDAY_NAMES = {
    "sunday": SUNDAY, "sun": SUNDAY,
    "monday": MONDAY, "mon": MONDAY,
    "tuesday": TUESDAY, "tue": TUESDAY,
    "wednesday": WEDNESDAY, "wed": WEDNESDAY,
    "thursday": THURSDAY, "thu": THURSDAY,
    "friday": FRIDAY, "fri": FRIDAY,
    "saturday": SATURDAY, "sat": SATURDAY,
}

ORDINALS = {
    "1st": 1, "first": 1,
    "2nd": 2, "second": 2,
    "3rd": 3, "third": 3,
    "4th": 4, "fourth": 4,
}
LAST = -1

RELATIVE_PATTERN = re.compile(r"^\(\((.+)\)\)/(\d+)$")

# Reference-date layout tokens (Mon Jan 2 2006) and their strptime equivalents.
# Longest tokens first so "2006" wins over "2" and "January" over "Jan".
_LAYOUT_TOKENS = {
    "2006": "%Y",
    "January": "%B",
    "Monday": "%A",
    "Jan": "%b",
    "Mon": "%a",
    "01": "%m",
    "02": "%d",
    "_2": "%d",
    "06": "%y",
    "1": "%m",
    "2": "%d",
}
_LAYOUT_PATTERN = re.compile("|".join(re.escape(t) for t in _LAYOUT_TOKENS))

# Any leap year works; it lets "29/2" through when the layout has no year.
_PLACEHOLDER_YEAR = 2000


def weekday_of(d: date) -> int:
    """Weekday of `d` with Sunday as 0."""
    return d.isoweekday() % 7


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def parse_weekday(name: str) -> int:
    """Parses a full or three-letter weekday name, case-insensitive."""
    key = name.strip().lower()
    if key not in WEEKDAY_NAMES:
        raise InvalidWhenSpec(f"unknown weekday {name!r}")
    return WEEKDAY_NAMES[key]


def parse_week_start(value) -> int:
    """
    Accepts an int 0-6, a single digit string, or a weekday name
    (sunday, mon, ...).
    """
    if isinstance(value, bool):
        raise InvalidWeekStart(value)
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise InvalidWeekStart(value)

    s = str(value).strip().lower()
    if len(s) == 1 and "0" <= s <= "6":
        return int(s)
    if s in WEEKDAY_NAMES:
        return WEEKDAY_NAMES[s]
    raise InvalidWeekStart(value)


def parse_ordinal_weekday(s: str) -> Tuple[int, int]:
    """
    Parses "3rd sunday", "last mon", "first Friday" into (ordinal, weekday).
    The ordinal is 1-4, or LAST.
    """
    parts = s.lower().split()
    if len(parts) != 2:
        raise InvalidWhenSpec(
            f"invalid ordinal/weekday {s!r} (expected e.g. '1st sunday' or 'last monday')"
        )
    ordinal_str, weekday_str = parts

    if ordinal_str == "last":
        ordinal = LAST
    elif ordinal_str in ORDINALS:
        ordinal = ORDINALS[ordinal_str]
    else:
        raise InvalidWhenSpec(f"invalid ordinal {ordinal_str!r}")

    return ordinal, parse_weekday(weekday_str)


def nth_weekday_of_month(year: int, month: int, weekday: int, ordinal: int) -> int:
    """
    Returns the day of the month for the Nth occurrence of a weekday.
    ordinal: 1 for 1st .. 4 for 4th, LAST for the last one
    """
    last_day = days_in_month(year, month)

    if ordinal == LAST:
        current = date(year, month, last_day)
        for _ in range(6):
            if weekday_of(current) == weekday:
                break
            current -= timedelta(days=1)
        return current.day

    first_weekday = weekday_of(date(year, month, 1))
    target_day = 1 + (weekday - first_weekday + 7) % 7 + (ordinal - 1) * 7

    if target_day > last_day or weekday_of(date(year, month, target_day)) != weekday:
        raise OutOfRangeOccurrence(
            f"occurrence {ordinal} of {calendar.day_name[(weekday - 1) % 7]} "
            f"does not exist in {year}-{month:02d}"
        )
    return target_day


def layout_to_strptime(layout: str) -> str:
    """
    Turns a reference-date layout ("2/1", "Jan 02") into a strptime format.
    Layouts already written with % directives are returned as they are.
    """
    if "%" in layout:
        return layout
    return _LAYOUT_PATTERN.sub(lambda m: _LAYOUT_TOKENS[m.group(0)], layout)


def parse_relative(when: str, layout: str, year: int) -> Optional[SpecialDayKey]:
    match = RELATIVE_PATTERN.match(when.strip())
    if not match:
        return None

    month = int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidWhenSpec(f"month out of range: {month} (must be 1-12)")

    ordinal, weekday = parse_ordinal_weekday(match.group(1))
    day = nth_weekday_of_month(year, month, weekday, ordinal)
    return SpecialDayKey(month, day)


def parse_fixed(when: str, layout: str, year: int) -> Optional[SpecialDayKey]:
    fmt = layout_to_strptime(layout)
    value = when.strip()
    if "%Y" not in fmt and "%y" not in fmt:
        fmt = f"{fmt} %Y"
        value = f"{value} {_PLACEHOLDER_YEAR}"

    try:
        parsed = datetime.strptime(value, fmt)
    except ValueError:
        return None
    return SpecialDayKey(parsed.month, parsed.day)


Parser = Callable[[str, str, int], Optional[SpecialDayKey]]

PARSERS: Tuple[Parser, ...] = (parse_relative, parse_fixed)


def resolve_when(when: str, layout: str, year: int) -> SpecialDayKey:
    """
    Resolves a "when" value for the given calendar year.
    The first parser that recognises the value wins.
    """
    for parser in PARSERS:
        key = parser(when, layout, year)
        if key is not None:
            logger.debug("resolved %r to %s via %s", when, key, parser.__name__)
            return key

    raise InvalidWhenSpec(f"can't parse {when!r} as {layout!r} or as a relative date")
