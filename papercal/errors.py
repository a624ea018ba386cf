"""Exceptions raised while building calendars and loading special days."""

from typing import Optional


class CalendarError(Exception):
    """Base class for every error raised by papercal."""


class InvalidMonth(CalendarError, ValueError):
    def __init__(self, month):
        super().__init__(f"invalid month: {month} (must be 1-12)")
        self.month = month


class InvalidWeekStart(CalendarError, ValueError):
    def __init__(self, value):
        super().__init__(f"invalid week start: {value!r} (must be 0-6 or a day name)")
        self.value = value


class DateOutOfRange(CalendarError, ValueError):
    def __init__(self, year, month):
        super().__init__(f"{year}-{month:02d} can't be laid out in full weeks: dates out of range")
        self.year = year
        self.month = month


class ConfigError(CalendarError, ValueError):
    pass


class UnknownRenderer(CalendarError, KeyError):
    def __init__(self, name: str, available):
        super().__init__(name)
        self.name = name
        self.available = list(available)

    def __str__(self) -> str:
        return f"unknown renderer {self.name!r}. Available: {self.available}"


class SpecialDayError(CalendarError):
    """Problem with the special days source. Aborts the whole load."""

    def __init__(self, message: str, when: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.when = when
        # text, icon or font when the error comes from evaluating that field
        self.field = field

    def __str__(self) -> str:
        if self.when is None:
            return self.message
        if self.field is not None:
            return f"error evaluating {self.field} for day {self.when!r}: {self.message}"
        return f"invalid 'when' value {self.when!r}: {self.message}"


class InvalidWhenSpec(SpecialDayError):
    pass


class OutOfRangeOccurrence(SpecialDayError):
    pass


class ExpressionSyntaxError(SpecialDayError):
    pass


class SourceDecodeError(SpecialDayError):
    pass
