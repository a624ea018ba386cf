"""Month grids: the weeks and days a calendar page is drawn from."""

from datetime import date
from typing import List, Optional, Tuple

from .dates import SATURDAY, SUNDAY, days_in_month, weekday_of
from .errors import DateOutOfRange, InvalidMonth, InvalidWeekStart
from .models import SpecialDay, SpecialDayKey, SpecialDayNote
from .special_days import SpecialDayStore


class Day:
    __slots__ = ("date", "day_number", "is_current_month", "_store")

    def __init__(self, d: date, is_current_month: bool, store: SpecialDayStore):
        self.date = d
        self.day_number = d.day
        self.is_current_month = is_current_month
        # Looked up on demand; the store outlives and is shared by every grid.
        self._store = store

    @property
    def key(self) -> SpecialDayKey:
        return SpecialDayKey.from_date(self.date)

    @property
    def special(self) -> Optional[SpecialDay]:
        return self._store.get(self.key)

    @property
    def note(self) -> Optional[SpecialDayNote]:
        special = self.special
        return special.note if special else None

    @property
    def icon(self) -> str:
        special = self.special
        return special.icon if special else ""

    @property
    def is_holiday(self) -> bool:
        if weekday_of(self.date) in (SATURDAY, SUNDAY):
            return True
        special = self.special
        return bool(special and special.holiday)

    @property
    def name(self) -> str:
        return self.date.isoformat()

    def __repr__(self) -> str:
        return f"Day({self.name}, current={self.is_current_month})"


class CalendarGrid:
    def __init__(self, year: int, month: int, week_start: int, weeks: List[Tuple[Day, ...]], store: SpecialDayStore):
        self.year = year
        self.month = month
        self.week_start = week_start
        self.weeks = tuple(weeks)
        self.store = store

    def days(self):
        for week in self.weeks:
            yield from week

    def clone_at(self, month: int) -> "CalendarGrid":
        """Same year, week start and special days, another month."""
        return build_grid(self.year, month, self.week_start, self.store)

    def __len__(self) -> int:
        return len(self.weeks)

    def __repr__(self) -> str:
        return f"CalendarGrid({self.year}-{self.month:02d}, weeks={len(self.weeks)})"


def build_grid(year: int, month: int, week_start: int, store: Optional[SpecialDayStore] = None) -> CalendarGrid:
    """
    Lays out `month` of `year` in full weeks starting on `week_start`
    (0=Sunday). Leading and trailing days of the neighbouring months fill the
    first and last weeks.
    """
    if not 1 <= month <= 12:
        raise InvalidMonth(month)
    if isinstance(week_start, bool) or not isinstance(week_start, int) or not 0 <= week_start <= 6:
        raise InvalidWeekStart(week_start)
    if store is None:
        store = SpecialDayStore.empty(year)

    first = date(year, month, 1)
    last = date(year, month, days_in_month(year, month))
    offset = (weekday_of(first) - week_start) % 7

    week_count = -(-(offset + last.day) // 7)
    start = first.toordinal() - offset
    if start < date.min.toordinal() or start + week_count * 7 - 1 > date.max.toordinal():
        raise DateOutOfRange(year, month)

    weeks = []
    for w in range(week_count):
        week = []
        for i in range(7):
            current = date.fromordinal(start + w * 7 + i)
            is_current_month = current.year == year and current.month == month
            week.append(Day(current, is_current_month, store))
        weeks.append(tuple(week))

    return CalendarGrid(year, month, week_start, weeks, store)
