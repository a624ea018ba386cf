import logging
from datetime import date
from typing import Dict, Iterator, Mapping, Optional

from .dates import days_in_month, resolve_when
from .errors import SpecialDayError
from .expressions import Evaluation, ExpressionContext, evaluate_expressions
from .models import SpecialDay, SpecialDayKey, SpecialDayNote, SpecialDayRecord, SpecialDaysSource

logger = logging.getLogger(__name__)


class SpecialDayStore:
    """
    Special days of one configured year, keyed by (month, day).

    Read-only once built; a single store is shared by every month grid
    rendered for that year.
    """

    def __init__(self, year: int, days: Optional[Mapping[SpecialDayKey, SpecialDay]] = None):
        self._year = year
        self._days: Dict[SpecialDayKey, SpecialDay] = dict(days or {})

    @classmethod
    def empty(cls, year: int) -> "SpecialDayStore":
        return cls(year)

    @property
    def year(self) -> int:
        return self._year

    def get(self, key: SpecialDayKey) -> Optional[SpecialDay]:
        return self._days.get(key)

    def at(self, d: date) -> Optional[SpecialDay]:
        return self._days.get(SpecialDayKey.from_date(d))

    def __contains__(self, key) -> bool:
        return key in self._days

    def __iter__(self) -> Iterator[SpecialDayKey]:
        return iter(self._days)

    def __len__(self) -> int:
        return len(self._days)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SpecialDayStore):
            return NotImplemented
        return self._year == other._year and self._days == other._days

    def __repr__(self) -> str:
        return f"SpecialDayStore(year={self._year}, days={len(self._days)})"


def _evaluate_field(record: SpecialDayRecord, field: str, context: ExpressionContext) -> Evaluation:
    try:
        return evaluate_expressions(getattr(record, field), context)
    except SpecialDayError as e:
        e.field = field
        raise


def resolve_record(
    record: SpecialDayRecord, key: SpecialDayKey, config_year: int, config_month: int
) -> Optional[SpecialDay]:
    """
    Evaluates the text, icon and font fields of `record` for `config_year`.

    All three fields are evaluated, in that order, even once one of them asks
    for a skip so that a syntax error further along is still reported.
    Returns None when the record must be left out for this year.
    """
    context = ExpressionContext(
        date=date(config_year, key.month, key.day),
        cfg_year=config_year,
        cfg_month=config_month,
    )

    text = _evaluate_field(record, "text", context)
    icon = _evaluate_field(record, "icon", context)
    font = _evaluate_field(record, "font", context)

    if text.skip or icon.skip or font.skip:
        logger.debug("skipping %r for %d: an expression is not positive", record.when, config_year)
        return None

    return SpecialDay(
        date=context.date,
        holiday=record.holiday,
        icon=icon.text,
        note=SpecialDayNote(text=text.text, font=font.text, size=record.size),
    )


def build_store(source: SpecialDaysSource, year: int, month: int) -> SpecialDayStore:
    """
    Resolves every record of `source` for the configured year and month.

    Later records win over earlier ones landing on the same day. Any error
    aborts the build, nothing partial is returned.
    """
    days: Dict[SpecialDayKey, SpecialDay] = {}

    for record in source.day:
        try:
            key = resolve_when(record.when, source.date_format, year)
            if key.day > days_in_month(year, key.month):
                logger.debug("%r does not exist in %d", record.when, year)
                continue
            special = resolve_record(record, key, year, month)
        except SpecialDayError as e:
            e.when = record.when
            raise

        if special is None:
            continue
        if key in days:
            logger.debug("%r replaces the special day already at %s", record.when, key)
        days[key] = special

    logger.info("loaded %d special days for %d", len(days), year)
    return SpecialDayStore(year, days)
