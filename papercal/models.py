import datetime
from typing import List, NamedTuple

from pydantic import BaseModel, ConfigDict


class SpecialDayKey(NamedTuple):
    month: int
    day: int

    @classmethod
    def from_date(cls, d: datetime.date) -> "SpecialDayKey":
        return cls(d.month, d.day)

    def __str__(self) -> str:
        return f"{self.month}/{self.day}"


class SpecialDayRecord(BaseModel):
    """One `[[day]]` entry of the special days source, before evaluation."""

    when: str
    holiday: bool = False
    icon: str = ""
    text: str = ""
    font: str = ""
    size: float = 0.0


class SpecialDaysSource(BaseModel):
    date_format: str
    day: List[SpecialDayRecord] = []


class SpecialDayNote(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = ""
    font: str = ""
    size: float = 0.0


class SpecialDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    holiday: bool = False
    icon: str = ""
    note: SpecialDayNote = SpecialDayNote()
