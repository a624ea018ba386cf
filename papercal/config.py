from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

from .dates import SUNDAY, parse_week_start
from .i18n import Language, read

DEFAULT_FONT = "courier"

# `month` value meaning "render all twelve months".
YEAR_SENTINEL = 0

# Years whose months can always be padded to full weeks; 0 means the current year.
MIN_YEAR = 2
MAX_YEAR = 9998


class FontConfig(BaseModel):
    month: str = DEFAULT_FONT
    days: str = DEFAULT_FONT
    notes: str = DEFAULT_FONT


class FontSizes(BaseModel):
    month: float = 24
    days: float = 20
    notes: float = 12


class CalendarConfig(BaseModel):
    year: int = 0  # 0 means the current year
    month: int = YEAR_SENTINEL
    week_start: int = SUNDAY
    fonts: FontConfig = FontConfig()
    font_sizes: FontSizes = FontSizes()
    renderer: str = "svg"
    output_dir: str = "output"
    show_extra_days: bool = False
    language: Language = Language.SPANISH
    special_days: Optional[str] = None

    @field_validator("year")
    @classmethod
    def check_year(cls, v: int) -> int:
        if v != 0 and not MIN_YEAR <= v <= MAX_YEAR:
            raise ValueError(f"year must be {MIN_YEAR}-{MAX_YEAR}, or 0 for the current year")
        return v

    @field_validator("week_start", mode="before")
    @classmethod
    def week_start_from_name(cls, v):
        return parse_week_start(v)

    @field_validator("month")
    @classmethod
    def check_month(cls, v: int) -> int:
        if not YEAR_SENTINEL <= v <= 12:
            raise ValueError(f"month must be 1-12, or {YEAR_SENTINEL} for the whole year")
        return v

    @field_validator("renderer")
    @classmethod
    def normalize_renderer(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def is_whole_year(self) -> bool:
        return self.month == YEAR_SENTINEL

    def resolved(self, today: Optional[date] = None) -> "CalendarConfig":
        """Copy with the year filled in from `today` when left as 0."""
        if self.year:
            return self
        today = today or date.today()
        return self.model_copy(update={"year": today.year})

    def year_output_path(self, ext: str) -> Path:
        filename = f"{read(self.language, 'calendar')}-{self.year:04d}.{ext}"
        return Path(self.output_dir) / filename

    def month_output_path(self, month: int, ext: str) -> Path:
        filename = f"{read(self.language, 'calendar')}-{self.year:04d}-{month:02d}.{ext}"
        return Path(self.output_dir) / filename
