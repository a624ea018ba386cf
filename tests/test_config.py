from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from papercal.config import YEAR_SENTINEL, CalendarConfig
from papercal.i18n import Language


def test_defaults():
    cfg = CalendarConfig()
    assert cfg.month == YEAR_SENTINEL
    assert cfg.is_whole_year
    assert cfg.week_start == 0
    assert cfg.renderer == "svg"
    assert cfg.language is Language.SPANISH


@pytest.mark.parametrize("value, expected", [("monday", 1), ("6", 6), (3, 3), ("Sun", 0)])
def test_week_start(value, expected):
    assert CalendarConfig(week_start=value).week_start == expected


@pytest.mark.parametrize("field, value", [
    ("week_start", 7),
    ("week_start", "someday"),
    ("month", 13),
    ("month", -1),
    ("language", "fr"),
])
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        CalendarConfig(**{field: value})


def test_renderer_name_is_normalized():
    assert CalendarConfig(renderer=" SVG ").renderer == "svg"


def test_resolved_fills_in_year():
    assert CalendarConfig().resolved(date(2030, 6, 1)).year == 2030
    assert CalendarConfig(year=2024).resolved(date(2030, 6, 1)).year == 2024


def test_output_paths():
    cfg = CalendarConfig(year=2024, output_dir="out", language="en")
    assert cfg.year_output_path("pdf") == Path("out") / "calendar-2024.pdf"
    assert cfg.month_output_path(3, "svg") == Path("out") / "calendar-2024-03.svg"

    es = CalendarConfig(year=2024, output_dir="out")
    assert es.month_output_path(12, "svg").name == "calendario-2024-12.svg"


@pytest.mark.parametrize("year", [1, 9999, -5, 10000])
def test_years_without_full_week_grids_are_rejected(year):
    with pytest.raises(ValidationError):
        CalendarConfig(year=year)


@pytest.mark.parametrize("year", [0, 2, 2024, 9998])
def test_supported_years(year):
    assert CalendarConfig(year=year).year == year
