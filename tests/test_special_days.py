from datetime import date

import pytest

from papercal.errors import ExpressionSyntaxError, InvalidWhenSpec, SpecialDayError
from papercal.models import SpecialDayKey, SpecialDayRecord
from papercal.special_days import SpecialDayStore, build_store, resolve_record


def test_resolve_record_evaluates_every_field():
    record = SpecialDayRecord(
        when="18/3",
        holiday=True,
        text="((year - 2011))º Aniversario",
        icon="assets/icon-((year)).svg",
        font="font-((month))",
        size=9,
    )
    day = resolve_record(record, SpecialDayKey(3, 18), 2024, 3)

    assert day.date == date(2024, 3, 18)
    assert day.holiday is True
    assert day.icon == "assets/icon-2024.svg"
    assert day.note.text == "13º Aniversario"
    assert day.note.font == "font-3"
    assert day.note.size == 9


def test_size_is_not_evaluated():
    record = SpecialDayRecord(when="18/3", text="x", size=0)
    assert resolve_record(record, SpecialDayKey(3, 18), 2024, 3).note.size == 0


@pytest.mark.parametrize("field", ["text", "icon", "font"])
def test_skip_from_any_field(field):
    record = SpecialDayRecord(when="18/3", **{field: "((year - 2030))"})
    assert resolve_record(record, SpecialDayKey(3, 18), 2024, 3) is None


def test_error_wins_over_earlier_skip():
    record = SpecialDayRecord(when="18/3", text="((year - 2030))", icon="ok", font="((bogus))")
    with pytest.raises(ExpressionSyntaxError):
        resolve_record(record, SpecialDayKey(3, 18), 2024, 3)


def test_build_store(make_source):
    source = make_source(
        {"when": "18/3", "text": "((year - 2011))º Aniversario De Casados", "icon": "assets/anniversary.svg"},
        {"when": "((3rd sunday))/10", "text": "Mother's day"},
        {"when": "((last monday))/3", "text": "Last Monday", "holiday": True},
    )
    store = build_store(source, 2024, 3)

    assert len(store) == 3
    assert store.year == 2024
    assert store.at(date(2024, 3, 18)).note.text == "13º Aniversario De Casados"
    assert store.get(SpecialDayKey(10, 20)).note.text == "Mother's day"
    assert store.at(date(2024, 3, 25)).holiday is True
    assert store.at(date(2024, 3, 19)) is None


def test_build_store_skips_non_positive_records(make_source):
    source = make_source(
        {"when": "18/3", "text": "((year - 2011))º Aniversario De Casados"},
        {"when": "25/12", "text": "Navidad"},
    )
    store = build_store(source, 2010, 3)

    assert SpecialDayKey(3, 18) not in store
    assert store.at(date(2010, 3, 18)) is None
    assert store.at(date(2010, 12, 25)).note.text == "Navidad"


def test_cfg_month_comes_from_configuration(make_source):
    source = make_source({"when": "25/12", "text": "((cfg.month)) ((month))"})
    assert build_store(source, 2024, 5).get(SpecialDayKey(12, 25)).note.text == "5 12"


def test_last_record_wins_on_collision(make_source):
    # The 3rd Monday of March 2024 is the 18th.
    source = make_source(
        {"when": "18/3", "text": "first"},
        {"when": "((3rd monday))/3", "text": "second"},
    )
    store = build_store(source, 2024, 3)

    assert len(store) == 1
    assert store.get(SpecialDayKey(3, 18)).note.text == "second"


def test_skipped_record_does_not_replace_earlier_one(make_source):
    source = make_source(
        {"when": "18/3", "text": "kept"},
        {"when": "18/3", "text": "((year - 2030))"},
    )
    assert build_store(source, 2024, 3).get(SpecialDayKey(3, 18)).note.text == "kept"


def test_leap_day_only_on_leap_years(make_source):
    source = make_source({"when": "29/2", "text": "leap"})
    assert SpecialDayKey(2, 29) in build_store(source, 2024, 2)
    assert len(build_store(source, 2023, 2)) == 0


def test_rebuild_is_idempotent(make_source):
    source = make_source(
        {"when": "18/3", "text": "((year - 2011))"},
        {"when": "((2nd sunday))/5", "text": "Year ((year)) - Week ((year - 2000))"},
    )
    assert build_store(source, 2024, 0) == build_store(source, 2024, 0)
    assert build_store(source, 2024, 0) != build_store(source, 2025, 0)


def test_expression_error_aborts_load(make_source):
    source = make_source(
        {"when": "1/1", "text": "fine"},
        {"when": "18/3", "text": "((foo))"},
    )
    with pytest.raises(ExpressionSyntaxError) as excinfo:
        build_store(source, 2024, 3)
    assert excinfo.value.when == "18/3"
    assert "18/3" in str(excinfo.value)


def test_invalid_when_aborts_load(make_source):
    source = make_source({"when": "someday", "text": "x"})
    with pytest.raises(InvalidWhenSpec) as excinfo:
        build_store(source, 2024, 3)
    assert isinstance(excinfo.value, SpecialDayError)
    assert excinfo.value.when == "someday"


def test_empty_store():
    store = SpecialDayStore.empty(2024)
    assert len(store) == 0
    assert store.at(date(2024, 1, 1)) is None
    assert list(store) == []


@pytest.mark.parametrize("field", ["text", "icon", "font"])
def test_expression_error_names_the_field(make_source, field):
    source = make_source({"when": "18/3", field: "((foo))"})
    with pytest.raises(ExpressionSyntaxError) as excinfo:
        build_store(source, 2024, 3)

    assert excinfo.value.field == field
    assert str(excinfo.value).startswith(f"error evaluating {field} for day '18/3': ")
    assert "invalid 'when'" not in str(excinfo.value)


def test_when_error_has_no_field(make_source):
    with pytest.raises(InvalidWhenSpec) as excinfo:
        build_store(make_source({"when": "someday"}), 2024, 3)
    assert excinfo.value.field is None
    assert str(excinfo.value).startswith("invalid 'when' value 'someday': ")
