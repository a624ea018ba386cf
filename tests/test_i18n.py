from papercal.i18n import Language, month_name, read, weekday_abbreviations


def test_month_names():
    assert month_name(Language.SPANISH, 3) == "Marzo"
    assert month_name(Language.ENGLISH, 12) == "December"


def test_weekdays_rotate_to_week_start():
    assert weekday_abbreviations(Language.ENGLISH, 0) == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert weekday_abbreviations(Language.ENGLISH, 1) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert weekday_abbreviations(Language.SPANISH, 1) == ["L", "M", "M", "J", "V", "S", "D"]


def test_unknown_key_falls_back_to_key():
    assert read(Language.SPANISH, "whatever") == "whatever"
    assert read("en", "calendar") == "calendar"


def test_full_weekday_names():
    assert read(Language.SPANISH, "Sunday") == "Domingo"
    assert read(Language.SPANISH, "Wednesday") == "Miércoles"
    assert read(Language.SPANISH, "Saturday") == "Sábado"
    assert read(Language.ENGLISH, "Monday") == "Monday"
