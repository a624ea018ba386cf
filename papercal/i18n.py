from enum import Enum
from typing import Dict, List


class Language(str, Enum):
    SPANISH = "es"
    ENGLISH = "en"


MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
# Sunday first, matching the week start numbering.
WEEKDAYS_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

STRINGS: Dict[Language, Dict[str, str]] = {
    Language.ENGLISH: {
        **{m: m for m in MONTHS},
        **{d: d for d in WEEKDAYS},
        **{d: d for d in WEEKDAYS_ABBR},
        "calendar": "calendar",
    },
    Language.SPANISH: {
        "January": "Enero",
        "February": "Febrero",
        "March": "Marzo",
        "April": "Abril",
        "May": "Mayo",
        "June": "Junio",
        "July": "Julio",
        "August": "Agosto",
        "September": "Septiembre",
        "October": "Octubre",
        "November": "Noviembre",
        "December": "Diciembre",
        "Sunday": "Domingo",
        "Monday": "Lunes",
        "Tuesday": "Martes",
        "Wednesday": "Miércoles",
        "Thursday": "Jueves",
        "Friday": "Viernes",
        "Saturday": "Sábado",
        "Sun": "D",
        "Mon": "L",
        "Tue": "M",
        "Wed": "M",
        "Thu": "J",
        "Fri": "V",
        "Sat": "S",
        "calendar": "calendario",
    },
}


def read(lang: Language, key: str) -> str:
    """Translated string for `key`, or the key itself when there is none."""
    return STRINGS.get(Language(lang), {}).get(key, key)


def month_name(lang: Language, month: int) -> str:
    return read(lang, MONTHS[month - 1])


def weekday_abbreviations(lang: Language, week_start: int) -> List[str]:
    names = [read(lang, d) for d in WEEKDAYS_ABBR]
    return names[week_start:] + names[:week_start]
