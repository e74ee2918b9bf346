"""
Утилита для парсинга дат из параметров запросов.

Фронт-деск присылает даты как ISO (2025-03-14), так и в привычном виде
(14.03.2025, 14 марта 2025). Все варианты приводятся к datetime.date.
"""

import datetime as dt
import re
from typing import Optional

from dateutil import parser

RUSSIAN_MONTHS = {
    'января': 1, 'февраля': 2, 'марта': 3, 'апреля': 4,
    'мая': 5, 'июня': 6, 'июля': 7, 'августа': 8,
    'сентября': 9, 'октября': 10, 'ноября': 11, 'декабря': 12
}

_ISO_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
_RUSSIAN_PATTERN = re.compile(
    r'(\d{1,2})\s+(' + '|'.join(RUSSIAN_MONTHS.keys()) + r')(?:\s+(\d{4}))?'
)


def parse_date(value: str, today: Optional[dt.date] = None) -> Optional[dt.date]:
    """
    Парсит дату в одном из поддерживаемых форматов.

    Args:
        value: Строка с датой
        today: Дата для подстановки текущего года, если год не указан

    Returns:
        datetime.date или None, если строку не удалось разобрать

    Examples:
        >>> parse_date("2025-03-14")
        datetime.date(2025, 3, 14)
        >>> parse_date("14.03.2025")
        datetime.date(2025, 3, 14)
        >>> parse_date("14 марта", today=dt.date(2025, 1, 1))
        datetime.date(2025, 3, 14)
    """
    if not value or not isinstance(value, str):
        return None

    value = value.strip()

    # ISO разбираем без dayfirst, иначе 2025-03-04 станет 3 апреля
    if _ISO_PATTERN.match(value):
        try:
            return dt.date.fromisoformat(value)
        except ValueError:
            return None

    match = _RUSSIAN_PATTERN.search(value.lower())
    if match:
        year = int(match.group(3)) if match.group(3) else (today or dt.date.today()).year
        try:
            return dt.date(year, RUSSIAN_MONTHS[match.group(2)], int(match.group(1)))
        except ValueError:
            return None

    try:
        return parser.parse(value, dayfirst=True).date()
    except (ValueError, TypeError, OverflowError):
        return None
