"""
Сетка рабочего дня: слоты по 10 минут с 10:00 до 22:00.
Все выпадающие списки, заголовки таймлайна и поиск свободного времени
используют одну и ту же последовательность слотов.
"""

from typing import List

DAY_START_HOUR = 10
DAY_END_HOUR = 22
SLOT_STEP_MINUTES = 10


def to_minutes(time: str) -> int:
    """
    Переводит "H:MM" в минуты от полуночи.

    Пустое значение дает 0, поэтому обязательные поля нужно проверять заранее.
    """
    if not time:
        return 0
    hours, minutes = time.split(':')
    return int(hours) * 60 + int(minutes)


def from_minutes(minutes: int) -> str:
    """Минуты от полуночи в "H:MM" (без перехода через полночь)."""
    return f"{minutes // 60}:{minutes % 60:02d}"


def end_time(start: str, duration_minutes: int) -> str:
    """Время окончания процедуры."""
    return from_minutes(to_minutes(start) + duration_minutes)


def slot_sequence() -> List[str]:
    """
    Последовательность слотов рабочего дня.

    Examples:
        ['10:00', '10:10', ..., '21:50', '22:00']
    """
    slots = []
    for hour in range(DAY_START_HOUR, DAY_END_HOUR + 1):
        for minute in range(0, 60, SLOT_STEP_MINUTES):
            if hour == DAY_END_HOUR and minute > 0:
                break
            slots.append(f"{hour}:{minute:02d}")
    return slots


ALL_TIME_SLOTS = slot_sequence()


def slot_index(time: str) -> int:
    """Позиция слота в сетке или -1, если такого слота нет."""
    try:
        return ALL_TIME_SLOTS.index(time)
    except ValueError:
        return -1


def visible_slots(start: str, end: str) -> List[str]:
    """Слоты внутри окна фильтра, границы включены."""
    start_minutes = to_minutes(start)
    end_minutes = to_minutes(end)
    return [slot for slot in ALL_TIME_SLOTS if start_minutes <= to_minutes(slot) <= end_minutes]
