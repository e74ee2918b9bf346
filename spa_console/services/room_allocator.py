"""
Распределение записей дня по виртуальным комнатам для таймлайна.

Комнаты не хранятся: распределение пересчитывается с нуля из набора записей
при каждом построении таймлайна.
"""

import logging
from typing import Dict, Iterable, List, Optional

from spa_console.schemas.booking import Booking
from spa_console.schemas.enums import BookingStatus
from spa_console.services.availability_service import TOTAL_ROOMS, booking_interval

logger = logging.getLogger(__name__)


def allocate_rooms(bookings_for_date: Iterable[Booking], total_rooms: int = TOTAL_ROOMS) -> Dict[str, Optional[int]]:
    """
    Жадное распределение по времени начала: каждая запись попадает
    в первую по номеру комнату, которая освободилась к ее началу.

    Args:
        bookings_for_date: Записи одного дня
        total_rooms: Количество комнат

    Returns:
        Словарь booking_id -> индекс комнаты или None, если комнаты не нашлось
    """
    candidates = [b for b in bookings_for_date if b.status != BookingStatus.CANCELLED]
    # sorted() устойчив: при равном начале сохраняется исходный порядок
    ordered = sorted(candidates, key=lambda b: booking_interval(b)[0])

    room_free_at = [0] * total_rooms
    allocation: Dict[str, Optional[int]] = {}

    for booking in ordered:
        start, end = booking_interval(booking)
        allocation[booking.id] = None

        for room_index in range(total_rooms):
            if room_free_at[room_index] <= start:
                room_free_at[room_index] = end
                allocation[booking.id] = room_index
                break

        if allocation[booking.id] is None:
            logger.debug(f"⚠️ [ROOMS] Нет свободной комнаты для записи {booking.code} в {booking.time}")

    return allocation


def room_rows(
    bookings_for_date: Iterable[Booking],
    allocation: Dict[str, Optional[int]],
    total_rooms: int = TOTAL_ROOMS
) -> List[List[Booking]]:
    """Записи, сгруппированные по индексу комнаты."""
    rows: List[List[Booking]] = [[] for _ in range(total_rooms)]
    for booking in bookings_for_date:
        room_index = allocation.get(booking.id)
        if room_index is not None:
            rows[room_index].append(booking)
    return rows
