"""
Таймлайн рабочего дня: строки сотрудников и комнат, фильтры и подсказки.

Модель только для чтения, собирается заново из снимка состояния.
"""

import datetime as dt
import logging
from typing import Iterable, List, Optional

from spa_console.schemas.booking import Booking
from spa_console.schemas.employee import Employee
from spa_console.schemas.enums import BookingStatus
from spa_console.schemas.timeline import RoomRow, StaffRow, StaffStatus, Timeline, TimelineFilters
from spa_console.services.availability_service import (
    TOTAL_ROOMS,
    booking_interval,
    is_assigned,
    is_blocking,
    is_eligible_staff,
    overlaps,
)
from spa_console.services.booking_service import (
    any_allocated_room_free_predicate,
    any_staff_free_predicate,
    find_next_available_slot,
)
from spa_console.services.console_state import Snapshot
from spa_console.services.revenue_service import daily_stats
from spa_console.services.room_allocator import allocate_rooms, room_rows
from spa_console.services.time_grid import end_time, to_minutes, visible_slots

logger = logging.getLogger(__name__)

FREE_STATUS_TEXT = "Свободен"


def eligible_staff(employees: Iterable[Employee]) -> List[Employee]:
    """Работающие техники - единственные, кто попадает в таймлайн и выбор сотрудников."""
    return [e for e in employees if is_eligible_staff(e)]


def _matches_search(booking: Booking, term: str, include_staff: bool = True) -> bool:
    lower = term.lower()
    return (
        lower in (booking.customer_name or "").lower()
        or lower in (booking.customer_phone or "")
        or lower in (booking.code or "").lower()
        or (include_staff and lower in (booking.staff_name or "").lower())
    )


def filter_bookings(
    bookings: Iterable[Booking],
    date: dt.date,
    status: Optional[BookingStatus] = None,
    staff_id: Optional[str] = None,
    search: str = ""
) -> List[Booking]:
    """
    Список записей для таблицы.

    С поисковой строкой поиск идет по всем датам,
    без нее показываются только записи выбранного дня.
    """
    result = []
    for booking in bookings:
        if status is not None and booking.status != status:
            continue
        if staff_id and not is_assigned(booking, staff_id):
            continue
        if search:
            if _matches_search(booking, search):
                result.append(booking)
        elif booking.date == date:
            result.append(booking)
    return result


def staff_status(bookings: Iterable[Booking], staff_id: str, today: dt.date, now_minutes: int) -> StaffStatus:
    """
    Текущий статус сотрудника, всегда на сегодня независимо от выбранного дня.

    Приоритет: процедура в работе, затем подтвержденная запись
    в текущем окне, затем ожидающая подтверждения.
    """
    todays = [b for b in bookings if b.date == today and is_assigned(b, staff_id)]

    def covers_now(booking: Booking) -> bool:
        start, end = booking_interval(booking)
        return start <= now_minutes < end

    for booking in todays:
        if booking.status == BookingStatus.IN_PROGRESS:
            return StaffStatus(
                is_busy=True,
                text=f"Выполняет услугу до {end_time(booking.time, booking.duration)}"
            )

    for booking in todays:
        if booking.status == BookingStatus.CONFIRMED and covers_now(booking):
            return StaffStatus(is_busy=True, text=f"Ожидает клиента (к {booking.time})")

    for booking in todays:
        if booking.status == BookingStatus.PENDING and covers_now(booking):
            return StaffStatus(
                is_busy=True,
                text=f"Занят до {end_time(booking.time, booking.duration)}"
            )

    return StaffStatus(is_busy=False, text=FREE_STATUS_TEXT)


def _busy_in_window(bookings: Iterable[Booking], start: int, end: int) -> bool:
    return any(is_blocking(b.status) and overlaps(start, end, *booking_interval(b)) for b in bookings)


def build_timeline(
    snapshot: Snapshot,
    date: dt.date,
    filters: Optional[TimelineFilters] = None,
    today: Optional[dt.date] = None,
    now_minutes: Optional[int] = None,
    total_rooms: int = TOTAL_ROOMS
) -> Timeline:
    """
    Собирает таймлайн на выбранный день.

    Args:
        snapshot: Снимок состояния консоли
        date: Выбранный день
        filters: Поиск, сотрудник, "только свободные" и окно времени
        today: Сегодняшняя дата для статусов сотрудников
        now_minutes: Текущее время в минутах от полуночи

    Returns:
        Timeline
    """
    filters = filters or TimelineFilters()
    now = dt.datetime.now()
    if today is None:
        today = now.date()
    if now_minutes is None:
        now_minutes = now.hour * 60 + now.minute

    day_bookings = [b for b in snapshot.bookings if b.date == date]
    timeline_bookings = [b for b in day_bookings if b.status != BookingStatus.CANCELLED]
    window_start = to_minutes(filters.start_time)
    window_end = to_minutes(filters.end_time)

    # Строки сотрудников
    staff = eligible_staff(snapshot.employees)
    if filters.staff_id:
        staff = [e for e in staff if e.id == filters.staff_id]
    if filters.search:
        lower = filters.search.lower()
        staff = [
            e for e in staff
            if lower in e.name.lower()
            or lower in e.code.lower()
            or any(
                _matches_search(b, filters.search, include_staff=False)
                for b in day_bookings if is_assigned(b, e.id)
            )
        ]
    if filters.available_only:
        staff = [
            e for e in staff
            if not _busy_in_window((b for b in day_bookings if is_assigned(b, e.id)), window_start, window_end)
        ]

    staff_rows = [
        StaffRow(
            staff_id=e.id,
            name=e.name,
            status=staff_status(snapshot.bookings, e.id, today, now_minutes),
            completed_count=sum(
                1 for b in day_bookings
                if b.status == BookingStatus.COMPLETED and is_assigned(b, e.id)
            ),
            bookings=[b for b in timeline_bookings if is_assigned(b, e.id)],
        )
        for e in staff
    ]

    # Строки комнат
    allocation = allocate_rooms(timeline_bookings, total_rooms)
    rooms = room_rows(timeline_bookings, allocation, total_rooms)
    room_indexes = list(range(total_rooms))
    if filters.search:
        room_indexes = [i for i in room_indexes if any(_matches_search(b, filters.search) for b in rooms[i])]
    if filters.available_only:
        room_indexes = [i for i in room_indexes if not _busy_in_window(rooms[i], window_start, window_end)]

    # Подсказка ближайшего свободного времени, когда фильтр ничего не нашел
    duration = window_end - window_start
    next_room_slot = None
    next_staff_slot = None
    if filters.available_only and not room_indexes:
        predicate = any_allocated_room_free_predicate(timeline_bookings, allocation, total_rooms)
        next_room_slot = find_next_available_slot(date, filters.start_time, duration, predicate)
    if filters.available_only and not staff_rows:
        candidates = eligible_staff(snapshot.employees)
        if filters.staff_id:
            candidates = [e for e in candidates if e.id == filters.staff_id]
        predicate = any_staff_free_predicate(day_bookings, [e.id for e in candidates])
        next_staff_slot = find_next_available_slot(date, filters.start_time, duration, predicate)

    unallocated = [b for b in timeline_bookings if allocation.get(b.id) is None]
    if unallocated:
        logger.info(f"⚠️ [TIMELINE] {date}: записей без комнаты: {len(unallocated)}")

    return Timeline(
        slots=visible_slots(filters.start_time, filters.end_time),
        staff_rows=staff_rows,
        room_rows=[RoomRow(room_index=i, bookings=rooms[i]) for i in room_indexes],
        unallocated=unallocated,
        allocation=allocation,
        next_available_staff_slot=next_staff_slot,
        next_available_room_slot=next_room_slot,
        stats=daily_stats(snapshot.bookings, date),
    )
