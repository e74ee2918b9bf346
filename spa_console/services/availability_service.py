"""
Проверка занятости комнат и сотрудников.

Все функции чистые: работают только с переданным снимком записей.
Единственное определение "занимающего" статуса - is_blocking().
"""

import datetime as dt
from typing import Iterable, List, Optional, Sequence

from spa_console.schemas.booking import Booking, RoomAvailability, StaffAvailability, StaffOption
from spa_console.schemas.employee import Employee
from spa_console.schemas.enums import BookingStatus, EmployeeStatus, Position
from spa_console.services.time_grid import ALL_TIME_SLOTS, end_time, to_minutes

TOTAL_ROOMS = 5

BLOCKING_STATUSES = frozenset({
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
    BookingStatus.IN_PROGRESS,
})


def is_blocking(status: BookingStatus) -> bool:
    """Занимает ли запись с таким статусом комнату и сотрудника."""
    return status in BLOCKING_STATUSES


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Пересечение полуинтервалов [start, end). Касание границ не считается."""
    return max(a_start, b_start) < min(a_end, b_end)


def booking_interval(booking: Booking) -> tuple:
    start = to_minutes(booking.time)
    return start, start + booking.duration


def is_assigned(booking: Booking, staff_id: str) -> bool:
    """Назначен ли сотрудник на запись (основным или дополнительным)."""
    return staff_id in booking.staff_ids


def is_eligible_staff(employee: Employee) -> bool:
    """На записи назначаются только работающие техники."""
    return employee.status == EmployeeStatus.ACTIVE and employee.position == Position.THERAPIST


def _blocking_on_date(
    bookings: Iterable[Booking],
    date: dt.date,
    exclude_booking_id: Optional[str]
) -> List[Booking]:
    return [
        b for b in bookings
        if b.date == date and b.id != exclude_booking_id and is_blocking(b.status)
    ]


def staff_availability(
    bookings: Iterable[Booking],
    staff_id: str,
    date: dt.date,
    start: int,
    end: int,
    exclude_booking_id: Optional[str] = None
) -> StaffAvailability:
    """
    Свободен ли сотрудник в интервале [start, end) в указанный день.

    Args:
        bookings: Снимок записей
        staff_id: ID сотрудника
        date: День
        start: Начало в минутах от полуночи
        end: Конец в минутах от полуночи
        exclude_booking_id: Редактируемая запись, которая не мешает сама себе

    Returns:
        StaffAvailability с временем окончания мешающей записи
    """
    for booking in _blocking_on_date(bookings, date, exclude_booking_id):
        if not is_assigned(booking, staff_id):
            continue
        b_start, b_end = booking_interval(booking)
        if overlaps(start, end, b_start, b_end):
            return StaffAvailability(
                available=False,
                conflict_end_time=end_time(booking.time, booking.duration)
            )
    return StaffAvailability(available=True)


def room_availability(
    bookings: Iterable[Booking],
    date: dt.date,
    start: int,
    end: int,
    exclude_booking_id: Optional[str] = None,
    total_rooms: int = TOTAL_ROOMS
) -> RoomAvailability:
    """
    Есть ли свободная комната в интервале [start, end).

    Комнату занимает любая занимающая запись, даже без назначенных сотрудников.
    """
    occupied = sum(
        1 for booking in _blocking_on_date(bookings, date, exclude_booking_id)
        if overlaps(start, end, *booking_interval(booking))
    )
    return RoomAvailability(available=occupied < total_rooms, occupied_count=occupied)


def check_room_availability(
    bookings: Iterable[Booking],
    date: dt.date,
    start_time: str,
    duration: int,
    exclude_booking_id: Optional[str] = None,
    total_rooms: int = TOTAL_ROOMS
) -> RoomAvailability:
    start = to_minutes(start_time)
    return room_availability(bookings, date, start, start + duration, exclude_booking_id, total_rooms)


def check_staff_availability(
    bookings: Iterable[Booking],
    staff_id: str,
    date: dt.date,
    start_time: str,
    duration: int,
    exclude_booking_id: Optional[str] = None
) -> StaffAvailability:
    start = to_minutes(start_time)
    return staff_availability(bookings, staff_id, date, start, start + duration, exclude_booking_id)


def staff_picker_options(
    employees: Iterable[Employee],
    bookings: Sequence[Booking],
    date: dt.date,
    start_time: str,
    duration: Optional[int],
    selected_ids: Sequence[str],
    slot: int,
    exclude_booking_id: Optional[str] = None
) -> List[StaffOption]:
    """
    Варианты для выпадающего списка сотрудников в форме записи.

    Занятые сотрудники и уже выбранные в другом слоте недоступны для выбора.
    Без услуги или времени все считаются свободными.
    """
    options = []
    for employee in employees:
        if not is_eligible_staff(employee):
            continue

        if start_time and duration:
            availability = check_staff_availability(
                bookings, employee.id, date, start_time, duration, exclude_booking_id
            )
        else:
            availability = StaffAvailability(available=True)

        selected_here = slot < len(selected_ids) and selected_ids[slot] == employee.id
        selected_elsewhere = employee.id in selected_ids and not selected_here

        if availability.available:
            label = f"{employee.name} (Свободен)"
        else:
            label = f"{employee.name} (Занят до {availability.conflict_end_time})"

        options.append(StaffOption(
            staff_id=employee.id,
            name=employee.name,
            available=availability.available,
            label=label,
            disabled=not availability.available or selected_elsewhere,
        ))
    return options


def free_slots(
    bookings: Sequence[Booking],
    date: dt.date,
    duration: int,
    exclude_booking_id: Optional[str] = None,
    total_rooms: int = TOTAL_ROOMS
) -> List[str]:
    """Слоты, в которые процедура указанной длительности помещается по комнатам."""
    return [
        slot for slot in ALL_TIME_SLOTS
        if check_room_availability(bookings, date, slot, duration, exclude_booking_id, total_rooms).available
    ]
