"""
Тесты таймлайна: строки сотрудников и комнат, фильтры, подсказки и статусы.
"""

import datetime as dt

from conftest import DAY
from spa_console.schemas.employee import Employee
from spa_console.schemas.enums import BookingStatus, EmployeeStatus, Position
from spa_console.schemas.timeline import TimelineFilters
from spa_console.services.console_state import Snapshot
from spa_console.services.timeline_service import build_timeline, eligible_staff, filter_bookings, staff_status

NOON = 12 * 60


def _staff():
    return (
        Employee(id="a", code="NV001", name="Михаил Орлов", position=Position.THERAPIST),
        Employee(id="b", code="NV002", name="Ольга Романова", position=Position.THERAPIST),
        Employee(id="m", code="NV003", name="Анна Лебедева", position=Position.MANAGER),
        Employee(id="x", code="NV004", name="Дарья Соколова", position=Position.THERAPIST,
                 status=EmployeeStatus.RESIGNED),
    )


def _snapshot(bookings):
    return Snapshot(bookings=tuple(bookings), services=(), employees=_staff())


def test_eligible_staff():
    assert [e.id for e in eligible_staff(_staff())] == ["a", "b"]


def test_filter_bookings_by_date_status_and_staff(make_booking):
    bookings = [
        make_booking(staff_ids=["a"]),
        make_booking(staff_ids=["b"], status=BookingStatus.PENDING),
        make_booking(staff_ids=["a"], date=dt.date(2025, 3, 15)),
    ]

    assert filter_bookings(bookings, DAY) == bookings[:2]
    assert filter_bookings(bookings, DAY, status=BookingStatus.PENDING) == [bookings[1]]
    assert filter_bookings(bookings, DAY, staff_id="a") == [bookings[0]]


def test_search_spans_all_dates(make_booking):
    bookings = [
        make_booking(customer_name="Ирина Петрова"),
        make_booking(customer_name="Ирина Смирнова", date=dt.date(2025, 4, 1)),
        make_booking(customer_name="Олег"),
    ]

    assert filter_bookings(bookings, DAY, search="ирина") == bookings[:2]
    assert filter_bookings(bookings, DAY, search=bookings[2].code.lower()) == [bookings[2]]


def test_staff_status_priority(make_booking):
    bookings = [
        make_booking("12:00", 60, staff_ids=["a"], status=BookingStatus.CONFIRMED),
        make_booking("15:00", 60, staff_ids=["a"], status=BookingStatus.IN_PROGRESS),
    ]

    status = staff_status(bookings, "a", DAY, NOON + 10)

    assert status.is_busy
    assert status.text == "Выполняет услугу до 16:00"


def test_staff_status_confirmed_and_pending(make_booking):
    confirmed = [make_booking("11:30", 60, staff_ids=["a"])]
    pending = [make_booking("11:30", 60, staff_ids=["a"], status=BookingStatus.PENDING)]

    assert staff_status(confirmed, "a", DAY, NOON).text == "Ожидает клиента (к 11:30)"
    assert staff_status(pending, "a", DAY, NOON).text == "Занят до 12:30"
    assert staff_status(confirmed, "a", DAY, NOON + 30).text == "Свободен"
    assert not staff_status(confirmed, "a", DAY + dt.timedelta(days=1), NOON).is_busy


def test_build_timeline_rows(make_booking):
    bookings = [
        make_booking("10:00", 60, staff_ids=["a"], status=BookingStatus.COMPLETED),
        make_booking("10:30", 60, staff_ids=["b"]),
        make_booking("11:00", 30, staff_ids=["a"]),
        make_booking("13:00", 30, staff_ids=["a"], status=BookingStatus.CANCELLED),
    ]

    timeline = build_timeline(_snapshot(bookings), DAY, today=DAY, now_minutes=NOON)

    rows = {row.staff_id: row for row in timeline.staff_rows}
    assert set(rows) == {"a", "b"}
    assert rows["a"].completed_count == 1
    assert len(rows["a"].bookings) == 2
    assert timeline.allocation == {bookings[0].id: 0, bookings[1].id: 1, bookings[2].id: 0}
    assert [len(row.bookings) for row in timeline.room_rows] == [2, 1, 0, 0, 0]
    assert timeline.unallocated == []
    assert timeline.stats.completed == 1
    assert timeline.stats.cancelled == 1
    assert timeline.slots[0] == "10:00" and timeline.slots[-1] == "22:00"


def test_timeline_search_filters_rows(make_booking):
    bookings = [
        make_booking("10:00", 60, staff_ids=["a"], customer_name="Ирина"),
        make_booking("10:00", 60, staff_ids=["b"], customer_name="Олег"),
    ]

    timeline = build_timeline(
        _snapshot(bookings), DAY, TimelineFilters(search="ирина"), today=DAY, now_minutes=NOON
    )

    assert [row.staff_id for row in timeline.staff_rows] == ["a"]
    assert [row.room_index for row in timeline.room_rows] == [0]


def test_available_only_suggests_next_slot(make_booking):
    bookings = [make_booking("10:00", 60, staff_ids=["a"]), make_booking("10:00", 90, staff_ids=["b"])]
    filters = TimelineFilters(available_only=True, start_time="10:00", end_time="10:30")

    timeline = build_timeline(_snapshot(bookings), DAY, filters, today=DAY, now_minutes=NOON, total_rooms=2)

    assert timeline.staff_rows == []
    assert timeline.room_rows == []
    assert timeline.next_available_staff_slot == "11:00"
    assert timeline.next_available_room_slot == "11:00"


def test_available_only_without_suggestion_when_rows_found(make_booking):
    bookings = [make_booking("10:00", 60, staff_ids=["a"])]
    filters = TimelineFilters(available_only=True, start_time="10:00", end_time="10:30")

    timeline = build_timeline(_snapshot(bookings), DAY, filters, today=DAY, now_minutes=NOON)

    assert [row.staff_id for row in timeline.staff_rows] == ["b"]
    assert timeline.next_available_staff_slot is None
    assert timeline.next_available_room_slot is None
    assert [row.room_index for row in timeline.room_rows] == [1, 2, 3, 4]


def test_unallocated_overflow(make_booking):
    bookings = [make_booking("10:00", 60) for _ in range(3)]

    timeline = build_timeline(_snapshot(bookings), DAY, today=DAY, now_minutes=NOON, total_rooms=2)

    assert [b.id for b in timeline.unallocated] == [bookings[2].id]
