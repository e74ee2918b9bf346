"""
Тесты проверки занятости комнат и сотрудников.
"""

from conftest import DAY
from spa_console.schemas.employee import Employee
from spa_console.schemas.enums import BookingStatus, EmployeeStatus, Position
from spa_console.services.availability_service import (
    check_room_availability,
    check_staff_availability,
    free_slots,
    is_blocking,
    overlaps,
    staff_picker_options,
)


def test_blocking_statuses():
    assert is_blocking(BookingStatus.PENDING)
    assert is_blocking(BookingStatus.CONFIRMED)
    assert is_blocking(BookingStatus.IN_PROGRESS)
    assert not is_blocking(BookingStatus.COMPLETED)
    assert not is_blocking(BookingStatus.CANCELLED)


def test_overlaps_half_open():
    assert overlaps(600, 660, 630, 690)
    assert not overlaps(600, 660, 660, 720)
    assert not overlaps(660, 720, 600, 660)
    assert overlaps(600, 720, 630, 640)


def test_staff_conflict_reports_end_time(make_booking):
    bookings = [make_booking("10:00", 60, staff_ids=["a"])]

    result = check_staff_availability(bookings, "a", DAY, "10:30", 30)

    assert not result.available
    assert result.conflict_end_time == "11:00"


def test_staff_touching_boundaries_are_free(make_booking):
    bookings = [make_booking("10:00", 60, staff_ids=["a"])]

    assert check_staff_availability(bookings, "a", DAY, "11:00", 60).available
    assert check_staff_availability(bookings, "a", DAY, "9:00", 60).available


def test_staff_secondary_assignment_counts(make_booking):
    bookings = [make_booking("10:00", 120, staff_ids=["a", "b"])]

    assert not check_staff_availability(bookings, "b", DAY, "11:00", 30).available


def test_staff_ignores_non_blocking_and_other_days(make_booking):
    bookings = [
        make_booking("10:00", 60, staff_ids=["a"], status=BookingStatus.COMPLETED),
        make_booking("10:00", 60, staff_ids=["a"], status=BookingStatus.CANCELLED),
        make_booking("10:00", 60, staff_ids=["a"], date=DAY.replace(day=15)),
    ]

    assert check_staff_availability(bookings, "a", DAY, "10:00", 60).available


def test_staff_excludes_edited_booking(make_booking):
    own = make_booking("10:00", 60, staff_ids=["a"])

    assert check_staff_availability([own], "a", DAY, "10:00", 60, exclude_booking_id=own.id).available


def test_rooms_full_at_capacity(make_booking):
    bookings = [make_booking("10:00", 60) for _ in range(5)]

    result = check_room_availability(bookings, DAY, "10:00", 60)

    assert not result.available
    assert result.occupied_count == 5
    assert check_room_availability(bookings, DAY, "11:00", 60).available


def test_rooms_never_free_up_when_bookings_are_added(make_booking):
    bookings = []
    previous = check_room_availability(bookings, DAY, "11:00", 60)
    for time, duration in [("10:30", 60), ("11:00", 30), ("11:40", 60), ("10:00", 90), ("11:50", 20), ("11:20", 10)]:
        bookings.append(make_booking(time, duration, status=BookingStatus.PENDING))
        current = check_room_availability(bookings, DAY, "11:00", 60)

        assert current.occupied_count >= previous.occupied_count
        assert previous.available or not current.available
        previous = current

    assert not previous.available


def test_rooms_count_unstaffed_and_skip_cancelled(make_booking):
    bookings = [make_booking("10:00", 60) for _ in range(4)]
    bookings.append(make_booking("10:30", 60, status=BookingStatus.CANCELLED))

    result = check_room_availability(bookings, DAY, "10:00", 60)

    assert result.available
    assert result.occupied_count == 4


def test_rooms_exclude_edited_booking(make_booking):
    bookings = [make_booking("10:00", 60) for _ in range(5)]

    result = check_room_availability(bookings, DAY, "10:00", 60, exclude_booking_id=bookings[0].id)

    assert result.available
    assert result.occupied_count == 4


def test_free_slots(make_booking):
    bookings = [make_booking("10:00", 60) for _ in range(5)]

    slots = free_slots(bookings, DAY, 30, total_rooms=5)

    assert "10:00" not in slots
    assert "10:30" not in slots
    assert slots[0] == "11:00"


def _employee(id, name, position=Position.THERAPIST, status=EmployeeStatus.ACTIVE):
    return Employee(id=id, code=f"NV-{id}", name=name, position=position, status=status)


def test_staff_picker_options(make_booking):
    employees = [
        _employee("a", "Михаил"),
        _employee("b", "Ольга"),
        _employee("c", "Екатерина"),
        _employee("m", "Анна", position=Position.MANAGER),
        _employee("x", "Дарья", status=EmployeeStatus.ON_LEAVE),
    ]
    bookings = [make_booking("10:00", 90, staff_ids=["a"])]

    options = staff_picker_options(employees, bookings, DAY, "10:30", 60, selected_ids=["", "c"], slot=0)
    by_id = {o.staff_id: o for o in options}

    assert set(by_id) == {"a", "b", "c"}
    assert by_id["a"].label == "Михаил (Занят до 11:30)"
    assert by_id["a"].disabled
    assert by_id["b"].label == "Ольга (Свободен)"
    assert not by_id["b"].disabled
    # Выбрана в другом слоте
    assert by_id["c"].available
    assert by_id["c"].disabled


def test_staff_picker_without_service_marks_everyone_free(make_booking):
    bookings = [make_booking("10:00", 90, staff_ids=["a"])]

    options = staff_picker_options([_employee("a", "Михаил")], bookings, DAY, "10:30", None, [], 0)

    assert options[0].available
