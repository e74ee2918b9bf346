"""
Тесты распределения записей по комнатам.
"""

from spa_console.schemas.enums import BookingStatus
from spa_console.services.room_allocator import allocate_rooms, room_rows
from spa_console.services.time_grid import to_minutes


def test_sequential_bookings_share_room(make_booking):
    first = make_booking("10:00", 60)
    second = make_booking("11:00", 60)

    allocation = allocate_rooms([second, first])

    assert allocation == {first.id: 0, second.id: 0}


def test_overlapping_bookings_take_next_room(make_booking):
    bookings = [make_booking("10:00", 60), make_booking("10:30", 60), make_booking("10:40", 30)]

    allocation = allocate_rooms(bookings)

    assert [allocation[b.id] for b in bookings] == [0, 1, 2]


def test_overflow_is_unassigned(make_booking):
    bookings = [make_booking("10:00", 60) for _ in range(6)]

    allocation = allocate_rooms(bookings, total_rooms=5)

    assert [allocation[b.id] for b in bookings] == [0, 1, 2, 3, 4, None]


def test_cancelled_are_not_allocated(make_booking):
    cancelled = make_booking("10:00", 60, status=BookingStatus.CANCELLED)
    active = make_booking("10:00", 60)

    allocation = allocate_rooms([cancelled, active])

    assert cancelled.id not in allocation
    assert allocation[active.id] == 0


def test_completed_still_occupy_rooms(make_booking):
    completed = make_booking("10:00", 60, status=BookingStatus.COMPLETED)
    active = make_booking("10:30", 30)

    allocation = allocate_rooms([completed, active])

    assert allocation[active.id] == 1


def test_allocation_is_idempotent(make_booking):
    bookings = [make_booking(t, 50) for t in ("12:00", "10:00", "10:00", "11:00")]

    assert allocate_rooms(bookings) == allocate_rooms(list(bookings))


def test_room_rows_groups_by_index(make_booking):
    bookings = [make_booking("10:00", 60), make_booking("10:00", 60), make_booking("11:00", 30)]
    allocation = allocate_rooms(bookings, total_rooms=2)

    rows = room_rows(bookings, allocation, total_rooms=2)

    assert [b.id for b in rows[0]] == [bookings[0].id, bookings[2].id]
    assert [b.id for b in rows[1]] == [bookings[1].id]


def test_no_two_bookings_share_a_room_at_once(make_booking):
    schedule = [
        ("10:00", 60), ("10:00", 30), ("10:20", 90), ("10:30", 30), ("10:30", 120),
        ("11:00", 60), ("11:00", 10), ("11:10", 50), ("12:00", 60), ("12:00", 60),
        ("12:30", 30), ("12:40", 80), ("13:00", 60), ("14:00", 20), ("14:00", 40),
    ]
    bookings = [make_booking(time, duration) for time, duration in schedule]
    bookings.append(make_booking("10:10", 60, status=BookingStatus.COMPLETED))
    bookings.append(make_booking("10:10", 60, status=BookingStatus.CANCELLED))

    allocation = allocate_rooms(bookings, total_rooms=4)

    by_room = {}
    for booking in bookings:
        room = allocation.get(booking.id)
        if room is not None:
            by_room.setdefault(room, []).append(booking)
    assert set(by_room) <= {0, 1, 2, 3}
    for room_bookings in by_room.values():
        intervals = sorted(
            (to_minutes(b.time), to_minutes(b.time) + b.duration) for b in room_bookings
        )
        for (_, previous_end), (next_start, _) in zip(intervals, intervals[1:]):
            assert previous_end <= next_start
