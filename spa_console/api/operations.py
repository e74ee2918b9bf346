import datetime as dt
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from spa_console.api.dependencies import get_booking_service, get_console_state, require_date
from spa_console.core.config import settings
from spa_console.schemas.booking import (
    TIME_PATTERN,
    DailyStats,
    RevenueSummary,
    RoomAvailability,
    StaffAvailability,
    StaffOption,
)
from spa_console.schemas.timeline import Timeline, TimelineFilters
from spa_console.services.availability_service import (
    check_room_availability,
    check_staff_availability,
    free_slots,
    staff_picker_options,
)
from spa_console.services.booking_service import BookingService
from spa_console.services.console_state import ConsoleState
from spa_console.services.revenue_service import daily_stats, revenue_summary
from spa_console.services.room_allocator import allocate_rooms
from spa_console.services.slot_formatter import SlotFormatter
from spa_console.services.time_grid import slot_sequence, to_minutes
from spa_console.services.timeline_service import build_timeline

# Получаем логгер для этого модуля
logger = logging.getLogger(__name__)

router = APIRouter()


def _bookings_for(state: ConsoleState, day: dt.date):
    return [b for b in state.snapshot().bookings if b.date == day]


@router.get("/slots", response_model=List[str])
def list_time_slots():
    """Сетка рабочего дня с шагом 10 минут."""
    return slot_sequence()


@router.get("/rooms/availability", response_model=RoomAvailability)
def room_availability_endpoint(
    date: str,
    time: str = Query(..., pattern=TIME_PATTERN),
    duration: int = Query(..., gt=0),
    exclude_id: Optional[str] = None,
    state: ConsoleState = Depends(get_console_state)
):
    day = require_date(date)
    return check_room_availability(
        state.snapshot().bookings, day, time, duration, exclude_id, settings.TOTAL_ROOMS
    )


@router.get("/staff/{staff_id}/availability", response_model=StaffAvailability)
def staff_availability_endpoint(
    staff_id: str,
    date: str,
    time: str = Query(..., pattern=TIME_PATTERN),
    duration: int = Query(..., gt=0),
    exclude_id: Optional[str] = None,
    state: ConsoleState = Depends(get_console_state)
):
    day = require_date(date)
    return check_staff_availability(state.snapshot().bookings, staff_id, day, time, duration, exclude_id)


@router.get("/rooms/allocation", response_model=Dict[str, Optional[int]])
def room_allocation_endpoint(date: str, state: ConsoleState = Depends(get_console_state)):
    """Распределение записей дня по комнатам (None - комнаты не нашлось)."""
    day = require_date(date)
    return allocate_rooms(_bookings_for(state, day), settings.TOTAL_ROOMS)


@router.get("/next-slot")
def next_slot_endpoint(
    date: str,
    from_time: str = Query(..., pattern=TIME_PATTERN),
    duration: int = Query(..., gt=0),
    exclude_id: Optional[str] = None,
    service: BookingService = Depends(get_booking_service)
):
    day = require_date(date)
    return {"next_available_time": service.next_available_slot(day, from_time, duration, exclude_id)}


@router.get("/free-slots")
def free_slots_endpoint(
    date: str,
    duration: int = Query(..., gt=0),
    exclude_id: Optional[str] = None,
    state: ConsoleState = Depends(get_console_state)
):
    """Слоты со свободной комнатой и их текстовое описание диапазонами."""
    day = require_date(date)
    slots = free_slots(state.snapshot().bookings, day, duration, exclude_id, settings.TOTAL_ROOMS)
    return {"slots": slots, "text": SlotFormatter.format_slots_to_ranges(slots)}


@router.get("/staff-options", response_model=List[StaffOption])
def staff_options_endpoint(
    date: str,
    time: str = Query("", pattern=r"^(\d{1,2}:\d{2})?$"),
    service_id: Optional[str] = None,
    selected: List[str] = Query(default=[]),
    slot: int = Query(0, ge=0),
    exclude_id: Optional[str] = None,
    state: ConsoleState = Depends(get_console_state)
):
    """Варианты выбора сотрудника для слота формы записи."""
    day = require_date(date)
    snapshot = state.snapshot()
    service = snapshot.find_service(service_id)
    duration = service.duration if service else None
    return staff_picker_options(
        snapshot.employees, snapshot.bookings, day, time, duration, selected, slot, exclude_id
    )


@router.get("/staff-slots", response_model=List[str])
def staff_slots_endpoint(
    service_id: str,
    current: List[str] = Query(default=[]),
    service: BookingService = Depends(get_booking_service)
):
    """Слоты выбора сотрудников после смены услуги."""
    return service.staff_slots_for_service(service_id, current)


@router.get("/revenue", response_model=RevenueSummary)
def revenue_endpoint(date: str, state: ConsoleState = Depends(get_console_state)):
    day = require_date(date)
    return revenue_summary(state.snapshot().bookings, day)


@router.get("/stats", response_model=DailyStats)
def stats_endpoint(date: str, state: ConsoleState = Depends(get_console_state)):
    day = require_date(date)
    return daily_stats(state.snapshot().bookings, day)


@router.get("/timeline", response_model=Timeline)
def timeline_endpoint(
    date: str,
    search: str = "",
    staff_id: Optional[str] = None,
    available_only: bool = False,
    start_time: str = Query("10:00", pattern=TIME_PATTERN),
    end_time: str = Query("22:00", pattern=TIME_PATTERN),
    state: ConsoleState = Depends(get_console_state)
):
    """Таймлайн дня по сотрудникам и комнатам."""
    day = require_date(date)
    filters = TimelineFilters(
        search=search,
        staff_id=staff_id,
        available_only=available_only,
        start_time=start_time,
        end_time=end_time,
    )
    if to_minutes(end_time) < to_minutes(start_time):
        raise HTTPException(status_code=422, detail="Конец окна раньше начала")
    return build_timeline(state.snapshot(), day, filters, total_rooms=settings.TOTAL_ROOMS)
