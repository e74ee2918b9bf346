import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from spa_console.api.dependencies import get_booking_service, get_console_state, require_date
from spa_console.schemas.booking import Booking, BookingCandidate, StatusUpdate, SubmissionResult
from spa_console.schemas.enums import BookingStatus, RejectReason
from spa_console.services.booking_service import BookingService, quick_actions
from spa_console.services.console_state import ConsoleState
from spa_console.services.timeline_service import filter_bookings

# Получаем логгер для этого модуля
logger = logging.getLogger(__name__)

router = APIRouter()

# Отказы, которые пользователь может исправить в форме
REJECT_STATUS_CODES = {
    RejectReason.NO_SERVICE: 422,
    RejectReason.NOT_ENOUGH_STAFF: 422,
    RejectReason.ROOM_FULL: 409,
    RejectReason.STAFF_CONFLICT: 409,
    RejectReason.NOT_FOUND: 404,
    RejectReason.STORE_FAILURE: 502,
}


def _raise_rejection(result: SubmissionResult) -> None:
    """Превращает отказ сервиса в HTTP ошибку с полным результатом в detail."""
    status_code = REJECT_STATUS_CODES.get(result.reason, 400)
    raise HTTPException(
        status_code=status_code,
        detail=result.model_dump(mode="json", exclude={"booking"}),
    )


@router.get("", response_model=List[Booking])
def list_bookings(
    date: str,
    status: Optional[BookingStatus] = None,
    staff_id: Optional[str] = None,
    search: str = "",
    state: ConsoleState = Depends(get_console_state)
):
    """
    Список записей. Без поиска - только выбранный день,
    с поиском - по всем датам.
    """
    day = require_date(date)
    return filter_bookings(state.snapshot().bookings, day, status, staff_id, search)


@router.get("/{booking_id}", response_model=Booking)
def get_booking(booking_id: str, state: ConsoleState = Depends(get_console_state)):
    booking = state.snapshot().find_booking(booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail=f"Запись {booking_id} не найдена")
    return booking


@router.post("", response_model=Booking, status_code=201)
def create_booking(
    candidate: BookingCandidate,
    confirm_overbook: bool = False,
    service: BookingService = Depends(get_booking_service)
):
    """
    Создает запись.

    Если все комнаты заняты, отвечает 409 с requires_confirmation
    и ближайшим свободным временем; повтор с confirm_overbook=true сохраняет запись.
    """
    result = service.submit_booking(candidate, confirm_overbook=confirm_overbook)
    if not result.accepted:
        _raise_rejection(result)
    return result.booking


@router.put("/{booking_id}", response_model=Booking)
def update_booking(
    booking_id: str,
    candidate: BookingCandidate,
    confirm_overbook: bool = False,
    service: BookingService = Depends(get_booking_service)
):
    result = service.submit_booking(candidate, booking_id=booking_id, confirm_overbook=confirm_overbook)
    if not result.accepted:
        _raise_rejection(result)
    return result.booking


@router.patch("/{booking_id}/status", response_model=Booking)
def update_booking_status(
    booking_id: str,
    update: StatusUpdate,
    service: BookingService = Depends(get_booking_service)
):
    """Быстрая смена статуса без повторной проверки комнат."""
    result = service.update_status(booking_id, update.status)
    if not result.accepted:
        _raise_rejection(result)
    return result.booking


@router.get("/{booking_id}/actions", response_model=List[BookingStatus])
def booking_quick_actions(booking_id: str, state: ConsoleState = Depends(get_console_state)):
    booking = state.snapshot().find_booking(booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail=f"Запись {booking_id} не найдена")
    return quick_actions(booking.status)
