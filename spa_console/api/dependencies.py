"""
Общие зависимости FastAPI: состояние консоли, сервисы и разбор дат.
"""

import datetime as dt

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from spa_console.core.database import get_db
from spa_console.repositories.base import RecordStoreError
from spa_console.repositories.booking_repository import BookingRepository
from spa_console.services.booking_service import BookingService
from spa_console.services.console_state import ConsoleState
from spa_console.services.llm_service import LLMService, get_llm_service
from spa_console.utils.date_parser import parse_date


def get_console_state(request: Request) -> ConsoleState:
    """Состояние консоли, созданное при старте приложения."""
    return request.app.state.console


def get_booking_service(
    db: Session = Depends(get_db),
    state: ConsoleState = Depends(get_console_state)
) -> BookingService:
    return BookingService(BookingRepository(db), state)


def get_llm() -> LLMService:
    return get_llm_service()


def require_date(value: str) -> dt.date:
    """Разбирает дату из параметра запроса или отвечает 422."""
    parsed = parse_date(value)
    if parsed is None:
        raise HTTPException(status_code=422, detail=f"Не удалось разобрать дату: {value}")
    return parsed


def store_error(error: RecordStoreError) -> HTTPException:
    """Ошибка хранилища в виде ответа 502."""
    return HTTPException(status_code=502, detail=str(error))
