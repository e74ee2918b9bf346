"""
Репозиторий для работы с записями клиентов
"""

import datetime as dt
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from spa_console.models.booking import BookingRecord
from spa_console.schemas.booking import Booking
from spa_console.schemas.enums import BookingStatus
from spa_console.utils.codes import code_number
from .base import BaseRepository, RecordStoreError


class BookingRepository(BaseRepository[BookingRecord]):
    """Репозиторий для работы с записями клиентов"""

    def __init__(self, session: Session):
        super().__init__(BookingRecord, session)

    def list_bookings(self) -> List[Booking]:
        """Все записи в виде доменных объектов, новые (по коду) первыми"""
        bookings = [self.to_domain(record) for record in self.get_all()]
        bookings.sort(key=lambda booking: code_number("BK", booking.code), reverse=True)
        return bookings

    def create_booking(self, fields: Dict[str, Any]) -> Booking:
        """Создает запись и возвращает ее с ID, присвоенным хранилищем"""
        return self.to_domain(self.create(fields))

    def update_booking(self, booking_id: str, fields: Dict[str, Any]) -> Booking:
        """Обновляет запись по ID"""
        record = self.update(booking_id, fields)
        if record is None:
            raise RecordStoreError(f"Запись {booking_id} не найдена в хранилище")
        return self.to_domain(record)

    @staticmethod
    def to_record_fields(booking: Booking) -> Dict[str, Any]:
        """Плоский набор полей для хранилища (без ID)"""
        return {
            'code': booking.code,
            'customer_name': booking.customer_name,
            'customer_phone': booking.customer_phone,
            'service_id': booking.service_id,
            'service_name': booking.service_name,
            'staff_ids': list(booking.staff_ids),
            'staff_name': booking.staff_name,
            'date': booking.date.isoformat(),
            'time': booking.time,
            'duration': booking.duration,
            'status': booking.status.value,
            'notes': booking.notes,
            'total_amount': booking.total_amount,
            'discount': booking.discount,
        }

    @staticmethod
    def to_domain(record: BookingRecord) -> Booking:
        """Конвертирует строку хранилища в доменный объект"""
        return Booking(
            id=record.id,
            code=record.code,
            customer_name=record.customer_name,
            customer_phone=record.customer_phone,
            service_id=record.service_id,
            service_name=record.service_name or "",
            staff_ids=list(record.staff_ids or []),
            staff_name=record.staff_name or "",
            date=dt.date.fromisoformat(record.date),
            time=record.time,
            duration=record.duration,
            status=BookingStatus(record.status),
            notes=record.notes,
            total_amount=record.total_amount or 0,
            discount=record.discount or 0,
        )
