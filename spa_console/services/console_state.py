"""
Состояние консоли: снимок записей, услуг и сотрудников в памяти.

Изменения применяются только после того, как хранилище подтвердило запись.
Функции расписания получают неизменяемые снимки и ничего не меняют сами.
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from spa_console.repositories.booking_repository import BookingRepository
from spa_console.repositories.employee_repository import EmployeeRepository
from spa_console.repositories.service_repository import ServiceRepository
from spa_console.schemas.booking import Booking
from spa_console.schemas.employee import Employee
from spa_console.schemas.service import Service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    bookings: Tuple[Booking, ...]
    services: Tuple[Service, ...]
    employees: Tuple[Employee, ...]

    def find_booking(self, booking_id: str) -> Optional[Booking]:
        return next((b for b in self.bookings if b.id == booking_id), None)

    def find_service(self, service_id: Optional[str]) -> Optional[Service]:
        if not service_id:
            return None
        return next((s for s in self.services if s.id == service_id), None)

    def find_employee(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self.employees if e.id == employee_id), None)


class ConsoleState:
    """Контейнер состояния сессии фронт-деска."""

    def __init__(
        self,
        bookings: Optional[List[Booking]] = None,
        services: Optional[List[Service]] = None,
        employees: Optional[List[Employee]] = None
    ):
        self._lock = threading.Lock()
        self._bookings: List[Booking] = list(bookings or [])
        self._services: List[Service] = list(services or [])
        self._employees: List[Employee] = list(employees or [])

    def load(self, session: Session) -> None:
        """Загружает полный снимок из хранилища."""
        bookings = BookingRepository(session).list_bookings()
        services = ServiceRepository(session).list_services()
        employees = EmployeeRepository(session).list_employees()

        with self._lock:
            self._bookings = bookings
            self._services = services
            self._employees = employees

        logger.info(
            f"📦 [STATE] Снимок загружен: записей={len(bookings)}, "
            f"услуг={len(services)}, сотрудников={len(employees)}"
        )

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                bookings=tuple(self._bookings),
                services=tuple(self._services),
                employees=tuple(self._employees),
            )

    # --- Записи: создание добавляет в начало, обновление заменяет по ID ---

    def commit_booking_created(self, booking: Booking) -> None:
        with self._lock:
            self._bookings = [booking] + self._bookings

    def commit_booking_updated(self, booking: Booking) -> None:
        with self._lock:
            self._bookings = [booking if b.id == booking.id else b for b in self._bookings]

    # --- Справочники ---

    def commit_service_created(self, service: Service) -> None:
        with self._lock:
            self._services = [service] + self._services

    def commit_service_updated(self, service: Service) -> None:
        with self._lock:
            self._services = [service if s.id == service.id else s for s in self._services]

    def commit_service_deleted(self, service_id: str) -> None:
        with self._lock:
            self._services = [s for s in self._services if s.id != service_id]

    def commit_employee_created(self, employee: Employee) -> None:
        with self._lock:
            self._employees = [employee] + self._employees

    def commit_employee_updated(self, employee: Employee) -> None:
        with self._lock:
            self._employees = [employee if e.id == employee.id else e for e in self._employees]

    def commit_employee_deleted(self, employee_id: str) -> None:
        with self._lock:
            self._employees = [e for e in self._employees if e.id != employee_id]
