"""
Общие фикстуры: in-memory SQLite, справочники салона и состояние консоли.
"""

import datetime as dt
import uuid

import pytest

from spa_console.core.database import close_database, configure_database, get_session_factory, init_database
from spa_console.repositories.booking_repository import BookingRepository
from spa_console.repositories.employee_repository import EmployeeRepository
from spa_console.repositories.service_repository import ServiceRepository, services_cache
from spa_console.schemas.booking import Booking
from spa_console.schemas.enums import BookingStatus
from spa_console.services.booking_service import BookingService
from spa_console.services.console_state import ConsoleState

# Пятница
DAY = dt.date(2025, 3, 14)


@pytest.fixture
def make_booking():
    """Фабрика доменных записей для чистых функций."""
    counter = {"n": 0}

    def factory(time="10:00", duration=60, staff_ids=None, status=BookingStatus.CONFIRMED, date=DAY, **fields):
        counter["n"] += 1
        values = {
            "id": str(uuid.uuid4()),
            "code": f"BK{counter['n']:03d}",
            "customer_name": f"Клиент {counter['n']}",
            "customer_phone": f"+7900000{counter['n']:04d}",
            "service_id": "svc",
            "service_name": "Массаж",
            "staff_ids": staff_ids or [],
            "date": date,
            "time": time,
            "duration": duration,
            "status": status,
        }
        values.update(fields)
        return Booking(**values)

    return factory


@pytest.fixture
def db_session():
    configure_database("sqlite://")
    init_database()
    services_cache.clear()
    session = get_session_factory()()
    yield session
    session.close()
    close_database()
    services_cache.clear()


@pytest.fixture
def catalog(db_session):
    """Сотрудники и услуги салона в хранилище."""
    employees = EmployeeRepository(db_session)
    services = ServiceRepository(db_session)

    staff = {}
    for code, key, name, position, status in [
        ("NV001", "misha", "Михаил Орлов", "therapist", "active"),
        ("NV002", "olga", "Ольга Романова", "therapist", "active"),
        ("NV003", "katya", "Екатерина Белова", "therapist", "active"),
        ("NV004", "masha", "Мария Кузнецова", "therapist", "active"),
        ("NV005", "anna", "Анна Лебедева", "manager", "active"),
        ("NV006", "darya", "Дарья Соколова", "therapist", "on_leave"),
    ]:
        staff[key] = employees.create_employee({
            "code": code, "name": name, "position": position, "status": status,
        })

    catalog_services = {}
    for code, key, name, duration, price, staff_count in [
        ("DV001", "massage", "Массаж 60", 60, 500000, 1),
        ("DV002", "aroma", "Арома-массаж 60", 60, 400000, 1),
        ("DV003", "combo", "Комплекс 120", 120, 850000, 2),
        ("DV004", "sauna", "Сауна", 30, 100000, 0),
    ]:
        catalog_services[key] = services.create_service({
            "code": code, "name": name, "category": "massage",
            "duration": duration, "price": price, "staff_count": staff_count, "status": "active",
        })

    return {"staff": staff, "services": catalog_services}


@pytest.fixture
def console(db_session, catalog):
    state = ConsoleState()
    state.load(db_session)
    return state


@pytest.fixture
def booking_service(db_session, console):
    return BookingService(BookingRepository(db_session), console, total_rooms=5, enforce_staff_conflicts=True)
