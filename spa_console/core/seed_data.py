"""
Демо-данные для пустой базы: сотрудники и услуги спа-салона.
"""

import logging

from sqlalchemy.orm import Session

from spa_console.repositories.employee_repository import EmployeeRepository
from spa_console.repositories.service_repository import ServiceRepository
from spa_console.schemas.enums import EmployeeStatus, Position, ServiceCategory, ServiceStatus

logger = logging.getLogger(__name__)

DEMO_EMPLOYEES = [
    {"code": "NV001", "name": "Анна Лебедева", "position": Position.MANAGER,
     "status": EmployeeStatus.ACTIVE, "phone": "+79011234567", "email": "anna@lotusspa.ru"},
    {"code": "NV002", "name": "Михаил Орлов", "position": Position.THERAPIST,
     "status": EmployeeStatus.ACTIVE, "phone": "+79019876543", "email": "mikhail@lotusspa.ru"},
    {"code": "NV003", "name": "Дарья Соколова", "position": Position.RECEPTIONIST,
     "status": EmployeeStatus.ON_LEAVE, "phone": "+79121234567", "email": "darya@lotusspa.ru"},
    {"code": "NV004", "name": "Ольга Романова", "position": Position.THERAPIST,
     "status": EmployeeStatus.ACTIVE, "phone": "+79876543210", "email": "olga@lotusspa.ru"},
    {"code": "NV005", "name": "Екатерина Белова", "position": Position.THERAPIST,
     "status": EmployeeStatus.ACTIVE, "phone": "+79331112233", "email": "ekaterina@lotusspa.ru"},
    {"code": "NV006", "name": "Сергей Волков", "position": Position.SECURITY,
     "status": EmployeeStatus.ACTIVE, "phone": "+79445556677", "email": "sergey@lotusspa.ru"},
    {"code": "NV007", "name": "Мария Кузнецова", "position": Position.THERAPIST,
     "status": EmployeeStatus.ACTIVE, "phone": "+79778889900", "email": "maria@lotusspa.ru"},
]

DEMO_SERVICES = [
    {"code": "DV001", "name": "Массаж тела горячими камнями", "category": ServiceCategory.MASSAGE,
     "duration": 90, "price": 500000, "staff_count": 1,
     "description": "Расслабляющий массаж всего тела с горячими базальтовыми камнями."},
    {"code": "DV002", "name": "Оздоровительное мытье головы", "category": ServiceCategory.SKIN_CARE,
     "duration": 60, "price": 250000, "staff_count": 1,
     "description": "Очищение кожи головы, массаж шейно-воротниковой зоны с травами."},
    {"code": "DV003", "name": "Комплекс Глубокое расслабление", "category": ServiceCategory.COMBO,
     "duration": 120, "price": 850000, "staff_count": 2,
     "description": "Массаж тела и базовый уход за кожей лица."},
    {"code": "DV004", "name": "Арома-массаж 60", "category": ServiceCategory.MASSAGE,
     "duration": 60, "price": 400000, "staff_count": 1},
    {"code": "DV005", "name": "Арома-массаж 90", "category": ServiceCategory.MASSAGE,
     "duration": 90, "price": 600000, "staff_count": 1},
    {"code": "DV006", "name": "Арома-массаж 120", "category": ServiceCategory.MASSAGE,
     "duration": 120, "price": 800000, "staff_count": 1},
    {"code": "DV007", "name": "Массаж шейно-воротниковой зоны", "category": ServiceCategory.MASSAGE,
     "duration": 30, "price": 200000, "staff_count": 1,
     "description": "Быстро снимает напряжение и усталость в шее и плечах."},
]


def seed_if_empty(session: Session) -> None:
    """Заполняет справочники демо-данными, если таблицы пусты."""
    employees = EmployeeRepository(session)
    if not employees.get_all():
        for item in DEMO_EMPLOYEES:
            employees.create_employee({
                **item,
                "position": item["position"].value,
                "status": item["status"].value,
            })
        logger.info(f"🌱 [SEED] Добавлено сотрудников: {len(DEMO_EMPLOYEES)}")

    services = ServiceRepository(session)
    if not services.get_all():
        for item in DEMO_SERVICES:
            services.create_service({
                **item,
                "category": item["category"].value,
                "status": ServiceStatus.ACTIVE.value,
            })
        logger.info(f"🌱 [SEED] Добавлено услуг: {len(DEMO_SERVICES)}")
