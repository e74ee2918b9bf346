"""
Репозиторий для работы с сотрудниками
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from spa_console.models.employee import EmployeeRecord
from spa_console.schemas.employee import Employee
from spa_console.schemas.enums import EmployeeStatus, Position
from .base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeRecord]):
    """Репозиторий для работы с сотрудниками"""

    def __init__(self, session: Session):
        super().__init__(EmployeeRecord, session)

    def list_employees(self, **conditions: Any) -> List[Employee]:
        """Сотрудники, опционально с фильтром по равенству полей"""
        records = self.filter_by(**conditions) if conditions else self.get_all()
        return [self.to_domain(record) for record in records]

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        record = self.get_by_id(employee_id)
        return self.to_domain(record) if record else None

    def create_employee(self, fields: Dict[str, Any]) -> Employee:
        return self.to_domain(self.create(fields))

    def update_employee(self, employee_id: str, fields: Dict[str, Any]) -> Optional[Employee]:
        record = self.update(employee_id, fields)
        return self.to_domain(record) if record else None

    @staticmethod
    def to_domain(record: EmployeeRecord) -> Employee:
        """Конвертирует строку хранилища в доменный объект"""
        return Employee(
            id=record.id,
            code=record.code,
            name=record.name,
            avatar=record.avatar or "",
            position=Position(record.position),
            status=EmployeeStatus(record.status),
            phone=record.phone or "",
            email=record.email or "",
            bio=record.bio,
        )
