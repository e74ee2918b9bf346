import uuid

from sqlalchemy import Column, String, Text

from spa_console.core.database import Base


class EmployeeRecord(Base):
    """Модель для хранения информации о сотрудниках"""

    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(16), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    avatar = Column(String(512), nullable=True)
    position = Column(String(32), nullable=False)
    status = Column(String(32), nullable=False)
    phone = Column(String(32), nullable=True)
    email = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
