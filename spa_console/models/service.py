import uuid

from sqlalchemy import Column, Float, Integer, String, Text

from spa_console.core.database import Base


class ServiceRecord(Base):
    """Модель для хранения услуг спа"""

    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(16), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    image = Column(String(512), nullable=True)
    category = Column(String(32), nullable=False)
    duration = Column(Integer, nullable=False)
    price = Column(Float, nullable=False, default=0)
    # Сколько сотрудников нужно для одной процедуры
    staff_count = Column(Integer, nullable=False, default=1)
    status = Column(String(32), nullable=False)
    description = Column(Text, nullable=True)
