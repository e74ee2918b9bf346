import uuid

from sqlalchemy import JSON, Column, Float, Index, Integer, String, Text

from spa_console.core.database import Base


class BookingRecord(Base):
    """Модель для хранения записей клиентов"""

    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(16), nullable=False)
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(32), nullable=False)
    service_id = Column(String(36), nullable=False)
    service_name = Column(String(255), nullable=True)
    # Все назначенные сотрудники, первый считается основным
    staff_ids = Column(JSON, nullable=False, default=list)
    staff_name = Column(String(512), nullable=True)
    date = Column(String(10), nullable=False)
    time = Column(String(5), nullable=False)
    duration = Column(Integer, nullable=False)
    status = Column(String(32), nullable=False)
    notes = Column(Text, nullable=True)
    total_amount = Column(Float, nullable=False, default=0)
    discount = Column(Float, nullable=False, default=0)

    __table_args__ = (
        Index('idx_bookings_date_time', 'date', 'time'),
    )
