import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from .enums import BookingStatus, RejectReason

TIME_PATTERN = r"^\d{1,2}:\d{2}$"


class Booking(BaseModel):
    """Запись клиента на процедуру."""
    id: str
    code: str
    customer_name: str
    customer_phone: str
    service_id: str
    service_name: str = ""
    # Упорядоченный список сотрудников, первый считается основным
    staff_ids: List[str] = Field(default_factory=list)
    staff_name: str = ""
    date: dt.date
    time: str = Field(..., pattern=TIME_PATTERN)
    duration: int
    status: BookingStatus
    notes: Optional[str] = None
    total_amount: float = 0
    discount: float = 0

    @property
    def primary_staff_id(self) -> Optional[str]:
        """Основной сотрудник для отображения в старых полях."""
        return self.staff_ids[0] if self.staff_ids else None


class BookingCandidate(BaseModel):
    """Данные формы создания или редактирования записи."""
    customer_name: str = ""
    customer_phone: str = ""
    service_id: Optional[str] = None
    date: dt.date
    time: str = Field("10:00", pattern=TIME_PATTERN)
    status: BookingStatus = BookingStatus.CONFIRMED
    # Слоты выбора сотрудников, пустые строки означают "не выбран"
    staff_ids: List[str] = Field(default_factory=list)
    discount: float = Field(0, ge=0)
    notes: Optional[str] = None


class StatusUpdate(BaseModel):
    status: BookingStatus


class SubmissionResult(BaseModel):
    """Результат попытки сохранить запись."""
    accepted: bool
    booking: Optional[Booking] = None
    reason: Optional[RejectReason] = None
    message: Optional[str] = None
    # Мягкая блокировка: можно повторить с подтверждением
    requires_confirmation: bool = False
    next_available_time: Optional[str] = None


class RoomAvailability(BaseModel):
    available: bool
    occupied_count: int


class StaffAvailability(BaseModel):
    available: bool
    conflict_end_time: Optional[str] = None


class StaffOption(BaseModel):
    """Вариант в выпадающем списке выбора сотрудника."""
    staff_id: str
    name: str
    available: bool
    label: str
    disabled: bool


class RevenueSummary(BaseModel):
    day: float = 0
    week: float = 0
    month: float = 0
    year: float = 0


class DailyStats(BaseModel):
    completed: int = 0
    cancelled: int = 0
