from typing import Optional

from pydantic import BaseModel, Field

from .enums import EmployeeStatus, Position


class EmployeeBase(BaseModel):
    """Поля сотрудника, которые заполняются в форме."""
    name: str = Field(..., min_length=1)
    position: Position
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    phone: str = ""
    email: str = ""
    avatar: str = ""
    bio: Optional[str] = None


class EmployeeCreate(EmployeeBase):
    # Пустой код будет сгенерирован автоматически (NV###)
    code: str = ""


class Employee(EmployeeBase):
    id: str
    code: str


class BioRequest(BaseModel):
    name: str
    position: Position
