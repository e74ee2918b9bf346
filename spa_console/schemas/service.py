from pydantic import BaseModel, Field

from .enums import ServiceCategory, ServiceStatus


class ServiceBase(BaseModel):
    """Поля услуги, которые заполняются в форме."""
    name: str = Field(..., min_length=1)
    category: ServiceCategory = ServiceCategory.OTHER
    duration: int = Field(..., gt=0)
    price: float = Field(0, ge=0)
    staff_count: int = Field(1, ge=0)
    status: ServiceStatus = ServiceStatus.ACTIVE
    description: str = ""
    image: str = ""


class ServiceCreate(ServiceBase):
    # Пустой код будет сгенерирован автоматически (DV###)
    code: str = ""


class Service(ServiceBase):
    id: str
    code: str
