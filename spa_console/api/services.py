import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from spa_console.api.dependencies import get_console_state, store_error
from spa_console.core.database import get_db
from spa_console.repositories.base import RecordStoreError
from spa_console.repositories.service_repository import ServiceRepository
from spa_console.schemas.enums import ServiceCategory, ServiceStatus
from spa_console.schemas.service import Service, ServiceCreate
from spa_console.services.console_state import ConsoleState
from spa_console.utils.codes import next_sequential_code

# Получаем логгер для этого модуля
logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Service])
def list_services(
    category: Optional[ServiceCategory] = None,
    status: Optional[ServiceStatus] = None,
    state: ConsoleState = Depends(get_console_state)
):
    return [
        s for s in state.snapshot().services
        if (category is None or s.category == category) and (status is None or s.status == status)
    ]


@router.post("", response_model=Service, status_code=201)
def create_service(
    data: ServiceCreate,
    db: Session = Depends(get_db),
    state: ConsoleState = Depends(get_console_state)
):
    """Создает услугу. Пустой код заменяется следующим DV###."""
    fields = data.model_dump(mode="json")
    if not fields["code"]:
        fields["code"] = next_sequential_code("DV", (s.code for s in state.snapshot().services))

    try:
        service = ServiceRepository(db).create_service(fields)
    except RecordStoreError as e:
        raise store_error(e)

    state.commit_service_created(service)
    logger.info(f"✅ [SERVICES] Услуга создана: {service.code} {service.name}")
    return service


@router.put("/{service_id}", response_model=Service)
def update_service(
    service_id: str,
    data: ServiceCreate,
    db: Session = Depends(get_db),
    state: ConsoleState = Depends(get_console_state)
):
    """Существующие записи хранят снимок названия и длительности, их изменение не затрагивает."""
    fields = data.model_dump(mode="json")
    if not fields["code"]:
        fields.pop("code")

    try:
        service = ServiceRepository(db).update_service(service_id, fields)
    except RecordStoreError as e:
        raise store_error(e)

    if service is None:
        raise HTTPException(status_code=404, detail=f"Услуга {service_id} не найдена")

    state.commit_service_updated(service)
    return service


@router.delete("/{service_id}", status_code=204)
def delete_service(
    service_id: str,
    db: Session = Depends(get_db),
    state: ConsoleState = Depends(get_console_state)
):
    try:
        deleted = ServiceRepository(db).delete_service(service_id)
    except RecordStoreError as e:
        raise store_error(e)

    if not deleted:
        raise HTTPException(status_code=404, detail=f"Услуга {service_id} не найдена")

    state.commit_service_deleted(service_id)
    logger.info(f"🗑️ [SERVICES] Услуга удалена: {service_id}")
