import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from spa_console.api.dependencies import get_console_state, get_llm, store_error
from spa_console.core.database import get_db
from spa_console.repositories.base import RecordStoreError
from spa_console.repositories.employee_repository import EmployeeRepository
from spa_console.schemas.employee import BioRequest, Employee, EmployeeCreate
from spa_console.schemas.enums import EmployeeStatus, Position
from spa_console.services.console_state import ConsoleState
from spa_console.services.llm_service import LLMService
from spa_console.utils.codes import next_sequential_code

# Получаем логгер для этого модуля
logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Employee])
def list_employees(
    status: Optional[EmployeeStatus] = None,
    position: Optional[Position] = None,
    state: ConsoleState = Depends(get_console_state)
):
    employees = state.snapshot().employees
    return [
        e for e in employees
        if (status is None or e.status == status) and (position is None or e.position == position)
    ]


@router.post("", response_model=Employee, status_code=201)
def create_employee(
    data: EmployeeCreate,
    db: Session = Depends(get_db),
    state: ConsoleState = Depends(get_console_state)
):
    """Создает сотрудника. Пустой код заменяется следующим NV###."""
    fields = data.model_dump(mode="json")
    if not fields["code"]:
        fields["code"] = next_sequential_code("NV", (e.code for e in state.snapshot().employees))

    try:
        employee = EmployeeRepository(db).create_employee(fields)
    except RecordStoreError as e:
        raise store_error(e)

    state.commit_employee_created(employee)
    logger.info(f"✅ [EMPLOYEES] Сотрудник создан: {employee.code} {employee.name}")
    return employee


@router.put("/{employee_id}", response_model=Employee)
def update_employee(
    employee_id: str,
    data: EmployeeCreate,
    db: Session = Depends(get_db),
    state: ConsoleState = Depends(get_console_state)
):
    fields = data.model_dump(mode="json")
    if not fields["code"]:
        fields.pop("code")

    try:
        employee = EmployeeRepository(db).update_employee(employee_id, fields)
    except RecordStoreError as e:
        raise store_error(e)

    if employee is None:
        raise HTTPException(status_code=404, detail=f"Сотрудник {employee_id} не найден")

    state.commit_employee_updated(employee)
    return employee


@router.delete("/{employee_id}", status_code=204)
def delete_employee(
    employee_id: str,
    db: Session = Depends(get_db),
    state: ConsoleState = Depends(get_console_state)
):
    try:
        deleted = EmployeeRepository(db).delete(employee_id)
    except RecordStoreError as e:
        raise store_error(e)

    if not deleted:
        raise HTTPException(status_code=404, detail=f"Сотрудник {employee_id} не найден")

    state.commit_employee_deleted(employee_id)
    logger.info(f"🗑️ [EMPLOYEES] Сотрудник удален: {employee_id}")


@router.post("/bio")
async def generate_bio(request: BioRequest, llm: LLMService = Depends(get_llm)):
    """Черновик описания сотрудника от Gemini."""
    bio = await llm.generate_employee_bio(request.name, request.position.value)
    return {"bio": bio}


@router.get("/analysis")
async def analyze_staff(
    state: ConsoleState = Depends(get_console_state),
    llm: LLMService = Depends(get_llm)
):
    """Советы менеджеру по составу персонала."""
    text = await llm.analyze_staff_performance(state.snapshot().employees)
    return {"analysis": text}
