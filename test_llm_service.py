"""
Тесты генерации текстов: модель подменяется, сеть не используется.
"""

import asyncio

import pytest

from spa_console.schemas.employee import Employee
from spa_console.schemas.enums import EmployeeStatus, Position
from spa_console.services.llm_service import (
    ANALYSIS_ERROR_FALLBACK,
    BIO_ERROR_FALLBACK,
    BIO_FALLBACK,
    LLMService,
)


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.prompts = []

    def generate_content(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return FakeResponse(self.text)


def test_complete_returns_text():
    model = FakeModel("Привет")

    assert LLMService(model=model).complete("prompt") == "Привет"
    assert model.prompts == ["prompt"]


def test_complete_propagates_errors():
    service = LLMService(model=FakeModel(error=RuntimeError("quota")))

    with pytest.raises(RuntimeError):
        service.complete("prompt")


def test_generate_employee_bio():
    model = FakeModel("Ольга - мастер расслабляющего массажа.")

    bio = asyncio.run(LLMService(model=model).generate_employee_bio("Ольга", "therapist"))

    assert bio == "Ольга - мастер расслабляющего массажа."
    assert "Ольга" in model.prompts[0]
    assert "50 слов" in model.prompts[0]


def test_generate_employee_bio_fallbacks():
    empty = LLMService(model=FakeModel(""))
    failing = LLMService(model=FakeModel(error=RuntimeError("network")))

    assert asyncio.run(empty.generate_employee_bio("Ольга", "therapist")) == BIO_FALLBACK
    assert asyncio.run(failing.generate_employee_bio("Ольга", "therapist")) == BIO_ERROR_FALLBACK


def test_analyze_staff_performance():
    model = FakeModel("1. ... 2. ... 3. ...")
    employees = [
        Employee(id="1", code="NV001", name="Михаил", position=Position.THERAPIST),
        Employee(id="2", code="NV002", name="Дарья", position=Position.RECEPTIONIST,
                 status=EmployeeStatus.ON_LEAVE),
    ]

    text = asyncio.run(LLMService(model=model).analyze_staff_performance(employees))

    assert text == "1. ... 2. ... 3. ..."
    assert "Михаил (therapist) - active" in model.prompts[0]
    assert "Дарья (receptionist) - on_leave" in model.prompts[0]


def test_analyze_staff_performance_fallback():
    service = LLMService(model=FakeModel(error=RuntimeError("network")))

    assert asyncio.run(service.analyze_staff_performance([])) == ANALYSIS_ERROR_FALLBACK
