import asyncio
import logging
from typing import Iterable, Optional

import google.generativeai as genai

from spa_console.core.config import settings
from spa_console.core.logging_config import log_error
from spa_console.schemas.employee import Employee

logger = logging.getLogger(__name__)

BIO_FALLBACK = "Не удалось сгенерировать описание сейчас."
BIO_ERROR_FALLBACK = "Произошла ошибка при обращении к AI."
ANALYSIS_FALLBACK = "Нет данных."
ANALYSIS_ERROR_FALLBACK = "Ошибка анализа."


class LLMService:
    """
    Сервис для генерации текстов через Gemini.
    Используется только для описаний сотрудников и подсказок менеджеру,
    в сценарии записи не участвует.
    """

    def __init__(self, model=None):
        """
        Args:
            model: Готовый объект модели с методом generate_content.
                Если не передан, создается GenerativeModel из настроек.
        """
        if model is None:
            genai.configure(api_key=settings.GEMINI_API_KEY)
            model = genai.GenerativeModel(settings.GEMINI_MODEL)
        self._model = model

    def complete(self, prompt: str) -> str:
        """
        Синхронный запрос к модели.

        Raises:
            Exception: Любая ошибка SDK пробрасывается вызывающему
        """
        response = self._model.generate_content(prompt)
        return response.text or ""

    async def _complete_async(self, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: self.complete(prompt))

    async def generate_employee_bio(self, name: str, position: str) -> str:
        """
        Короткое (около 50 слов) дружелюбное описание сотрудника спа.

        Returns:
            Текст описания или запасная строка при ошибке
        """
        prompt = (
            f"Напиши короткое профессиональное и дружелюбное описание (около 50 слов) "
            f"для сотрудника спа-салона по имени {name}, должность: {position}. "
            f"Тон мягкий, расслабляющий. На русском языке."
        )
        logger.info(f"🤖 [LLM] Генерация описания сотрудника: {name}")
        try:
            text = await self._complete_async(prompt)
        except Exception as e:
            log_error(logger, e, f"Генерация описания сотрудника {name}")
            return BIO_ERROR_FALLBACK

        return text or BIO_FALLBACK

    async def analyze_staff_performance(self, employees: Iterable[Employee]) -> str:
        """
        Три коротких совета по управлению персоналом и расписанием.

        Returns:
            Текст рекомендаций или запасная строка при ошибке
        """
        staff_list = "\n".join(
            f"{e.name} ({e.position.value}) - {e.status.value}" for e in employees
        )
        prompt = (
            f"На основе списка сотрудников спа-салона:\n{staff_list}\n\n"
            f"Дай 3 коротких совета по улучшению управления персоналом "
            f"или оптимизации рабочего расписания."
        )
        logger.info("🤖 [LLM] Анализ персонала")
        try:
            text = await self._complete_async(prompt)
        except Exception as e:
            log_error(logger, e, "Анализ персонала")
            return ANALYSIS_ERROR_FALLBACK

        return text or ANALYSIS_FALLBACK


# Создаем единственный экземпляр сервиса
llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """
    Получает единственный экземпляр LLMService с ленивой инициализацией.

    Returns:
        Экземпляр LLMService
    """
    global llm_service
    if llm_service is None:
        llm_service = LLMService()
    return llm_service
