import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Определяем, какой .env файл загружать
env_file_path = os.getenv("ENV_FILE", ".env")
# Явно загружаем переменные окружения до создания настроек
load_dotenv(env_file_path)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=env_file_path,
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Database
    DATABASE_URL: str = "sqlite:///./spa_console.db"
    SEED_DEMO_DATA: bool = True

    # Операционный зал
    TOTAL_ROOMS: int = 5
    # Жесткая проверка занятости сотрудников при сохранении записи
    ENFORCE_STAFF_CONFLICTS: bool = True

    # Gemini Configuration
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_COLORS: bool = True


# Глобальная переменная для ленивой инициализации
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Получить или создать экземпляр настроек"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


# Используется во всем приложении
settings = get_settings()
