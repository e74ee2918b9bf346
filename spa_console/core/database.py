"""
Модуль для работы с базой данных через SQLAlchemy.
Хранилище записей для сотрудников, услуг и бронирований.
"""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Глобальные переменные для ленивой инициализации
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


class Base(DeclarativeBase):
    """Базовый класс для ORM моделей"""


def _build_engine(url: str) -> Engine:
    """Создает движок SQLAlchemy с учетом особенностей SQLite."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory база живет, пока жив единственный коннект
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def configure_database(url: Optional[str] = None) -> Engine:
    """
    Пересоздает движок и фабрику сессий.

    Args:
        url: URL базы данных; по умолчанию берется из настроек
    """
    global _engine, _session_factory
    if url is None:
        from spa_console.core.config import settings
        url = settings.DATABASE_URL

    if _engine is not None:
        _engine.dispose()

    _engine = _build_engine(url)
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    logger.info(f"✅ DATABASE: Движок создан для {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def get_engine() -> Engine:
    """Получить или создать движок SQLAlchemy."""
    if _engine is None:
        configure_database()
    return _engine


def get_session_factory() -> sessionmaker:
    """Получить фабрику сессий."""
    if _session_factory is None:
        configure_database()
    return _session_factory


def get_db() -> Generator[Session, None, None]:
    """
    Dependency для получения сессии базы данных.
    Используется в FastAPI endpoints для автоматического управления сессиями.
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_database() -> None:
    """
    Инициализирует базу данных.
    Создает таблицы, если их еще нет.
    """
    # Импорт регистрирует модели в метаданных
    from spa_console import models  # noqa: F401

    try:
        logger.info("🗄️ DATABASE: Инициализация базы данных...")
        Base.metadata.create_all(bind=get_engine())
        logger.info("✅ DATABASE: База данных успешно инициализирована")
    except Exception as e:
        logger.error(f"❌ DATABASE: Ошибка инициализации базы данных: {e}")
        raise


def close_database() -> None:
    """Закрывает соединение с базой данных."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
        _engine = None
        _session_factory = None

    logger.info("✅ DATABASE: Соединение с базой данных закрыто")
