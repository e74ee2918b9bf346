from fastapi import FastAPI
import logging

from spa_console.api import bookings, employees, operations, services
from spa_console.core.config import settings
from spa_console.core.database import close_database, get_session_factory, init_database
from spa_console.core.logging_config import setup_logging
from spa_console.core.seed_data import seed_if_empty
from spa_console.services.console_state import ConsoleState

# Получаем логгер для этого модуля
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Lotus Spa Front Desk",
    version="0.1.0"
)

app.state.console = ConsoleState()

app.include_router(employees.router, prefix="/employees", tags=["Employees"])
app.include_router(services.router, prefix="/services", tags=["Services"])
app.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
app.include_router(operations.router, prefix="/operations", tags=["Operations"])


@app.on_event("startup")
def startup_event():
    """Выполняется при запуске приложения."""
    setup_logging(level=settings.LOG_LEVEL, enable_colors=settings.LOG_COLORS)

    logger.info("╔═══════════════════════════════════════════════════════════")
    logger.info("║ 🚀 Приложение запускается...")
    logger.info("╚═══════════════════════════════════════════════════════════")

    logger.info(f"🏠 STARTUP: Комнат в зале: {settings.TOTAL_ROOMS}")
    logger.info(f"👥 STARTUP: Жесткая проверка сотрудников: {'Да' if settings.ENFORCE_STAFF_CONFLICTS else 'Нет'}")
    logger.info(f"🤖 STARTUP: Gemini ключ настроен: {'Да' if settings.GEMINI_API_KEY else 'Нет'}")

    try:
        init_database()
        logger.info("✅ STARTUP: База данных инициализирована")
    except Exception as e:
        logger.error(f"❌ STARTUP: Ошибка инициализации базы данных: {e}")
        raise

    session = get_session_factory()()
    try:
        if settings.SEED_DEMO_DATA:
            seed_if_empty(session)
        app.state.console.load(session)
    finally:
        session.close()

    logger.info("✅ STARTUP: Приложение успешно запущено и готово к работе")


@app.on_event("shutdown")
def shutdown_event():
    close_database()


@app.get("/", tags=["Root"])
def root():
    """Корневой эндпоинт для проверки доступности сервиса."""
    return {
        "status": "OK",
        "message": "Lotus Spa Front Desk is running",
        "version": "0.1.0",
        "database": "enabled"
    }


@app.get("/healthcheck", tags=["Health Check"])
def health_check():
    """Простой эндпоинт для проверки работоспособности сервиса."""
    snapshot = app.state.console.snapshot()
    return {
        "status": "OK",
        "database": "enabled",
        "bookings": len(snapshot.bookings)
    }
