"""
Логирование консоли: один обработчик stdout, эмодзи по уровню в терминале.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-28s | %(message)s'
TIME_FORMAT = '%H:%M:%S'

# Библиотеки, которые на INFO пишут каждый запрос или SQL
QUIET_LOGGERS = ('sqlalchemy.engine', 'httpx', 'httpcore', 'urllib3', 'google')


class ConsoleFormatter(logging.Formatter):
    """Форматер для терминала: значок и цвет уровня перед строкой."""

    LEVEL_STYLES = {
        logging.DEBUG: ('🔍', '\033[36m'),
        logging.INFO: ('ℹ️', '\033[32m'),
        logging.WARNING: ('⚠️', '\033[33m'),
        logging.ERROR: ('❌', '\033[31m'),
        logging.CRITICAL: ('🚨', '\033[35m'),
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        symbol, color = self.LEVEL_STYLES.get(record.levelno, ('📝', self.RESET))
        line = super().format(record)
        return f"{color}{symbol}{self.RESET} {line}"


def setup_logging(level: str = "INFO", enable_colors: bool = True, stream: Optional[TextIO] = None) -> None:
    """
    Заменяет обработчики корневого логгера одним потоковым.

    Args:
        level: Имя уровня (DEBUG, INFO, ...), неизвестное имя дает INFO
        enable_colors: Значки и цвета, только если поток является терминалом
        stream: Куда писать, по умолчанию stdout
    """
    if stream is None:
        stream = sys.stdout
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(stream)
    handler.setLevel(log_level)
    use_colors = enable_colors and hasattr(stream, 'isatty') and stream.isatty()
    formatter_class = ConsoleFormatter if use_colors else logging.Formatter
    handler.setFormatter(formatter_class(fmt=LOG_FORMAT, datefmt=TIME_FORMAT))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"🪷 [LOGGING] Уровень {logging.getLevelName(log_level)}, цвета {'вкл' if use_colors else 'выкл'}"
    )


def log_error(logger: logging.Logger, error: Exception, context: str = "") -> None:
    """Пишет ошибку одной записью: контекст, тип, текст и стек."""
    where = f" при операции «{context}»" if context else ""
    logger.error(f"💥 [ERROR] {type(error).__name__}{where}: {error}", exc_info=error)
