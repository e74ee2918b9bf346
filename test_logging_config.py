"""
Тесты настройки логирования.
"""

import io
import logging

import pytest

from spa_console.core.logging_config import log_error, setup_logging


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_setup_logging_installs_single_handler(restore_root_logger):
    stream = io.StringIO()

    setup_logging("debug", enable_colors=True, stream=stream)
    setup_logging("warning", enable_colors=True, stream=stream)

    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_non_terminal_stream_gets_plain_lines(restore_root_logger):
    stream = io.StringIO()
    setup_logging("INFO", enable_colors=True, stream=stream)

    logging.getLogger("spa_console.test").info("Запись сохранена")

    line = stream.getvalue().splitlines()[-1]
    assert line.endswith("| Запись сохранена")
    assert "\033[" not in line


def test_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging("chatty", stream=io.StringIO())

    assert restore_root_logger.level == logging.INFO


def test_log_error_includes_context_and_traceback(caplog):
    logger = logging.getLogger("spa_console.test")
    try:
        raise ValueError("нет связи")
    except ValueError as e:
        with caplog.at_level(logging.ERROR, logger="spa_console.test"):
            log_error(logger, e, "Сохранение записи BK001")

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert "ValueError" in record.getMessage()
    assert "Сохранение записи BK001" in record.getMessage()
    assert "нет связи" in record.getMessage()
    assert record.exc_info[0] is ValueError
