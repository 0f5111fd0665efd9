import logging
import sys
from pathlib import Path
from typing import Optional

from blog.config import LOG_LEVEL, LOGS_DIR


def setup_logging(log_dir: Optional[Path] = LOGS_DIR):
    """
    Настройка логирования для приложения.

    - Консоль: INFO и выше
    - app.log: все логи, errors.log: только ошибки
    - log_dir=None: только консоль (удобно для тестов и контейнеров)
    """
    # Формат логов
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    # Корневой логгер
    root_logger = logging.getLogger()
    root_logger.setLevel(LOG_LEVEL)

    # Очищаем старые хэндлеры (если есть)
    root_logger.handlers.clear()

    # ===== CONSOLE HANDLER =====
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        # ===== FILE HANDLER (все логи) =====
        file_handler = logging.FileHandler(
            log_dir / "app.log",
            mode="a",
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        # ===== ERROR FILE HANDLER (только ошибки) =====
        error_handler = logging.FileHandler(
            log_dir / "errors.log",
            mode="a",
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        root_logger.addHandler(error_handler)

    # Отключаем слишком болтливые библиотеки
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return root_logger
