# -*- coding: utf-8 -*-
# label_sheets/utils/logger.py
import logging
import os
from datetime import datetime
from typing import Optional

from ..config import LOGGING_CONFIG, PACKAGE_LOGGER, QUIET_LOGGERS


def setup_logging(log_dir: Optional[str] = "logs", level: str = LOGGING_CONFIG['level']) -> logging.Logger:
    """
    Настройка логирования пакета label_sheets.

    Обработчики вешаются на логгер пакета, а не на корневой, поэтому повторный
    вызов (например, из тестов CLI) заменяет их, а не дублирует. Без log_dir
    пишем только в консоль.
    """
    formatter = logging.Formatter(LOGGING_CONFIG['format'], LOGGING_CONFIG['datefmt'])
    handlers = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"label_sheets_{datetime.now().strftime('%Y%m%d')}.log")
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return package_logger
