import logging
import os
from pathlib import Path
from typing import Optional, Union

from sqlrunner.config.constants import LOG_FILE, LOG_FORMAT, LOG_DATE_FORMAT, DEFAULT_ENCODING
from sqlrunner.errors import LogSetupError


def setup_logger(
    log_path: Union[str, Path] = LOG_FILE,
    level: str = "INFO",
    name: Optional[str] = None,
) -> logging.Logger:
    """Направляет логирование в файл (append). В консоль ничего не пишется."""
    # Если name не передан, настраиваем корневой логгер
    logger = logging.getLogger(name)
    logger.setLevel(level)

    filename = os.path.abspath(log_path)

    # Если хендлер на этот файл уже есть, не добавляем дубликат
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == filename:
            return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    try:
        f_handler = logging.FileHandler(filename, mode='a', encoding=DEFAULT_ENCODING)
    except OSError as e:
        raise LogSetupError(f"Failed to open log file '{log_path}': {e}") from e

    f_handler.setFormatter(formatter)
    logger.addHandler(f_handler)
    return logger
