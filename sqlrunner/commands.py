"""Чтение commands.sql и выполнение его одним пакетом."""
import logging
from pathlib import Path
from typing import Union

from sqlrunner.config.constants import COMMANDS_FILE, DEFAULT_ENCODING
from sqlrunner.db.connection import DBConnection
from sqlrunner.errors import ScriptError

log = logging.getLogger('commands')


def load_sql_commands(path: Union[str, Path] = COMMANDS_FILE) -> str:
    """Возвращает содержимое файла как есть, без разбора на операторы."""
    try:
        return Path(path).read_text(encoding=DEFAULT_ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        raise ScriptError(f"Error loading SQL commands file, check '{path}': {e}") from e


async def execute_sql_commands(db: DBConnection, sql_commands: str):
    """Отправляет весь буфер одним вызовом и закрывает соединение."""
    status = await db.execute(sql_commands)
    log.debug(f"Статус сервера: {status}")

    log.info("Done")
    await db.close()
