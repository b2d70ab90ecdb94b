import asyncio
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from sqlrunner.commands import load_sql_commands, execute_sql_commands
from sqlrunner.config.constants import EXIT_OK, EXIT_FATAL, EXIT_LOG_SETUP
from sqlrunner.config.settings import RunnerSettings, load_config
from sqlrunner.db.connection import DBConnection
from sqlrunner.errors import SQLRunnerError, LogSetupError, DatabaseError
from sqlrunner.utils.logger import setup_logger

log = logging.getLogger('sqlrunner')


async def main(settings: Optional[RunnerSettings] = None) -> int:
    """Загружает настройки, проверяет БД и выполняет commands.sql. Возвращает код выхода."""
    print("SQL Runner")

    try:
        settings = settings or RunnerSettings()
        setup_logger(settings.log_path, level=settings.log_level)
    except (LogSetupError, ValidationError, ValueError) as e:
        # Лог ещё не готов, пишем в stderr
        print(f"Fatal: {e}", file=sys.stderr)
        return EXIT_LOG_SETUP

    try:
        config = load_config(settings.config_path)

        async with DBConnection(config.postgres_connection) as db:
            try:
                await db.ping()
            except DatabaseError as e:
                log.error(f"{e}")
                log.critical("Error: Could not establish a connection with the database")
                return EXIT_FATAL

            log.info("Executing SQL commands...")
            sql_commands = load_sql_commands(settings.commands_path)
            await execute_sql_commands(db, sql_commands)

    except SQLRunnerError as e:
        log.critical(f"{e}", exc_info=True)
        return EXIT_FATAL

    log.info("SQL Commands executed.")
    return EXIT_OK


def run():
    try:
        code = asyncio.run(main())
    finally:
        logging.shutdown()
    sys.exit(code)


if __name__ == "__main__":
    run()
