import asyncio
import asyncpg
import logging
from typing import Optional

from sqlrunner.config.constants import PING_QUERY
from sqlrunner.db.conninfo import parse_conninfo, to_connect_kwargs
from sqlrunner.errors import DatabaseError

log = logging.getLogger('db')

# Ошибки, которые asyncpg и сеть отдают при подключении и выполнении
DRIVER_ERRORS = (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError)


class DBConnection:
    """Одно соединение с PostgreSQL.

    Конструктор только разбирает строку подключения; сетевое соединение
    открывается при первом ping() или execute().
    """

    def __init__(self, dsn: str):
        self._connect_kwargs = to_connect_kwargs(parse_conninfo(dsn))
        self._conn: Optional[asyncpg.Connection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def _get_connection(self) -> asyncpg.Connection:
        """Возвращает соединение, открывая его при необходимости."""
        if self._conn is None:
            log.info("Подключение к БД...")
            # Pgbouncer требует session mode или statement_cache_size=0
            self._conn = await asyncpg.connect(statement_cache_size=0, **self._connect_kwargs)
        return self._conn

    async def ping(self):
        """Проверяет, что сервер доступен."""
        try:
            conn = await self._get_connection()
            await conn.fetchval(PING_QUERY)
        except DRIVER_ERRORS as e:
            raise DatabaseError(f"Database ping failed: {e}") from e

    async def execute(self, query: str) -> str:
        """Выполняет запрос без параметров.

        Без аргументов asyncpg использует simple query protocol, поэтому
        несколько операторов через ';' уходят одним запросом.
        """
        try:
            conn = await self._get_connection()
            return await conn.execute(query)
        except DRIVER_ERRORS as e:
            raise DatabaseError(f"SQL execution failed: {e}") from e

    async def close(self):
        """Закрывает соединение. Повторный вызов ничего не делает."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            await conn.close()
        except DRIVER_ERRORS as e:
            raise DatabaseError(f"Error closing database connection: {e}") from e
        log.info("Соединение закрыто.")

    async def __aenter__(self) -> 'DBConnection':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            await self.close()
            return
        # Уже падаем: ошибка закрытия не должна скрыть исходную причину
        try:
            await self.close()
        except DatabaseError as close_error:
            log.error(f"{close_error}")
