"""Строка подключения libpq (key=value ...) -> аргументы asyncpg.connect.

asyncpg принимает только URI-DSN, поэтому строку вида
``sslmode=disable host=localhost dbname=test`` разбирает libpq через psycopg,
а параметры передаются в ``asyncpg.connect`` именованными аргументами.
"""
import logging
from typing import Any, Dict, List, Union

import psycopg
from psycopg.conninfo import conninfo_to_dict

from sqlrunner.errors import ConnectionStringError

log = logging.getLogger('db')

# Ключи, которые понимает клиент.
CLIENT_KEYS = {
    'host', 'hostaddr', 'port', 'user', 'password', 'dbname',
    'sslmode', 'connect_timeout', 'passfile', 'target_session_attrs',
}

# Ключи libpq, которые уходят серверу как run-time параметры
SERVER_KEYS = {'application_name', 'client_encoding'}


def parse_conninfo(conninfo: str) -> Dict[str, str]:
    """Разбирает строку key=value. При повторе ключа побеждает последнее значение."""
    try:
        params = conninfo_to_dict(conninfo)
    except psycopg.ProgrammingError as e:
        raise ConnectionStringError(f"invalid connection string: {e}") from e
    return {key: str(value) for key, value in params.items()}


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(',')]


def _parse_port(value: str) -> Union[int, List[int]]:
    try:
        ports = [int(p) for p in _split_list(value)]
    except ValueError:
        raise ConnectionStringError(f"invalid port number: '{value}'") from None
    return ports[0] if len(ports) == 1 else ports


def to_connect_kwargs(params: Dict[str, str]) -> Dict[str, Any]:
    """Переводит параметры libpq в аргументы asyncpg.connect."""
    kwargs: Dict[str, Any] = {}
    server_settings: Dict[str, str] = {}

    host = params.get('host') or params.get('hostaddr')
    if host:
        hosts = _split_list(host)
        kwargs['host'] = hosts[0] if len(hosts) == 1 else hosts

    if params.get('port'):
        kwargs['port'] = _parse_port(params['port'])

    if 'user' in params:
        kwargs['user'] = params['user']
    if 'password' in params:
        kwargs['password'] = params['password']
    if 'dbname' in params:
        kwargs['database'] = params['dbname']
    if params.get('sslmode'):
        kwargs['ssl'] = params['sslmode']
    if params.get('passfile'):
        kwargs['passfile'] = params['passfile']
    if params.get('target_session_attrs'):
        kwargs['target_session_attrs'] = params['target_session_attrs']

    if params.get('connect_timeout'):
        try:
            timeout = float(params['connect_timeout'])
        except ValueError:
            raise ConnectionStringError(
                f"invalid connect_timeout: '{params['connect_timeout']}'"
            ) from None
        # 0 у libpq означает "ждать бесконечно" - оставляем таймаут asyncpg по умолчанию
        if timeout > 0:
            kwargs['timeout'] = timeout

    for key, value in params.items():
        if key in SERVER_KEYS:
            server_settings[key] = value
        elif key not in CLIENT_KEYS:
            log.warning(f"Параметр подключения '{key}' не поддерживается asyncpg и пропущен")
    if server_settings:
        kwargs['server_settings'] = server_settings

    return kwargs
