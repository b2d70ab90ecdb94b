"""Исключения sqlrunner. Любое из них фатально для запуска."""


class SQLRunnerError(Exception):
    """Базовое исключение раннера."""


class LogSetupError(SQLRunnerError):
    """Не удалось открыть файл лога."""


class ConfigError(SQLRunnerError):
    """Файл настроек отсутствует, не читается или содержит невалидный JSON."""


class ScriptError(SQLRunnerError):
    """Файл с SQL-командами отсутствует или не читается."""


class DatabaseError(SQLRunnerError):
    """Ошибка подключения, ping, выполнения или закрытия соединения."""


class ConnectionStringError(DatabaseError, ValueError):
    """Строка подключения не разбирается."""
