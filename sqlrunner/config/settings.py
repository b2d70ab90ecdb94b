import logging
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sqlrunner.config.constants import (
    CONFIG_FILE, COMMANDS_FILE, LOG_FILE, DEFAULT_ENCODING, SSL_DISABLE_PREFIX
)
from sqlrunner.errors import ConfigError

log = logging.getLogger('config')


class RunnerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='SQLRUNNER_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
    )

    # Files
    config_path: Path = Path(CONFIG_FILE)
    commands_path: Path = Path(COMMANDS_FILE)
    log_path: Path = Path(LOG_FILE)

    # App
    log_level: str = "INFO"


class AppConfig(BaseModel):
    """Содержимое sqlrunner.json.

    Ключи сравниваются без учёта регистра, null означает пустую строку.
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    postgres_connection: str = ""

    @model_validator(mode='before')
    @classmethod
    def _lowercase_keys(cls, data: Any) -> Any:
        # При совпадении ключей без учёта регистра побеждает последний
        if isinstance(data, dict):
            return {str(key).lower(): value for key, value in data.items()}
        return data

    @field_validator('postgres_connection', mode='before')
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


def load_config(path: Union[str, Path] = CONFIG_FILE) -> AppConfig:
    """Читает JSON с настройками и добавляет к строке подключения sslmode=disable.

    Префикс добавляется ровно один раз на каждую загрузку.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding=DEFAULT_ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Error loading settings {e}") from e

    try:
        loaded = AppConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"Error parsing settings file '{path}': {e}") from e

    log.debug(f"Настройки загружены из {path}")
    return loaded.model_copy(
        update={'postgres_connection': SSL_DISABLE_PREFIX + loaded.postgres_connection}
    )
