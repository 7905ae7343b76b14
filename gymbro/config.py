"""
Централизованная конфигурация приложения
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings

from gymbro.constants import (
    DEFAULT_API_TIMEOUT,
    DEFAULT_TOKEN_STORAGE_PATH,
    TOKEN_COOKIE_MAX_AGE,
    TOKEN_STORAGE_KEY,
)


class Settings(BaseSettings):
    """Настройки клиента с валидацией через Pydantic"""

    # API
    api_url: str = "http://localhost:5000"
    api_timeout: float = DEFAULT_API_TIMEOUT

    # Хранилище токена: cookie браузера или файл (один пользователь на сервер)
    token_storage: Literal["browser", "file"] = "browser"
    token_cookie_max_age: int = TOKEN_COOKIE_MAX_AGE
    token_storage_path: str = DEFAULT_TOKEN_STORAGE_PATH
    token_storage_key: str = TOKEN_STORAGE_KEY

    # Логирование
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: Optional[str] = None

    class Config:
        env_prefix = "GYMBRO_"
        env_file = ".env"
        case_sensitive = False

    @property
    def token_storage_file(self) -> Path:
        """Абсолютный путь к файлу с токеном"""
        return Path(self.token_storage_path).expanduser()


@lru_cache()
def get_settings() -> Settings:
    """Возвращает синглтон настроек"""
    return Settings()


@dataclass
class PageConfig:
    """Конфигурация страницы Streamlit."""

    title: str
    icon: str
    layout: str = "centered"
    initial_sidebar_state: str = "collapsed"


# Конфигурации страниц
PAGE_CONFIGS = {
    "main": PageConfig(title="GymBro", icon="💪"),
    "auth": PageConfig(title="Login - GymBro", icon="🔐"),
    "dashboard": PageConfig(title="Dashboard - GymBro", icon="📊", layout="wide"),
    "track": PageConfig(title="Track - GymBro", icon="📝"),
    "profile": PageConfig(title="Profile & Goals - GymBro", icon="⚙️"),
}
