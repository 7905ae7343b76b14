"""Модуль core для работы с сессией, хранилищем токена и аутентификацией."""

from gymbro.core.storage import FileTokenStorage, MemoryTokenStorage, TokenStorage
from gymbro.core.session import SessionStore
from gymbro.core.middleware import (
    bearer_auth,
    clear_session_on_unauthorized,
    compose,
    default_middlewares,
    raise_for_status,
)
from gymbro.core.auth import (
    AuthResult,
    AuthService,
    validate_credentials,
    validate_password_length,
)

__all__ = [
    # storage
    "FileTokenStorage",
    "MemoryTokenStorage",
    "TokenStorage",
    # session
    "SessionStore",
    # middleware
    "bearer_auth",
    "clear_session_on_unauthorized",
    "compose",
    "default_middlewares",
    "raise_for_status",
    # auth
    "AuthResult",
    "AuthService",
    "validate_credentials",
    "validate_password_length",
]
