"""Утилиты для аутентификации и валидации."""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from gymbro.constants import (
    MAX_PASSWORD_LENGTH_BYTES,
    MIN_PASSWORD_LENGTH,
    MSG_EMPTY_FIELDS,
    MSG_GOALS_UPDATE_FAILED,
    MSG_GOALS_UPDATED,
    MSG_INVALID_EMAIL,
    MSG_LOGIN_FAILED,
    MSG_NOT_AUTHENTICATED,
    MSG_PASSWORD_TOO_LONG,
    MSG_PASSWORD_TOO_SHORT,
    MSG_PROFILE_LOAD_FAILED,
    MSG_PROFILE_UPDATE_FAILED,
    MSG_PROFILE_UPDATED,
    MSG_SIGNUP_FAILED,
)
from gymbro.core.session import SessionStore
from gymbro.exceptions import APIError, StorageError
from gymbro.models import AuthResponse, BodyProfile, Goals, UserProfile

if TYPE_CHECKING:
    from gymbro.api_client import APIClient

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True)
class AuthResult:
    """Результат операции для экрана: успех или сообщение об ошибке"""

    success: bool
    message: Optional[str] = None
    user: Optional[UserProfile] = None


def validate_password_length(password: str) -> Optional[str]:
    """
    Валидация длины пароля.

    Returns:
        Сообщение об ошибке или None если всё ок
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return MSG_PASSWORD_TOO_SHORT.format(length=MIN_PASSWORD_LENGTH)

    if len(password.encode("utf-8")) > MAX_PASSWORD_LENGTH_BYTES:
        return MSG_PASSWORD_TOO_LONG.format(length=MAX_PASSWORD_LENGTH_BYTES)

    return None


def validate_credentials(email: str, password: str) -> Optional[str]:
    """Проверка формы входа до отправки запроса"""
    if not email or not email.strip() or not password:
        return MSG_EMPTY_FIELDS
    if not EMAIL_PATTERN.match(email.strip()):
        return MSG_INVALID_EMAIL
    return None


class AuthService:
    """
    Сценарии входа, регистрации, выхода и обновления профиля.

    Единственный, кто пишет в SessionStore, кроме обработчика 401.
    """

    def __init__(self, session: SessionStore, client: "APIClient") -> None:
        self.session = session
        self.client = client

    def restore(self) -> bool:
        """Восстановить сессию при старте приложения"""
        return self.session.load(fetch_profile=self.client.get_profile)

    def login(self, email: str, password: str) -> AuthResult:
        """
        Вход пользователя.

        Returns:
            AuthResult с профилем при успехе
        """
        error = validate_credentials(email, password)
        if error:
            return AuthResult(success=False, message=error)

        try:
            response = self.client.login(email.strip(), password)
            return self._start_session(response)
        except (APIError, StorageError) as e:
            logger.warning(f"Login failed for {email}: {e.message}")
            return AuthResult(success=False, message=f"{MSG_LOGIN_FAILED}: {e.message}")

    def signup(self, name: str, email: str, password: str) -> AuthResult:
        """
        Регистрация и автоматический вход.

        Returns:
            AuthResult с профилем при успехе
        """
        if not name or not name.strip():
            return AuthResult(success=False, message=MSG_EMPTY_FIELDS)

        error = validate_credentials(email, password) or validate_password_length(password)
        if error:
            return AuthResult(success=False, message=error)

        try:
            response = self.client.signup(name.strip(), email.strip(), password)
            return self._start_session(response)
        except (APIError, StorageError) as e:
            logger.warning(f"Signup failed for {email}: {e.message}")
            return AuthResult(success=False, message=f"{MSG_SIGNUP_FAILED}: {e.message}")

    def _start_session(self, response: AuthResponse) -> AuthResult:
        """
        Сохранить сессию после успешного входа.

        Если backend не вернул профиль, он загружается с новым токеном.
        """
        user = response.user
        if user is None:
            # Запрос профиля должен уйти уже с новым токеном
            self.session.set_session(response.token, None)
            try:
                user = self.client.get_profile()
            except APIError as e:
                if not self.session.is_authenticated:
                    raise
                logger.warning(f"Profile fetch after login failed: {e.message}")
                return AuthResult(success=True, user=None)
            self.session.update_profile(user, token=response.token)
        else:
            self.session.set_session(response.token, user)

        logger.info(f"User logged in: {user.email}")
        return AuthResult(success=True, user=user)

    def logout(self) -> None:
        """Выход из системы"""
        logger.info("User logged out")
        self.session.clear()

    def refresh_profile(self) -> AuthResult:
        """Перезагрузить профиль текущего пользователя"""
        token = self.session.token
        if not token:
            return AuthResult(success=False, message=MSG_NOT_AUTHENTICATED)

        try:
            user = self.client.get_profile()
        except APIError as e:
            return AuthResult(success=False, message=f"{MSG_PROFILE_LOAD_FAILED}: {e.message}")

        self.session.update_profile(user, token=token)
        return AuthResult(success=True, user=user)

    def save_profile(self, profile: BodyProfile) -> AuthResult:
        """Сохранить физические параметры и заменить профиль в сессии"""
        token = self.session.token
        if not token:
            return AuthResult(success=False, message=MSG_NOT_AUTHENTICATED)

        try:
            user = self.client.update_profile(profile)
        except APIError as e:
            return AuthResult(success=False, message=f"{MSG_PROFILE_UPDATE_FAILED}: {e.message}")

        self.session.update_profile(user, token=token)
        return AuthResult(success=True, message=MSG_PROFILE_UPDATED, user=user)

    def save_goals(self, goals: Goals) -> AuthResult:
        """Сохранить дневные цели и заменить профиль в сессии"""
        token = self.session.token
        if not token:
            return AuthResult(success=False, message=MSG_NOT_AUTHENTICATED)

        try:
            user = self.client.update_goals(goals)
        except APIError as e:
            return AuthResult(success=False, message=f"{MSG_GOALS_UPDATE_FAILED}: {e.message}")

        self.session.update_profile(user, token=token)
        return AuthResult(success=True, message=MSG_GOALS_UPDATED, user=user)
