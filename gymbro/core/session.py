"""Хранилище сессии: токен и профиль текущего пользователя."""

import logging
import threading
from typing import Callable, Optional

from gymbro.core.storage import MemoryTokenStorage, TokenStorage
from gymbro.exceptions import APIError, StorageError
from gymbro.models import Session, UserProfile

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Единственный источник правды о том, авторизован ли пользователь и кто он.

    Токен и профиль всегда заменяются целиком под одной блокировкой:
    set_session() и clear() взаимно исключают друг друга. Компоненты,
    которым нужна сессия, получают этот объект явно.
    """

    def __init__(self, storage: Optional[TokenStorage] = None) -> None:
        """
        Args:
            storage: Durable хранилище токена (по умолчанию в памяти)
        """
        self.storage = storage or MemoryTokenStorage()
        self.ready = threading.Event()
        self._lock = threading.RLock()
        self._session = Session()

    @property
    def session(self) -> Session:
        """Неизменяемый снимок текущей сессии"""
        return self._session

    @property
    def token(self) -> Optional[str]:
        return self._session.token

    @property
    def user(self) -> Optional[UserProfile]:
        return self._session.user

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def load(
        self,
        fetch_profile: Optional[Callable[[], UserProfile]] = None,
    ) -> bool:
        """
        Восстановить сессию из durable хранилища при старте.

        Если токен найден, он считается валидным, пока какой-нибудь запрос
        явно его не отклонит. Ошибка загрузки профиля не прерывает загрузку:
        профиль остаётся пустым, токен остаётся установленным.

        Args:
            fetch_profile: Функция загрузки профиля с backend

        Returns:
            Всегда True: сигнал, что загрузка завершена
        """
        try:
            token = self.storage.get()
            if not token:
                logger.info("[LOAD_SESSION] No stored token found")
                return True

            with self._lock:
                self._session = Session(token=token)
            logger.info(f"[LOAD_SESSION] Restored token, length: {len(token)}")

            if fetch_profile is None:
                return True

            try:
                user = fetch_profile()
            except APIError as e:
                logger.warning(f"[LOAD_SESSION] Failed to fetch profile: {e.message}")
                return True

            self.update_profile(user, token=token)
            return True
        finally:
            self.ready.set()

    def set_session(self, token: str, user: Optional[UserProfile]) -> None:
        """
        Установить новую сессию и сохранить токен.

        Вызывается после каждого успешного входа, регистрации или
        обновления токена.

        Raises:
            ValueError: Если токен пустой
            StorageError: Если не удалось сохранить токен
        """
        if not token:
            raise ValueError("token must be a non-empty string")

        with self._lock:
            self.storage.save(token)
            self._session = Session(token=token, user=user)

        logger.info(
            f"[SET_SESSION] Session set for user: {user.email if user else 'unknown'}"
        )

    def update_profile(
        self,
        user: UserProfile,
        token: Optional[str] = None,
    ) -> bool:
        """
        Заменить профиль, не трогая токен и durable хранилище.

        Args:
            user: Новый профиль
            token: Токен, с которым был отправлен запрос. Если сессия с тех пор
                сменилась, ответ устарел и обновление отбрасывается.

        Returns:
            True если профиль обновлён
        """
        with self._lock:
            current = self._session
            if not current.token:
                logger.warning("[UPDATE_PROFILE] No active session, update dropped")
                return False
            if token is not None and token != current.token:
                logger.warning("[UPDATE_PROFILE] Stale response for a replaced session, update dropped")
                return False
            self._session = Session(token=current.token, user=user)
        return True

    def clear(self) -> None:
        """
        Удалить токен из хранилища и очистить сессию.

        Сессия в памяти очищается даже если хранилище не удалось
        очистить. Повторный вызов на пустой сессии ничего не меняет.
        """
        with self._lock:
            had_session = self._session.is_authenticated
            self._session = Session()
            try:
                self.storage.remove()
            except StorageError as e:
                logger.error(f"[CLEAR_SESSION] Failed to remove stored token: {e.message}")

        if had_session:
            logger.info("[CLEAR_SESSION] Session cleared")
