"""Централизованный API клиент для взаимодействия с backend."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from gymbro.config import get_settings
from gymbro.constants import (
    ENDPOINT_AUTH_GOALS,
    ENDPOINT_AUTH_LOGIN,
    ENDPOINT_AUTH_PROFILE,
    ENDPOINT_AUTH_PROGRESS,
    ENDPOINT_AUTH_SIGNUP,
    ENDPOINT_HEALTH,
    ENDPOINT_TRACK_FOOD,
    ENDPOINT_TRACK_JUNK,
    ENDPOINT_TRACK_SLEEP,
    ENDPOINT_TRACK_STREAK,
    ENDPOINT_TRACK_WATER,
    ENDPOINT_TRACK_WORKOUT,
)
from gymbro.core.middleware import Middleware, compose, default_middlewares
from gymbro.core.session import SessionStore
from gymbro.exceptions import (
    APIError,
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
)
from gymbro.models import (
    AuthResponse,
    BodyProfile,
    Dashboard,
    Goals,
    Progress,
    Streaks,
    UserProfile,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class APIClient:
    """
    Клиент для взаимодействия с backend трекера.

    Все запросы проходят через одну функцию отправки, обёрнутую цепочкой
    middleware: подстановка bearer токена из сессии, очистка сессии при 401
    и перевод не-2xx ответов в исключения. Каждый вызов делает ровно одну
    попытку, ошибки пробрасываются вызывающему как APIError.
    """

    def __init__(
        self,
        session: SessionStore,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
        middlewares: Optional[Iterable[Middleware]] = None,
    ) -> None:
        """
        Инициализация API клиента.

        Args:
            session: Хранилище сессии, из которого берётся токен
            base_url: Базовый URL API (по умолчанию из настроек)
            timeout: Таймаут запросов в секундах (по умолчанию из настроек)
            http: HTTP сессия requests (транспорт)
            middlewares: Цепочка middleware (по умолчанию стандартная)
        """
        settings = get_settings()
        self.session = session
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self.http = http or requests.Session()

        if middlewares is None:
            middlewares = default_middlewares(session)
        self._send = compose(self._transport, middlewares)

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Закрыть HTTP сессию"""
        self.http.close()

    def _transport(self, request: requests.Request) -> requests.Response:
        """
        Отправка подготовленного запроса.

        Raises:
            RequestTimeoutError: Запрос не уложился в таймаут
            NetworkError: Backend недоступен
        """
        prepared = self.http.prepare_request(request)
        try:
            return self.http.send(prepared, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"{request.method} {request.url} timed out after {self.timeout}s")
            raise RequestTimeoutError(details={"url": request.url}) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{request.method} {request.url} failed: {e}")
            raise NetworkError(details={"url": request.url}) from e

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Выполнить запрос и разобрать JSON ответа.

        Returns:
            Тело ответа ({} для пустого ответа)

        Raises:
            APIError: Любая ошибка запроса
        """
        request = requests.Request(
            method=method,
            url=f"{self.base_url}{path}",
            headers={"Content-Type": "application/json"},
            json=json,
            params=params,
        )
        response = self._send(request)

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response from {path}: {e}")
            raise MalformedResponseError(status_code=response.status_code) from e

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        """Разбор тела ответа в модель"""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise MalformedResponseError(details={"model": model.__name__}) from e

    def _parse_user(self, data: Any) -> UserProfile:
        if not isinstance(data, dict):
            raise MalformedResponseError(details={"model": UserProfile.__name__})
        try:
            return UserProfile.from_response(data)
        except ValidationError as e:
            logger.error(f"Unexpected user payload: {e}")
            raise MalformedResponseError(details={"model": UserProfile.__name__}) from e

    # ===== AUTH =====

    def login(self, email: str, password: str) -> AuthResponse:
        """
        Вход пользователя.

        Returns:
            Токен и (если backend его вернул) профиль
        """
        data = self._request(
            "POST",
            ENDPOINT_AUTH_LOGIN,
            json={"email": email, "password": password},
        )
        return self._parse(AuthResponse, data)

    def signup(self, name: str, email: str, password: str) -> AuthResponse:
        """
        Регистрация нового пользователя.

        Returns:
            Токен и (если backend его вернул) профиль
        """
        data = self._request(
            "POST",
            ENDPOINT_AUTH_SIGNUP,
            json={"name": name, "email": email, "password": password},
        )
        return self._parse(AuthResponse, data)

    def get_profile(self) -> UserProfile:
        """Профиль текущего пользователя"""
        return self._parse_user(self._request("GET", ENDPOINT_AUTH_PROFILE))

    def update_profile(self, profile: BodyProfile) -> UserProfile:
        """Обновление физических параметров; возвращает новый профиль целиком"""
        data = self._request("PUT", ENDPOINT_AUTH_PROFILE, json=profile.to_payload())
        return self._parse_user(data)

    def update_goals(self, goals: Goals) -> UserProfile:
        """Обновление дневных целей; возвращает новый профиль целиком"""
        data = self._request("PUT", ENDPOINT_AUTH_GOALS, json=goals.to_payload())
        return self._parse_user(data)

    # ===== PROGRESS =====

    def get_progress(self) -> Progress:
        return self._parse(Progress, self._request("GET", ENDPOINT_AUTH_PROGRESS))

    def get_streaks(self) -> Streaks:
        return self._parse(Streaks, self._request("GET", ENDPOINT_TRACK_STREAK))

    def get_dashboard(self) -> Dashboard:
        """
        Загрузка прогресса и стриков параллельно.

        Запросы независимы: ошибка одного попадает в Dashboard.errors
        и не мешает результату другого.
        """
        dashboard = Dashboard()
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="dashboard") as pool:
            futures = {
                "progress": pool.submit(self.get_progress),
                "streaks": pool.submit(self.get_streaks),
            }
            for name, future in futures.items():
                try:
                    setattr(dashboard, name, future.result())
                except APIError as e:
                    logger.warning(f"[DASHBOARD] Failed to load {name}: {e.message}")
                    dashboard.errors[name] = e.message
        return dashboard

    # ===== TRACKING =====

    def track_food(self, food: str) -> Dict[str, Any]:
        return self._request("POST", ENDPOINT_TRACK_FOOD, json={"food": food})

    def track_water(self, amount: float) -> Dict[str, Any]:
        """
        Записать выпитую воду.

        Args:
            amount: Количество в миллилитрах
        """
        return self._request("POST", ENDPOINT_TRACK_WATER, json={"amount": amount})

    def track_sleep(self, hours: float) -> Dict[str, Any]:
        return self._request("POST", ENDPOINT_TRACK_SLEEP, json={"hours": hours})

    def track_workout(
        self,
        workout: str,
        duration: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Записать тренировку.

        Args:
            workout: Описание тренировки
            duration: Длительность в минутах (опционально)
        """
        payload: Dict[str, Any] = {"workout": workout}
        if duration is not None:
            payload["duration"] = duration
        return self._request("POST", ENDPOINT_TRACK_WORKOUT, json=payload)

    def track_junk(self, junk: str) -> Dict[str, Any]:
        return self._request("POST", ENDPOINT_TRACK_JUNK, json={"junk": junk})

    # ===== SERVICE =====

    def get_health(self) -> Dict[str, Any]:
        """Проверка состояния API"""
        return self._request("GET", ENDPOINT_HEALTH)
