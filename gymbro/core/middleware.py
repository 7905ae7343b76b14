"""
Middleware для отправки запросов

Каждый middleware оборачивает функцию отправки Send и возвращает новую.
APIClient собирает из них цепочку вокруг одного транспорта.
"""

import copy
import functools
import logging
from typing import Any, Callable, Iterable, List, Optional

import requests

from gymbro.constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_UNAUTHORIZED,
)
from gymbro.core.session import SessionStore
from gymbro.exceptions import (
    APIError,
    AuthenticationRejectedError,
    ServerFaultError,
    ValidationRejectedError,
)

logger = logging.getLogger(__name__)

Send = Callable[[requests.Request], requests.Response]
Middleware = Callable[[Send], Send]

# Поля тела ответа, из которых берётся сообщение об ошибке
_MESSAGE_FIELDS = ("message", "detail", "error")


def compose(send: Send, middlewares: Iterable[Middleware]) -> Send:
    """
    Собрать цепочку: первый middleware в списке становится внешним.

    Args:
        send: Базовая функция отправки (транспорт)
        middlewares: Middleware в порядке от внешнего к внутреннему
    """
    for middleware in reversed(list(middlewares)):
        send = middleware(send)
    return send


def bearer_auth(session: SessionStore) -> Middleware:
    """
    Добавляет Authorization: Bearer <token>, если в сессии есть токен.

    Токен читается заново перед каждым запросом. Исходный запрос
    не изменяется: заголовок добавляется в копию.
    """

    def middleware(send: Send) -> Send:
        @functools.wraps(send)
        def wrapper(request: requests.Request) -> requests.Response:
            token = session.token
            if not token:
                return send(request)

            authed = copy.copy(request)
            authed.headers = {**(request.headers or {}), "Authorization": f"Bearer {token}"}
            return send(authed)

        return wrapper

    return middleware


def clear_session_on_unauthorized(session: SessionStore) -> Middleware:
    """
    Очищает сессию, если backend отклонил токен (401).

    Ошибка пробрасывается дальше: без повторного запроса и без редиректа.
    Переход на экран входа делает UI, когда видит пустую сессию.
    """

    def middleware(send: Send) -> Send:
        @functools.wraps(send)
        def wrapper(request: requests.Request) -> requests.Response:
            try:
                return send(request)
            except AuthenticationRejectedError:
                logger.warning(
                    f"[AUTH] {request.method} {request.url} rejected with 401, clearing session"
                )
                session.clear()
                raise

        return wrapper

    return middleware


def raise_for_status(send: Send) -> Send:
    """Превращает не-2xx ответы в исключения из таксономии ошибок."""

    @functools.wraps(send)
    def wrapper(request: requests.Request) -> requests.Response:
        response = send(request)
        if 200 <= response.status_code < 300:
            return response

        error_cls = error_class_for_status(response.status_code)
        message = extract_error_message(response)
        logger.error(
            f"API request {request.method} {request.url} failed with status "
            f"{response.status_code}: {response.text[:200]}"
        )
        raise error_cls(message=message, status_code=response.status_code)

    return wrapper


def error_class_for_status(status_code: int) -> type:
    """Категория ошибки по HTTP статусу"""
    if status_code == HTTP_UNAUTHORIZED:
        return AuthenticationRejectedError
    if HTTP_BAD_REQUEST <= status_code < HTTP_INTERNAL_SERVER_ERROR:
        return ValidationRejectedError
    if status_code >= HTTP_INTERNAL_SERVER_ERROR:
        return ServerFaultError
    return APIError


def extract_error_message(response: requests.Response) -> Optional[str]:
    """
    Достать человекочитаемое сообщение из тела ответа.

    Returns:
        Сообщение или None, если в теле его нет
    """
    try:
        body: Any = response.json()
    except ValueError:
        return None

    if isinstance(body, dict):
        for field in _MESSAGE_FIELDS:
            value = body.get(field)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def default_middlewares(session: SessionStore) -> List[Middleware]:
    """Стандартная цепочка клиента, от внешнего к внутреннему"""
    return [
        bearer_auth(session),
        clear_session_on_unauthorized(session),
        raise_for_status,
    ]
