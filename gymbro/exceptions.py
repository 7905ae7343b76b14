"""
Исключения клиента

Единая таксономия ошибок запросов к backend: каждая категория знает свой
статус код (если есть) и сообщение по умолчанию.
"""

from typing import Any, Dict, Optional

from gymbro.constants import (
    MSG_AUTH_REJECTED,
    MSG_MALFORMED_RESPONSE,
    MSG_NETWORK_ERROR,
    MSG_REQUEST_FAILED,
    MSG_SERVER_FAULT,
    MSG_STORAGE_ERROR,
    MSG_TIMEOUT,
    MSG_VALIDATION_REJECTED,
)


class GymBroError(Exception):
    """Базовое исключение приложения"""

    default_message: str = MSG_REQUEST_FAILED
    category: str = "internal"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация исключения в словарь"""
        return {
            "error": self.category,
            "message": self.message,
            "details": self.details,
        }


class StorageError(GymBroError):
    """Ошибки при работе с локальным хранилищем токена"""

    default_message = MSG_STORAGE_ERROR
    category = "storage"


class APIError(GymBroError):
    """Базовая ошибка запроса к backend"""

    default_message = MSG_REQUEST_FAILED
    category = "request_failed"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class NetworkError(APIError):
    """Backend недоступен"""

    default_message = MSG_NETWORK_ERROR
    category = "network_unreachable"


class RequestTimeoutError(APIError):
    """Превышен таймаут запроса"""

    default_message = MSG_TIMEOUT
    category = "timeout"


class AuthenticationRejectedError(APIError):
    """Backend отклонил токен (401)"""

    default_message = MSG_AUTH_REJECTED
    category = "authentication_rejected"


class ValidationRejectedError(APIError):
    """Backend отклонил запрос (4xx, кроме 401)"""

    default_message = MSG_VALIDATION_REJECTED
    category = "validation_rejected"


class ServerFaultError(APIError):
    """Ошибка на стороне backend (5xx)"""

    default_message = MSG_SERVER_FAULT
    category = "server_fault"


class MalformedResponseError(APIError):
    """Ответ backend не удалось разобрать"""

    default_message = MSG_MALFORMED_RESPONSE
    category = "malformed_response"
