"""
Общие фикстуры: фейковый HTTP транспорт, сессия и клиент
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import urlparse

import pytest
import requests

from gymbro.api_client import APIClient
from gymbro.core import AuthService, MemoryTokenStorage, SessionStore
from gymbro.models import UserProfile

BASE_URL = "http://backend.test"
TOKEN = "token-abc-123456"

USER_PAYLOAD: Dict[str, Any] = {
    "_id": "u1",
    "name": "Alex",
    "email": "alex@example.com",
    "profile": {"height": 180, "weight": 75, "bodyType": "lean", "desiredOutcome": "muscular"},
    "goals": {"protein": 150, "calories": 2000, "water": 8, "sleep": 8},
}

Reply = Union[Tuple[int, Any], Exception, Callable[[requests.PreparedRequest], Any]]


def make_response(
    request: requests.PreparedRequest,
    status: int,
    body: Any = None,
) -> requests.Response:
    """Собрать requests.Response с JSON (или сырым) телом"""
    response = requests.Response()
    response.status_code = status
    response.request = request
    response.url = request.url
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


class FakeHTTP(requests.Session):
    """
    requests.Session, который не ходит в сеть.

    Ответы регистрируются по (метод, путь); каждый отправленный запрос
    сохраняется в sent вместе с таймаутом.
    """

    def __init__(self) -> None:
        super().__init__()
        self.routes: Dict[Tuple[str, str], List[Reply]] = {}
        self.sent: List[requests.PreparedRequest] = []
        self.timeouts: List[Optional[float]] = []

    def add(self, method: str, path: str, *replies: Reply) -> None:
        self.routes.setdefault((method.upper(), path), []).extend(replies)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.sent.append(request)
        self.timeouts.append(kwargs.get("timeout"))

        key = (request.method, urlparse(request.url).path)
        replies = self.routes.get(key)
        if not replies:
            raise AssertionError(f"Unexpected request: {key}")

        # Последний ответ повторяется для всех следующих запросов
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(request)
        status, body = reply
        return make_response(request, status, body)

    def auth_headers(self) -> List[Optional[str]]:
        return [r.headers.get("Authorization") for r in self.sent]

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.sent[index].body)


# ==================== Fixtures ====================

@pytest.fixture
def http() -> FakeHTTP:
    return FakeHTTP()


@pytest.fixture
def storage() -> MemoryTokenStorage:
    return MemoryTokenStorage()


@pytest.fixture
def session(storage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
def client(session, http) -> APIClient:
    return APIClient(session, base_url=BASE_URL, timeout=10, http=http)


@pytest.fixture
def auth(session, client) -> AuthService:
    return AuthService(session, client)


@pytest.fixture
def user() -> UserProfile:
    return UserProfile.from_response({"user": USER_PAYLOAD})


@pytest.fixture
def logged_in(session, user) -> SessionStore:
    """Сессия с активным токеном и профилем"""
    session.set_session(TOKEN, user)
    return session
