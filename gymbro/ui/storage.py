"""Хранилище токена в cookie браузера."""

import json
import logging
from typing import Callable, Mapping, Optional
from urllib.parse import unquote

import streamlit as st
import streamlit.components.v1 as components

from gymbro.config import Settings
from gymbro.constants import TOKEN_COOKIE_MAX_AGE, TOKEN_STORAGE_FILE, TOKEN_STORAGE_KEY
from gymbro.core.storage import FileTokenStorage, TokenStorage

logger = logging.getLogger(__name__)


def _request_cookies() -> Mapping[str, str]:
    return st.context.cookies


def _render_html(html: str) -> None:
    components.html(html, height=0)


def cookie_script(key: str, value: str, max_age: int) -> str:
    """JavaScript, который ставит (или при max_age=0 удаляет) cookie на странице"""
    # "</" внутри строки закрыл бы тег <script>
    name = json.dumps(key).replace("</", "<\\/")
    data = json.dumps(value).replace("</", "<\\/")
    return f"""
    <script>
        window.parent.document.cookie = {name} + "=" + encodeURIComponent({data})
            + "; path=/; max-age={max_age}; SameSite=Strict";
        console.log('[GYMBRO] Token cookie updated');
    </script>
    """


class BrowserTokenStorage(TokenStorage):
    """
    Токен в cookie браузера текущего посетителя.

    У каждого браузера своя cookie, поэтому сессии разных посетителей
    не пересекаются. Cookie читается из запроса, которым браузер открыл
    сессию Streamlit. Запись выполняет JavaScript в компоненте: save() и
    remove() сразу меняют значение в памяти, а скрипт уходит в браузер
    через flush().
    """

    def __init__(
        self,
        key: str = TOKEN_STORAGE_KEY,
        max_age: int = TOKEN_COOKIE_MAX_AGE,
        cookies: Optional[Callable[[], Mapping[str, str]]] = None,
        render: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Args:
            key: Имя cookie
            max_age: Время жизни cookie в секундах
            cookies: Источник cookie запроса (по умолчанию st.context.cookies)
            render: Отрисовка HTML компонента (по умолчанию components.html)
        """
        self.key = key
        self.max_age = max_age
        self._cookies = cookies or _request_cookies
        self._render = render or _render_html
        self._token: Optional[str] = None
        self._written = False
        self._pending: Optional[str] = None

    def get(self) -> Optional[str]:
        if self._written:
            return self._token

        raw = self._cookies().get(self.key)
        if not raw:
            return None

        token = unquote(raw)
        logger.info(f"[GET_TOKEN] Loaded token from browser cookie, length: {len(token)}")
        return token

    def save(self, token: str) -> None:
        self._token = token
        self._written = True
        self._pending = cookie_script(self.key, token, self.max_age)
        logger.info(f"[SAVE_TOKEN] Token cookie scheduled, length: {len(token)}")

    def remove(self) -> None:
        self._token = None
        self._written = True
        self._pending = cookie_script(self.key, "", 0)
        logger.info("[REMOVE_TOKEN] Token cookie removal scheduled")

    def flush(self) -> None:
        """
        Отправить в браузер последнюю запись cookie.

        Скрипт отправляется на каждом запуске страницы: запуск может
        прерваться переходом на другую страницу раньше, чем браузер его
        выполнит. Повторная запись того же значения ничего не меняет.
        """
        if self._pending is None:
            return

        self._render(self._pending)
        logger.debug("[FLUSH_TOKEN] Cookie update sent to browser")


def make_token_storage(settings: Settings) -> TokenStorage:
    """
    Хранилище токена для новой сессии Streamlit.

    Файл общий для всех посетителей сервера, поэтому подходит только
    для установки на одного пользователя.
    """
    if settings.token_storage == TOKEN_STORAGE_FILE:
        return FileTokenStorage(settings.token_storage_file, key=settings.token_storage_key)
    return BrowserTokenStorage(
        key=settings.token_storage_key,
        max_age=settings.token_cookie_max_age,
    )
