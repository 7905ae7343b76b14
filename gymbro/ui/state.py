"""Привязка сессии и API клиента к session state Streamlit."""

import logging

import streamlit as st

from gymbro.api_client import APIClient
from gymbro.config import PAGE_CONFIGS, get_settings
from gymbro.constants import SESSION_RESTORED, SESSION_STORE
from gymbro.core import AuthService, SessionStore
from gymbro.logging_config import setup_logging
from gymbro.ui.storage import BrowserTokenStorage, make_token_storage

logger = logging.getLogger(__name__)

_CLIENT_KEY = "api_client"
_AUTH_KEY = "auth_service"


@st.cache_resource
def _configure_logging() -> bool:
    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        json_logs=settings.json_logs,
        log_file=settings.log_file,
    )
    return True


def init_session_state() -> None:
    """Создать сессию, клиент и сервис авторизации для текущей вкладки."""
    _configure_logging()

    if SESSION_STORE not in st.session_state:
        settings = get_settings()
        store = SessionStore(make_token_storage(settings))
        client = APIClient(store)
        st.session_state[SESSION_STORE] = store
        st.session_state[_CLIENT_KEY] = client
        st.session_state[_AUTH_KEY] = AuthService(store, client)
        st.session_state[SESSION_RESTORED] = False

    if not st.session_state[SESSION_RESTORED]:
        with st.spinner("Loading..."):
            get_auth_service().restore()
        st.session_state[SESSION_RESTORED] = True

    # Запись cookie, запланированная при входе или выходе на прошлом запуске
    storage = get_session_store().storage
    if isinstance(storage, BrowserTokenStorage):
        storage.flush()


def get_session_store() -> SessionStore:
    return st.session_state[SESSION_STORE]


def get_api_client() -> APIClient:
    return st.session_state[_CLIENT_KEY]


def get_auth_service() -> AuthService:
    return st.session_state[_AUTH_KEY]


def require_authentication() -> None:
    """Требует авторизацию, иначе перенаправляет на страницу входа."""
    if get_session_store().is_authenticated:
        return
    st.switch_page("pages/1_auth.py")


def setup_page(name: str) -> None:
    """Настройка страницы по конфигурации"""
    page_config = PAGE_CONFIGS[name]
    st.set_page_config(
        page_title=page_config.title,
        page_icon=page_config.icon,
        layout=page_config.layout,
        initial_sidebar_state=page_config.initial_sidebar_state,
    )
