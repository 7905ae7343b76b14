"""Общие компоненты для Streamlit приложения."""

import streamlit as st

from gymbro.screens import DashboardView, ScreenResult, ScreenState
from gymbro.ui.state import get_auth_service, get_session_store
from gymbro.ui.styles import get_progress_card_html, get_streak_card_html


def render_result(result: ScreenResult) -> None:
    """Показать результат действия экрана."""
    if result.state == ScreenState.DONE and result.message:
        st.success(result.message)
    elif result.state == ScreenState.ERROR and result.message:
        st.error(result.message)


def render_greeting() -> None:
    user = get_session_store().user
    name = user.name if user and user.name else "GymBro"
    st.markdown(f"## Hello, {name}! 💪")


def render_progress_cards(view: DashboardView) -> None:
    columns = st.columns(2)
    for index, card in enumerate(view.progress_cards):
        with columns[index % 2]:
            st.markdown(
                get_progress_card_html(
                    title=card.title,
                    icon=card.icon,
                    current=card.current,
                    goal=card.goal,
                    unit=card.unit,
                    percentage=card.percentage,
                    color=card.color,
                ),
                unsafe_allow_html=True,
            )


def render_streak_cards(view: DashboardView) -> None:
    columns = st.columns(2)
    for index, card in enumerate(view.streak_cards):
        with columns[index % 2]:
            st.markdown(
                get_streak_card_html(
                    title=card.title,
                    icon=card.icon,
                    current=card.current,
                    longest=card.longest,
                    color=card.color,
                ),
                unsafe_allow_html=True,
            )


def render_logout_button(key: str = "logout_btn") -> None:
    """Отображает кнопку выхода."""
    if st.button("Logout", use_container_width=True, type="secondary", key=key):
        get_auth_service().logout()
        st.switch_page("pages/1_auth.py")
