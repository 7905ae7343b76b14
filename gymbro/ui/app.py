"""Главная страница - навигация и маршрутизация."""

import streamlit as st

from gymbro.ui.state import get_session_store, init_session_state, setup_page

setup_page("main")

# Загрузка сохранённой сессии
init_session_state()

if get_session_store().is_authenticated:
    st.switch_page("pages/2_dashboard.py")
else:
    st.switch_page("pages/1_auth.py")
