"""Главный экран: прогресс за день и стрики."""

import streamlit as st

from gymbro.constants import SESSION_DASHBOARD
from gymbro.screens import load_dashboard
from gymbro.ui.components import (
    render_greeting,
    render_logout_button,
    render_progress_cards,
    render_streak_cards,
)
from gymbro.ui.state import (
    get_api_client,
    get_session_store,
    init_session_state,
    require_authentication,
    setup_page,
)

setup_page("dashboard")
init_session_state()
require_authentication()

header_col, logout_col = st.columns([4, 1])
with header_col:
    render_greeting()
with logout_col:
    render_logout_button()

if st.button("🔄 Refresh") or SESSION_DASHBOARD not in st.session_state:
    with st.spinner("Loading your progress..."):
        st.session_state[SESSION_DASHBOARD] = load_dashboard(get_api_client())

# Ответ мог прийти с 401 и очистить сессию
if not get_session_store().is_authenticated:
    st.session_state.pop(SESSION_DASHBOARD, None)
    st.switch_page("pages/1_auth.py")

view = st.session_state[SESSION_DASHBOARD]

if view.error_message:
    st.error(view.error_message)

if view.progress_cards:
    st.markdown("### Today's Progress")
    render_progress_cards(view)

st.markdown("### Quick Actions")
actions = st.columns(2)
with actions[0]:
    st.page_link("pages/3_track.py", label="Log Food, Water, Sleep, Workout", icon="📝")
with actions[1]:
    st.page_link("pages/4_profile.py", label="Profile & Goals", icon="⚙️")

if view.streak_cards:
    st.markdown("### Your Streaks")
    render_streak_cards(view)
