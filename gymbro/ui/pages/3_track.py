"""Запись еды, воды, сна, тренировок и фастфуда."""

import streamlit as st

from gymbro import screens
from gymbro.constants import SESSION_DASHBOARD
from gymbro.ui.components import render_result
from gymbro.ui.state import (
    get_api_client,
    get_session_store,
    init_session_state,
    require_authentication,
    setup_page,
)

setup_page("track")
init_session_state()
require_authentication()

client = get_api_client()
result = screens.IDLE

food_tab, water_tab, sleep_tab, workout_tab, junk_tab = st.tabs(
    ["🍽️ Food", "💧 Water", "😴 Sleep", "🏋️ Workout", "🍔 Junk food"]
)

with food_tab:
    with st.form(key="food_form", clear_on_submit=True):
        food = st.text_input("What did you eat?")
        if st.form_submit_button("Track"):
            with st.spinner("Tracking..."):
                result = screens.track_food(client, food)

with water_tab:
    with st.form(key="water_form", clear_on_submit=True):
        amount = st.text_input("How much water (ml)?")
        if st.form_submit_button("Track"):
            with st.spinner("Tracking..."):
                result = screens.track_water(client, amount)

with sleep_tab:
    with st.form(key="sleep_form", clear_on_submit=True):
        hours = st.text_input("How many hours did you sleep?")
        if st.form_submit_button("Track"):
            with st.spinner("Tracking..."):
                result = screens.track_sleep(client, hours)

with workout_tab:
    with st.form(key="workout_form", clear_on_submit=True):
        workout = st.text_input("What was your workout?")
        duration = st.text_input("Duration (minutes, optional)")
        if st.form_submit_button("Track"):
            with st.spinner("Tracking..."):
                result = screens.track_workout(client, workout, duration)

with junk_tab:
    with st.form(key="junk_form", clear_on_submit=True):
        junk = st.text_input("What junk food did you eat?")
        if st.form_submit_button("Track"):
            with st.spinner("Tracking..."):
                result = screens.track_junk(client, junk)

if not get_session_store().is_authenticated:
    st.switch_page("pages/1_auth.py")

if result.ok:
    # Прогресс на главном экране устарел
    st.session_state.pop(SESSION_DASHBOARD, None)

render_result(result)
st.page_link("pages/2_dashboard.py", label="Back to dashboard", icon="⬅️")
