"""Профиль и дневные цели."""

import streamlit as st

from gymbro.constants import MSG_INVALID_NUMBER
from gymbro.models import BodyProfile, BodyType, DesiredOutcome, Goals, UserProfile
from gymbro.screens import parse_optional_number, parse_positive_number
from gymbro.ui.components import render_logout_button
from gymbro.ui.state import (
    get_auth_service,
    get_session_store,
    init_session_state,
    require_authentication,
    setup_page,
)

setup_page("profile")
init_session_state()
require_authentication()

auth = get_auth_service()
user = get_session_store().user or UserProfile()

st.markdown("## Profile & Goals")
if user.email:
    st.caption(user.email)

if st.button("🔄 Refresh", key="profile_refresh_btn"):
    with st.spinner("Loading..."):
        refreshed = auth.refresh_profile()
    if refreshed.success:
        st.rerun()
    st.error(refreshed.message)

profile_tab, goals_tab = st.tabs(["Profile", "Goals"])

with profile_tab:
    with st.form(key="profile_form"):
        height = st.text_input(
            "Height (cm)",
            value=f"{user.profile.height:g}" if user.profile.height else "",
        )
        weight = st.text_input(
            "Weight (kg)",
            value=f"{user.profile.weight:g}" if user.profile.weight else "",
        )
        body_types = list(BodyType)
        body_type = st.selectbox(
            "Current Body Type",
            body_types,
            index=body_types.index(user.profile.body_type),
            format_func=lambda value: value.value.replace("-", " ").title(),
        )
        outcomes = list(DesiredOutcome)
        desired_outcome = st.selectbox(
            "Desired Outcome",
            outcomes,
            index=outcomes.index(user.profile.desired_outcome),
            format_func=lambda value: value.value.replace("-", " ").title(),
        )
        save_profile = st.form_submit_button("Save Profile", use_container_width=True)

    if save_profile:
        profile = BodyProfile(
            height=parse_optional_number(height),
            weight=parse_optional_number(weight),
            body_type=body_type,
            desired_outcome=desired_outcome,
        )
        with st.spinner("Saving..."):
            result = auth.save_profile(profile)
        if result.success:
            st.success(result.message)
        else:
            st.error(result.message)

with goals_tab:
    with st.form(key="goals_form"):
        protein = st.text_input("Protein Goal (g)", value=f"{user.goals.protein:g}")
        calories = st.text_input("Calorie Goal", value=f"{user.goals.calories:g}")
        water = st.text_input("Water Goal (glasses)", value=f"{user.goals.water:g}")
        sleep = st.text_input("Sleep Goal (hours)", value=f"{user.goals.sleep:g}")
        save_goals = st.form_submit_button("Save Goals", use_container_width=True)

    if save_goals:
        values = [parse_positive_number(v) for v in (protein, calories, water, sleep)]
        if any(value is None for value in values):
            st.error(MSG_INVALID_NUMBER)
        else:
            goals = Goals(
                protein=values[0],
                calories=values[1],
                water=values[2],
                sleep=values[3],
            )
            with st.spinner("Saving..."):
                result = auth.save_goals(goals)
            if result.success:
                st.success(result.message)
            else:
                st.error(result.message)

if not get_session_store().is_authenticated:
    st.switch_page("pages/1_auth.py")

st.markdown("---")
st.page_link("pages/2_dashboard.py", label="Back to dashboard", icon="⬅️")
render_logout_button(key="profile_logout_btn")
