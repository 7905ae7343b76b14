"""Страница входа и регистрации."""

import streamlit as st

from gymbro.constants import MAX_PASSWORD_LENGTH_BYTES, MSG_PASSWORDS_MISMATCH
from gymbro.ui.state import (
    get_auth_service,
    get_session_store,
    init_session_state,
    setup_page,
)
from gymbro.ui.styles import SIDEBAR_HIDE_STYLE

setup_page("auth")
init_session_state()

# Скрываем sidebar для неавторизованных пользователей
st.markdown(SIDEBAR_HIDE_STYLE, unsafe_allow_html=True)

if get_session_store().is_authenticated:
    st.switch_page("pages/2_dashboard.py")

auth = get_auth_service()

st.markdown("## GymBro 💪")
login_tab, signup_tab = st.tabs(["Login", "Sign up"])

with login_tab:
    with st.form(key="login_form"):
        email = st.text_input("Email", placeholder="your@email.com")
        password = st.text_input(
            "Password",
            type="password",
            max_chars=MAX_PASSWORD_LENGTH_BYTES,
        )
        submitted = st.form_submit_button("Login", use_container_width=True)

    if submitted:
        with st.spinner("Logging in..."):
            result = auth.login(email, password)
        if result.success:
            st.switch_page("pages/2_dashboard.py")
        else:
            st.error(result.message)

with signup_tab:
    with st.form(key="signup_form"):
        name = st.text_input("Name")
        signup_email = st.text_input("Email", placeholder="your@email.com", key="signup_email")
        signup_password = st.text_input(
            "Password",
            type="password",
            max_chars=MAX_PASSWORD_LENGTH_BYTES,
            key="signup_password",
        )
        password_confirm = st.text_input(
            "Confirm password",
            type="password",
            max_chars=MAX_PASSWORD_LENGTH_BYTES,
        )
        signup_submitted = st.form_submit_button("Sign up", use_container_width=True)

    if signup_submitted:
        if signup_password != password_confirm:
            st.error(MSG_PASSWORDS_MISMATCH)
        else:
            with st.spinner("Creating account..."):
                result = auth.signup(name, signup_email, signup_password)
            if result.success:
                st.switch_page("pages/2_dashboard.py")
            else:
                st.error(result.message)
