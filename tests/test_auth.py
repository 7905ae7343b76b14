"""
Тесты AuthService: вход, регистрация, выход и обновление профиля
"""

import pytest

from gymbro.constants import MSG_EMPTY_FIELDS, MSG_INVALID_EMAIL, MSG_NOT_AUTHENTICATED
from gymbro.core import validate_credentials, validate_password_length
from gymbro.models import BodyProfile, BodyType, Goals, Session

from conftest import TOKEN, USER_PAYLOAD


# ==================== Validation ====================

@pytest.mark.parametrize(
    "password, ok",
    [
        ("12345", False),
        ("123456", True),
        ("a" * 72, True),
        ("a" * 73, False),
        ("я" * 37, False),  # 74 байта в UTF-8
    ],
)
def test_validate_password_length(password, ok):
    assert (validate_password_length(password) is None) is ok


@pytest.mark.parametrize(
    "email, password, expected",
    [
        ("", "secret1", MSG_EMPTY_FIELDS),
        ("alex@example.com", "", MSG_EMPTY_FIELDS),
        ("not-an-email", "secret1", MSG_INVALID_EMAIL),
        (" alex@example.com ", "secret1", None),
    ],
)
def test_validate_credentials(email, password, expected):
    assert validate_credentials(email, password) == expected


# ==================== Login / signup ====================

def test_login_with_user_in_response(auth, session, storage, http):
    http.add("POST", "/auth/login", (200, {"token": TOKEN, "user": USER_PAYLOAD}))

    result = auth.login("Alex@Example.com", "secret1")

    assert result.success
    assert result.user.name == "Alex"
    assert session.token == TOKEN
    assert session.user == result.user
    assert storage.get() == TOKEN


def test_login_sends_email_as_typed(auth, http):
    http.add("POST", "/auth/login", (200, {"token": TOKEN, "user": USER_PAYLOAD}))

    auth.login("  Alex@Example.com ", "secret1")

    assert http.json_body() == {"email": "Alex@Example.com", "password": "secret1"}


def test_login_fetches_profile_when_response_has_no_user(auth, session, http):
    http.add("POST", "/auth/login", (200, {"token": TOKEN}))
    http.add("GET", "/auth/profile", (200, {"user": USER_PAYLOAD}))

    result = auth.login("alex@example.com", "secret1")

    assert result.success
    assert session.user.email == "alex@example.com"
    assert http.auth_headers() == [None, f"Bearer {TOKEN}"]


def test_login_keeps_session_when_profile_fetch_fails(auth, session, http):
    http.add("POST", "/auth/login", (200, {"token": TOKEN}))
    http.add("GET", "/auth/profile", (503, {}))

    result = auth.login("alex@example.com", "secret1")

    assert result.success
    assert session.token == TOKEN
    assert session.user is None


def test_login_fails_when_new_token_is_rejected(auth, session, storage, http):
    http.add("POST", "/auth/login", (200, {"token": TOKEN}))
    http.add("GET", "/auth/profile", (401, {}))

    result = auth.login("alex@example.com", "secret1")

    assert not result.success
    assert session.session == Session()
    assert storage.get() is None


def test_login_failure_reports_backend_message(auth, session, http):
    http.add("POST", "/auth/login", (400, {"message": "Invalid credentials"}))

    result = auth.login("alex@example.com", "wrong-password")

    assert not result.success
    assert result.message == "Login failed: Invalid credentials"
    assert not session.is_authenticated


def test_login_network_failure(auth, http):
    import requests

    http.add("POST", "/auth/login", requests.exceptions.ConnectionError())

    result = auth.login("alex@example.com", "secret1")

    assert not result.success
    assert result.message.startswith("Login failed: Network error")


def test_login_validation_skips_network(auth, http):
    result = auth.login("", "")

    assert not result.success
    assert result.message == MSG_EMPTY_FIELDS
    assert http.sent == []


def test_signup_starts_session(auth, session, http):
    http.add("POST", "/auth/signup", (201, {"token": TOKEN, "user": USER_PAYLOAD}))

    result = auth.signup(" Alex ", "alex@example.com", "secret1")

    assert result.success
    assert session.token == TOKEN
    assert http.json_body() == {"name": "Alex", "email": "alex@example.com", "password": "secret1"}


def test_signup_rejects_short_password(auth, http):
    result = auth.signup("Alex", "alex@example.com", "123")

    assert not result.success
    assert http.sent == []


def test_signup_requires_name(auth, http):
    result = auth.signup("  ", "alex@example.com", "secret1")

    assert result.message == MSG_EMPTY_FIELDS
    assert http.sent == []


def test_signup_conflict_message(auth, http):
    http.add("POST", "/auth/signup", (409, {"message": "User already exists"}))

    result = auth.signup("Alex", "alex@example.com", "secret1")

    assert result.message == "Signup failed: User already exists"


# ==================== Session lifecycle ====================

def test_logout_clears_session(auth, logged_in, storage):
    auth.logout()
    auth.logout()

    assert logged_in.session == Session()
    assert storage.get() is None


def test_restore_loads_token_and_profile(auth, session, storage, http):
    storage.save(TOKEN)
    http.add("GET", "/auth/profile", (200, {"user": USER_PAYLOAD}))

    assert auth.restore() is True

    assert session.token == TOKEN
    assert session.user.name == "Alex"


def test_restore_with_rejected_token_ends_empty(auth, session, storage, http):
    storage.save(TOKEN)
    http.add("GET", "/auth/profile", (401, {}))

    assert auth.restore() is True

    assert session.session == Session()
    assert storage.get() is None
    assert session.ready.is_set()


def test_restore_offline_keeps_token(auth, session, storage, http):
    import requests

    storage.save(TOKEN)
    http.add("GET", "/auth/profile", requests.exceptions.ConnectionError())

    assert auth.restore() is True

    assert session.token == TOKEN
    assert session.user is None


# ==================== Profile / goals ====================

def test_save_profile_replaces_user(auth, logged_in, http):
    updated = {**USER_PAYLOAD, "profile": {**USER_PAYLOAD["profile"], "bodyType": "muscular"}}
    http.add("PUT", "/auth/profile", (200, {"user": updated}))

    result = auth.save_profile(BodyProfile(body_type=BodyType.MUSCULAR))

    assert result.success
    assert logged_in.user.profile.body_type == BodyType.MUSCULAR
    assert logged_in.token == TOKEN


def test_save_goals_replaces_user(auth, logged_in, http):
    updated = {**USER_PAYLOAD, "goals": {"protein": 200, "calories": 2800, "water": 12, "sleep": 9}}
    http.add("PUT", "/auth/goals", (200, {"user": updated}))

    result = auth.save_goals(Goals(protein=200, calories=2800, water=12, sleep=9))

    assert result.success
    assert logged_in.user.goals.protein == 200


def test_save_goals_unauthorized_clears_session(auth, logged_in, http):
    http.add("PUT", "/auth/goals", (401, {}))

    result = auth.save_goals(Goals())

    assert not result.success
    assert not logged_in.is_authenticated


def test_save_profile_requires_session(auth, http):
    result = auth.save_profile(BodyProfile())

    assert result.message == MSG_NOT_AUTHENTICATED
    assert http.sent == []


def test_refresh_profile(auth, logged_in, http):
    http.add("GET", "/auth/profile", (200, {**USER_PAYLOAD, "name": "Alexander"}))

    result = auth.refresh_profile()

    assert result.success
    assert logged_in.user.name == "Alexander"


def test_refresh_profile_failure_keeps_previous_profile(auth, logged_in, user, http):
    http.add("GET", "/auth/profile", (500, {"message": "Database unavailable"}))

    result = auth.refresh_profile()

    assert not result.success
    assert result.message == "Failed to load profile: Database unavailable"
    assert logged_in.user == user
    assert logged_in.token == TOKEN
