"""
Тесты SessionStore: загрузка, установка, замена профиля и очистка
"""

import threading
import time

import pytest

from gymbro.core import FileTokenStorage, MemoryTokenStorage, SessionStore
from gymbro.exceptions import NetworkError, StorageError
from gymbro.models import Session, UserProfile

from conftest import TOKEN


def test_new_store_is_empty(session):
    assert session.token is None
    assert session.user is None
    assert not session.is_authenticated
    assert session.session == Session()


def test_set_session_persists_token(session, storage, user):
    session.set_session(TOKEN, user)

    assert session.token == TOKEN
    assert session.user == user
    assert storage.get() == TOKEN


def test_set_session_rejects_empty_token(session, user):
    with pytest.raises(ValueError):
        session.set_session("", user)

    assert not session.is_authenticated


def test_set_session_then_clear_leaves_no_session_after_restart(tmp_path, user):
    path = tmp_path / "session.json"
    store = SessionStore(FileTokenStorage(path))
    store.set_session(TOKEN, user)

    store.clear()

    assert not path.exists()
    fresh = SessionStore(FileTokenStorage(path))
    assert fresh.load() is True
    assert fresh.session == Session()


def test_clear_is_idempotent(logged_in, storage):
    logged_in.clear()
    once = (logged_in.session, storage.get())

    logged_in.clear()

    assert (logged_in.session, storage.get()) == once
    assert once == (Session(), None)


class BrokenRemoveStorage(MemoryTokenStorage):
    """Хранилище, которое не может удалить токен"""

    def remove(self) -> None:
        raise StorageError()


def test_clear_empties_memory_when_storage_remove_fails(user):
    store = SessionStore(BrokenRemoveStorage())
    store.set_session(TOKEN, user)

    store.clear()

    assert store.session == Session()
    assert not store.is_authenticated


def test_clear_on_empty_store_is_noop(session, storage):
    session.clear()

    assert session.session == Session()
    assert storage.get() is None


def test_load_without_token_does_not_fetch_profile(session):
    calls = []

    assert session.load(fetch_profile=lambda: calls.append(1)) is True

    assert calls == []
    assert session.ready.is_set()
    assert not session.is_authenticated


def test_load_restores_token_and_profile(user):
    store = SessionStore(MemoryTokenStorage(TOKEN))

    assert store.load(fetch_profile=lambda: user) is True

    assert store.token == TOKEN
    assert store.user == user
    assert store.ready.is_set()


def test_load_keeps_token_when_profile_fetch_fails():
    store = SessionStore(MemoryTokenStorage(TOKEN))

    def failing_fetch():
        raise NetworkError()

    assert store.load(fetch_profile=failing_fetch) is True

    assert store.token == TOKEN
    assert store.user is None
    assert store.ready.is_set()


def test_load_signals_ready_even_on_unexpected_error():
    store = SessionStore(MemoryTokenStorage(TOKEN))

    def broken_fetch():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        store.load(fetch_profile=broken_fetch)

    assert store.ready.is_set()


def test_update_profile_keeps_token_and_storage(logged_in, storage):
    new_user = UserProfile(name="Sam", email="sam@example.com")

    assert logged_in.update_profile(new_user) is True

    assert logged_in.user == new_user
    assert logged_in.token == TOKEN
    assert storage.get() == TOKEN


def test_update_profile_without_session_is_dropped(session, user):
    assert session.update_profile(user) is False
    assert session.user is None


def test_update_profile_from_replaced_session_is_dropped(logged_in, user):
    logged_in.set_session("another-token-000", user)
    stale = UserProfile(name="Stale")

    assert logged_in.update_profile(stale, token=TOKEN) is False

    assert logged_in.user == user
    assert logged_in.token == "another-token-000"


def test_concurrent_set_and_clear_never_mix_fields(session, storage, user):
    """set_session и clear заменяют сессию целиком: токен без профиля не появляется."""
    stop = threading.Event()
    violations = []

    def writer():
        while not stop.is_set():
            session.set_session(TOKEN, user)
            session.clear()

    def reader():
        while not stop.is_set():
            snapshot = session.session
            if snapshot.token is None and snapshot.user is not None:
                violations.append(snapshot)
            if snapshot.token is not None and snapshot.user is None:
                violations.append(snapshot)

    threads = [threading.Thread(target=writer) for _ in range(2)]
    threads.append(threading.Thread(target=reader))
    for thread in threads:
        thread.start()
    time.sleep(0.2)
    stop.set()
    for thread in threads:
        thread.join()

    assert violations == []
    session.clear()
    assert storage.get() is None
