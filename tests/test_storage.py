"""
Тесты durable хранилища токена
"""

import json

import pytest

from gymbro.core import FileTokenStorage, MemoryTokenStorage
from gymbro.exceptions import StorageError


@pytest.fixture
def token_file(tmp_path):
    return tmp_path / "nested" / "session.json"


def test_file_storage_roundtrip(token_file):
    storage = FileTokenStorage(token_file)

    assert storage.get() is None

    storage.save("secret-token")

    assert storage.get() == "secret-token"
    # В файле ровно одна запись с токеном
    assert json.loads(token_file.read_text()) == {"userToken": "secret-token"}


def test_file_storage_survives_new_instance(token_file):
    FileTokenStorage(token_file).save("persisted")

    assert FileTokenStorage(token_file).get() == "persisted"


def test_file_storage_custom_key(token_file):
    storage = FileTokenStorage(token_file, key="auth")
    storage.save("t")

    assert json.loads(token_file.read_text()) == {"auth": "t"}


def test_file_storage_remove_is_idempotent(token_file):
    storage = FileTokenStorage(token_file)
    storage.save("secret-token")

    storage.remove()
    storage.remove()

    assert not token_file.exists()
    assert storage.get() is None


def test_file_storage_corrupt_file_reads_as_empty(token_file):
    token_file.parent.mkdir(parents=True)
    token_file.write_text("{not json")

    assert FileTokenStorage(token_file).get() is None


def test_file_storage_ignores_non_string_token(token_file):
    token_file.parent.mkdir(parents=True)
    token_file.write_text(json.dumps({"userToken": 42}))

    assert FileTokenStorage(token_file).get() is None


def test_file_storage_save_failure_raises_storage_error(tmp_path):
    # Родитель пути является файлом, каталог создать нельзя
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    storage = FileTokenStorage(blocker / "session.json")

    with pytest.raises(StorageError):
        storage.save("token")


def test_file_storage_leaves_no_temp_files(token_file):
    storage = FileTokenStorage(token_file)
    storage.save("one")
    storage.save("two")

    assert [p.name for p in token_file.parent.iterdir()] == ["session.json"]


def test_memory_storage():
    storage = MemoryTokenStorage()
    storage.save("abc")
    assert storage.get() == "abc"

    storage.remove()
    storage.remove()
    assert storage.get() is None
