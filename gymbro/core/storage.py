"""Durable хранилище токена авторизации."""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from gymbro.constants import TOKEN_STORAGE_KEY
from gymbro.exceptions import StorageError

logger = logging.getLogger(__name__)


class TokenStorage(ABC):
    """Key-value хранилище с единственной записью: токеном сессии."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Прочитать сохранённый токен или None"""

    @abstractmethod
    def save(self, token: str) -> None:
        """Сохранить токен (блокирует до подтверждения записи)"""

    @abstractmethod
    def remove(self) -> None:
        """Удалить токен. Удаление отсутствующего токена ничего не делает"""


class MemoryTokenStorage(TokenStorage):
    """Хранилище в памяти процесса (для тестов и временных сессий)."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def remove(self) -> None:
        self._token = None


class FileTokenStorage(TokenStorage):
    """
    Хранилище токена в JSON файле.

    Файл содержит ровно одну запись {key: token}. Запись идёт через
    временный файл и атомарное переименование, чтобы оборванная запись
    не оставила битый файл.
    """

    def __init__(
        self,
        path: Union[str, Path],
        key: str = TOKEN_STORAGE_KEY,
    ) -> None:
        """
        Args:
            path: Путь к файлу (поддерживается ~)
            key: Имя записи с токеном
        """
        self.path = Path(path).expanduser()
        self.key = key

    def get(self) -> Optional[str]:
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"[GET_TOKEN] Unreadable token file {self.path}: {e}")
            return None

        token = data.get(self.key) if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            return None

        logger.info(f"[GET_TOKEN] Loaded token from {self.path}, length: {len(token)}")
        return token

    def save(self, token: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump({self.key: token}, f)
                    f.flush()
                    os.fsync(f.fileno())
                os.chmod(tmp_path, 0o600)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"[SAVE_TOKEN] Failed to save token to {self.path}: {e}", exc_info=True)
            raise StorageError(details={"path": str(self.path)}) from e

        logger.info(f"[SAVE_TOKEN] Token saved to {self.path}, length: {len(token)}")

    def remove(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error(f"[REMOVE_TOKEN] Failed to remove {self.path}: {e}", exc_info=True)
            raise StorageError(details={"path": str(self.path)}) from e

        logger.info(f"[REMOVE_TOKEN] Token removed from {self.path}")
