"""Key-value storage backends — the local-storage stand-in.

Contract: get(key) -> str | None, set(key, value) -> None.
Backends raise StorageError on failure; callers decide whether to swallow it.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

import redis

from config.settings import Settings
from src.cs_common.enums import StorageBackend
from src.cs_common.errors import StorageError
from src.cs_common.redis_client import get_redis

logger = logging.getLogger("cs.kv")


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore:
    """All keys in one JSON object file, rewritten on every set.

    A missing file reads as empty. A file that is not a JSON object raises
    StorageError on get and is overwritten on the next set.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(f"cannot read {self._path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise StorageError(f"{self._path} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise StorageError(f"{self._path} does not hold a JSON object")
        return data

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError:
            logger.warning("Discarding unreadable storage file %s", self._path)
            data = {}
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self._path)
        except OSError as exc:
            raise StorageError(f"cannot write {self._path}: {exc}") from exc


class RedisKeyValueStore:
    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)
        except redis.RedisError as exc:
            raise StorageError(f"redis GET {key}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except redis.RedisError as exc:
            raise StorageError(f"redis SET {key}: {exc}") from exc


def build_kv_store(cfg: Settings) -> KeyValueStore:
    """Pick the backend named by STORAGE_BACKEND."""
    try:
        backend = StorageBackend(cfg.STORAGE_BACKEND.lower())
    except ValueError as exc:
        raise ValueError(f"Unknown STORAGE_BACKEND: {cfg.STORAGE_BACKEND}") from exc

    if backend is StorageBackend.MEMORY:
        return MemoryKeyValueStore()
    if backend is StorageBackend.REDIS:
        return RedisKeyValueStore(get_redis(cfg.REDIS_URL))
    return JsonFileKeyValueStore(cfg.STORAGE_PATH)
