"""
Local Key-Value Storage - durable JSON values keyed by namespaced strings

Backings:
- InMemoryKeyValueStore: process-lifetime dict, used by tests
- JsonFileKeyValueStore: one JSON document on disk, replaced atomically
- RedisKeyValueStore: shared Redis database, multi-key writes in MULTI/EXEC

An absent key is a valid "uninitialized" state: get() falls back to the
caller's default. set_many() writes several keys as one unit so readers never
observe half of a related update.

Usage:
    store = JsonFileKeyValueStore(Path("~/.collegemate/storage.json"))
    keys = StorageKeys("collegemate")

    accounts = store.get(keys.accounts, [])
    store.set_many({keys.poll_votes: counts, keys.poll_voted_today: True})
"""

import copy
import json
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import redis

from collegemate.core.config import Settings, STORAGE_BACKENDS
from collegemate.core.exceptions import ConfigurationError, CorruptStoreError, StorageError
from collegemate.core.logging_config import logger


@dataclass(frozen=True)
class StorageKeys:
    """Key names for every durable value, disjoint per component"""
    namespace: str = "collegemate"

    @property
    def accounts(self) -> str:
        return f"{self.namespace}_users"

    @property
    def session(self) -> str:
        return f"{self.namespace}_session"

    @property
    def poll_votes(self) -> str:
        return f"{self.namespace}_bunk_votes"

    @property
    def poll_voted_today(self) -> str:
        return f"{self.namespace}_bunk_voted_today"

    @property
    def poll_date(self) -> str:
        return f"{self.namespace}_bunk_poll_date"

    @property
    def uploads(self) -> str:
        return f"{self.namespace}_uploads"


_MISSING = object()


class KeyValueStore(ABC):
    """Mapping from string keys to JSON-serializable values"""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or default when the key is absent"""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Persist a value"""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key; removing an absent key is a no-op"""

    @abstractmethod
    def set_many(self, values: Dict[str, Any]) -> None:
        """Persist several keys as a single unit"""

    def contains(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Values are deep-copied in and out, like a serializing store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def set_many(self, values: Dict[str, Any]) -> None:
        self._data.update(copy.deepcopy(values))

    def keys(self) -> Iterable[str]:
        return list(self._data.keys())


class JsonFileKeyValueStore(KeyValueStore):
    """
    All keys live in one JSON object on disk.

    Every write replaces the whole file through a temp file + os.replace, so a
    crash mid-write leaves either the old or the new document, never a mix.
    The file is re-read on every access, so values written by an earlier
    process are always visible.
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Could not parse store file {self.path}: {e}")
            raise CorruptStoreError(str(self.path)) from e
        except OSError as e:
            raise StorageError(f"Could not read store file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise CorruptStoreError(str(self.path), "Store file must hold a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        directory = self.path.parent
        tmp = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", delete=False, dir=directory, encoding='utf-8', suffix=".tmp"
            ) as tf:
                tmp = tf.name
                json.dump(data, tf, indent=2, ensure_ascii=False)
                tf.flush()
                os.fsync(tf.fileno())
            os.replace(tmp, self.path)
        except BaseException as e:
            if tmp is not None and os.path.exists(tmp):
                os.unlink(tmp)
            if isinstance(e, OSError):
                raise StorageError(f"Could not write store file {self.path}: {e}") from e
            if isinstance(e, (TypeError, ValueError)):
                raise StorageError(f"Value is not JSON serializable: {e}") from e
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._write(data)

    def set_many(self, values: Dict[str, Any]) -> None:
        data = self._load()
        data.update(values)
        self._write(data)


class RedisKeyValueStore(KeyValueStore):
    """Redis-backed store, values serialized as JSON strings"""

    def __init__(self, client: redis.Redis):
        self.redis = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        return cls(redis.Redis.from_url(url, encoding="utf-8", decode_responses=True))

    def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = self.redis.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis GET error: {e}")
            raise StorageError(f"Redis GET failed: {e}", key=key) from e

        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Value is not valid JSON: {e}", key=key) from e

    def set(self, key: str, value: Any) -> None:
        try:
            self.redis.set(key, json.dumps(value, ensure_ascii=False))
        except redis.RedisError as e:
            logger.error(f"Redis SET error: {e}")
            raise StorageError(f"Redis SET failed: {e}", key=key) from e

    def delete(self, key: str) -> None:
        try:
            self.redis.delete(key)
        except redis.RedisError as e:
            logger.error(f"Redis DELETE error: {e}")
            raise StorageError(f"Redis DELETE failed: {e}", key=key) from e

    def set_many(self, values: Dict[str, Any]) -> None:
        try:
            pipe = self.redis.pipeline(transaction=True)
            for key, value in values.items():
                pipe.set(key, json.dumps(value, ensure_ascii=False))
            pipe.execute()
        except redis.RedisError as e:
            logger.error(f"Redis MULTI error: {e}")
            raise StorageError(f"Redis transaction failed: {e}") from e


def create_store(settings: Settings) -> KeyValueStore:
    """Build the configured storage backing"""
    backend = settings.STORAGE_BACKEND
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "file":
        return JsonFileKeyValueStore(settings.storage_path)
    if backend == "redis":
        return RedisKeyValueStore.from_url(settings.REDIS_URL)
    raise ConfigurationError("STORAGE_BACKEND", backend, STORAGE_BACKENDS)
