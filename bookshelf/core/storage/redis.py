"""Redis-backed credential storage."""

from typing import Optional

import redis
import structlog

from bookshelf.core.storage.base import KeyValueStorage, StorageError

logger = structlog.get_logger(__name__)


class RedisStorage(KeyValueStorage):
    """Stores credentials in Redis under a key namespace."""

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        namespace: str = "bookshelf:",
        client: Optional[redis.Redis] = None,
    ) -> None:
        self._namespace = namespace
        self._client = client or redis.Redis.from_url(url, encoding="utf-8", decode_responses=True)

    def _key(self, key: str) -> str:
        return f"{self._namespace}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self._client.get(self._key(key))
        except redis.RedisError as e:
            logger.warning("Redis get failed", key=key, error=str(e))
            raise StorageError(f"Redis get failed: {e}") from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except redis.RedisError as e:
            logger.warning("Redis set failed", key=key, error=str(e))
            raise StorageError(f"Redis set failed: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as e:
            logger.warning("Redis delete failed", key=key, error=str(e))
            raise StorageError(f"Redis delete failed: {e}") from e

    def close(self) -> None:
        self._client.close()
