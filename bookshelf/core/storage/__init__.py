"""Credential storage backends."""

from bookshelf.config import Settings
from bookshelf.core.storage.base import KeyValueStorage, StorageError
from bookshelf.core.storage.file import FileStorage
from bookshelf.core.storage.memory import MemoryStorage
from bookshelf.core.storage.redis import RedisStorage


def create_storage(settings: Settings) -> KeyValueStorage:
    """Build the storage backend named by ``settings.credential_storage``."""
    backend = settings.credential_storage
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return FileStorage(settings.credential_file)
    if backend == "redis":
        return RedisStorage(settings.redis_url)
    raise ValueError(f"Unknown credential storage '{backend}'. Available: memory, file, redis")


__all__ = [
    "KeyValueStorage",
    "StorageError",
    "MemoryStorage",
    "FileStorage",
    "RedisStorage",
    "create_storage",
]
