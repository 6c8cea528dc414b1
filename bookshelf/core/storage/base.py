"""Base key-value storage interface for persisted credentials."""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Raised when a storage backend cannot be read or written."""


class KeyValueStorage(ABC):
    """Abstract base class for credential storage backends."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value under the key, replacing any previous one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the key. Deleting a missing key is a no-op."""
        pass

    def close(self) -> None:
        """Release backend resources. Backends without any keep this no-op."""
        pass
