"""In-memory credential storage."""

from typing import Optional

from bookshelf.core.storage.base import KeyValueStorage


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage. Lives as long as the process; used in tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data
