from __future__ import annotations

from typing import Optional, Protocol


class StorageError(RuntimeError):
    """Base error for key-value storage failures."""


class StorageReadError(StorageError):
    """Raised when a record could not be read from storage."""


class StorageWriteError(StorageError):
    """Raised when a record could not be written to storage."""


class KeyValueStorage(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...
