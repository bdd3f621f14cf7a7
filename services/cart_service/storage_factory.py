from __future__ import annotations

from typing import Optional

from services.cart_service.storage import KeyValueStorage
from services.cart_service.store_memory import MemoryStorage
from services.cart_service.store_sqlite import SqliteStorage

from libs.cart_common.config import CART_DB_PATH, CART_STORAGE_BACKEND


def create_storage(backend: Optional[str] = None, db_path: str = CART_DB_PATH) -> KeyValueStorage:
    backend = (backend or CART_STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "sqlite":
        return SqliteStorage(db_path)
    raise ValueError(f"Unknown cart storage backend: {backend}")
