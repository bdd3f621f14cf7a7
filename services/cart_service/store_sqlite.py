from __future__ import annotations

import asyncio
import os
import sqlite3
from typing import Optional

from libs.cart_common.logger import get_logger

from .storage import StorageReadError, StorageWriteError

logger = get_logger(__name__)


class SqliteStorage:
    """
    Key-value records in a single SQLite table on local disk.
    Every call opens its own connection and runs in a worker thread.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._ready = False

    def _connect(self) -> sqlite3.Connection:
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def _ensure_db(self, con: sqlite3.Connection) -> None:
        if self._ready:
            return
        con.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """
        )
        con.commit()
        self._ready = True

    def _get_sync(self, key: str) -> Optional[str]:
        con = self._connect()
        try:
            self._ensure_db(con)
            row = con.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        finally:
            con.close()
        return row[0] if row else None

    def _set_sync(self, key: str, value: str) -> None:
        con = self._connect()
        try:
            self._ensure_db(con)
            con.execute(
                """
                INSERT INTO kv (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
                (key, value),
            )
            con.commit()
        finally:
            con.close()

    async def get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._get_sync, key)
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to read %s from %s: %s", key, self.db_path, e)
            raise StorageReadError(str(e)) from e

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._set_sync, key, value)
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to write %s to %s: %s", key, self.db_path, e)
            raise StorageWriteError(str(e)) from e
