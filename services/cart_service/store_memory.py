from __future__ import annotations
from typing import Dict, Optional


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._records: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._records.get(key)

    async def set(self, key: str, value: str) -> None:
        self._records[key] = value

    def exists(self, key: str) -> bool:
        return key in self._records
