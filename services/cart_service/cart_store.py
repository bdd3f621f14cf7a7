from __future__ import annotations

import asyncio
from typing import Iterator, Optional, Tuple

from libs.cart_common.config import CART_STORAGE_KEY, CART_WRITE_BACKOFF_MS, CART_WRITE_RETRIES
from libs.cart_common.logger import get_logger
from libs.cart_common.models import LineItem, NewLineItem
from libs.cart_common.serdes_json import deserialize_cart, serialize_cart

from .storage import KeyValueStorage, StorageWriteError

logger = get_logger(__name__)

Items = Tuple[LineItem, ...]


class CartPersistError(StorageWriteError):
    """Raised when the cart could not be written to storage after retries."""


def add_item(items: Items, item: NewLineItem) -> Items:
    if any(it.id == item.id for it in items):
        return tuple(
            it.with_quantity(it.quantity + 1) if it.id == item.id else it
            for it in items
        )
    return items + (LineItem.from_new(item),)


def increment_item(items: Items, item_id: str) -> Tuple[Items, bool]:
    matched = False
    updated = []
    for it in items:
        if it.id == item_id:
            matched = True
            it = it.with_quantity(it.quantity + 1)
        updated.append(it)
    return tuple(updated), matched


def decrement_item(items: Items, item_id: str) -> Tuple[Items, bool]:
    matched = False
    updated = []
    for it in items:
        if it.id == item_id:
            matched = True
            if it.quantity <= 1:
                continue
            it = it.with_quantity(it.quantity - 1)
        updated.append(it)
    return tuple(updated), matched


class CartStore:
    """
    Ordered cart of LineItems mirrored to one record in key-value storage.

    Each mutation replaces the in-memory items before awaiting the write, so
    readers see the new cart immediately. Writes are serialized and always
    store the cart as it is when the write starts.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = CART_STORAGE_KEY,
        max_retries: int = CART_WRITE_RETRIES,
        retry_backoff_ms: int = CART_WRITE_BACKOFF_MS,
    ) -> None:
        self.storage = storage
        self.key = key
        self.max_retries = max(1, max_retries)
        self.retry_backoff_ms = retry_backoff_ms
        self.restored = False
        self._items: Items = ()
        self._write_lock = asyncio.Lock()

    @property
    def items(self) -> Items:
        return self._items

    # Name used by UI code
    products = items

    def get(self, item_id: str) -> Optional[LineItem]:
        for it in self._items:
            if it.id == item_id:
                return it
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self._items)

    def __contains__(self, item_id: object) -> bool:
        return any(it.id == item_id for it in self._items)

    async def restore(self) -> Items:
        """
        Load the stored record into memory. A missing record leaves the cart
        as it is; a malformed one is logged and ignored until the next write
        replaces it. Storage read errors propagate.
        """
        raw = await self.storage.get(self.key)
        if raw is None:
            logger.info("No cart record under %s; starting with %d item(s).", self.key, len(self._items))
        else:
            try:
                self._items = deserialize_cart(raw)
                logger.info("Restored %d cart item(s) from %s.", len(self._items), self.key)
            except ValueError as e:
                logger.warning("Ignoring malformed cart record under %s: %s", self.key, e)
        self.restored = True
        return self._items

    async def add_to_cart(self, item: NewLineItem) -> Items:
        self._items = add_item(self._items, item)
        await self._persist()
        return self._items

    async def increment(self, item_id: str) -> Items:
        updated, matched = increment_item(self._items, item_id)
        if not matched:
            logger.debug("increment: no item %s in cart; nothing to do.", item_id)
            return self._items
        self._items = updated
        await self._persist()
        return self._items

    async def decrement(self, item_id: str) -> Items:
        updated, matched = decrement_item(self._items, item_id)
        if not matched:
            logger.debug("decrement: no item %s in cart; nothing to do.", item_id)
            return self._items
        self._items = updated
        await self._persist()
        return self._items

    async def _persist(self) -> None:
        async with self._write_lock:
            payload = serialize_cart(self._items)
            last_err: Optional[Exception] = None
            for attempt in range(1, self.max_retries + 1):
                try:
                    await self.storage.set(self.key, payload)
                    return
                except Exception as e:
                    last_err = e
                    logger.warning(
                        "Cart write to %s failed (attempt %d/%d): %s",
                        self.key, attempt, self.max_retries, e,
                    )
                    if attempt < self.max_retries:
                        await asyncio.sleep(self.retry_backoff_ms * attempt / 1000.0)

        logger.error("Giving up writing cart to %s; in-memory cart is ahead of storage.", self.key)
        raise CartPersistError(f"Failed to persist cart after retries: {last_err}") from last_err
