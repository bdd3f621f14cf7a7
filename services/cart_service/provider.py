from __future__ import annotations

from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, Optional

from .cart_store import CartStore

_current_store: ContextVar[Optional[CartStore]] = ContextVar("current_cart_store", default=None)


class CartProviderError(RuntimeError):
    pass


@asynccontextmanager
async def cart_provider(store: CartStore, restore: bool = True) -> AsyncIterator[CartStore]:
    # Startup
    if restore and not store.restored:
        await store.restore()
    token = _current_store.set(store)
    try:
        yield store
    finally:
        # Shutdown
        _current_store.reset(token)


def use_cart() -> CartStore:
    """
    Returns the store of the enclosing cart_provider.
    Calling it anywhere else is a wiring mistake, not a runtime condition.
    """
    store = _current_store.get()
    if store is None:
        raise CartProviderError("use_cart must be used within a cart_provider")
    return store
