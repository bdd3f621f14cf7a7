from __future__ import annotations

import json
from typing import Iterable, List, Tuple

from pydantic import TypeAdapter, ValidationError

from .models import LineItem

_CART_ADAPTER = TypeAdapter(List[LineItem])


def serialize_cart(items: Iterable[LineItem]) -> str:
    """
    Converts the cart to the JSON array stored as the durable record.
    """
    return _CART_ADAPTER.dump_json(list(items)).decode("utf-8")


def deserialize_cart(raw: str | bytes) -> Tuple[LineItem, ...]:
    """
    Converts a stored record back into an ordered tuple of LineItems.
    Rejects anything that is not an array of valid items with unique ids.
    """
    try:
        data = json.loads(raw)
    except Exception as e:
        raise ValueError(f"Invalid JSON cart payload: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Expected JSON array, got: {type(data).__name__}")

    try:
        items = _CART_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ValueError(f"Cart validation failed: {e}") from e

    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate item id in cart payload: {item.id}")
        seen.add(item.id)

    return tuple(items)
