import json

import pytest

from libs.cart_common.models import LineItem
from libs.cart_common.serdes_json import deserialize_cart, serialize_cart


def make_item(item_id="1", quantity=1, price=50.0):
    return LineItem(
        id=item_id,
        title=f"Product {item_id}",
        image_url=f"https://img.example/{item_id}.png",
        price=price,
        quantity=quantity,
    )


def test_round_trip_keeps_fields_and_order():
    items = (make_item("b", 2, 10.5), make_item("a", 1, 99.0), make_item("c", 7, 0.0))

    restored = deserialize_cart(serialize_cart(items))

    assert restored == items
    assert [it.id for it in restored] == ["b", "a", "c"]


def test_serialized_record_is_plain_array_of_items():
    data = json.loads(serialize_cart([make_item("1", 3)]))

    assert data == [
        {
            "id": "1",
            "title": "Product 1",
            "image_url": "https://img.example/1.png",
            "price": 50.0,
            "quantity": 3,
        }
    ]


def test_empty_cart_serializes_to_empty_array():
    assert serialize_cart([]) == "[]"
    assert deserialize_cart("[]") == ()


def test_accepts_integer_price_and_bytes():
    raw = b'[{"id": "1", "title": "Shirt", "image_url": "u", "price": 50, "quantity": 1}]'

    items = deserialize_cart(raw)

    assert items[0].price == 50.0


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"id": "1"}',
        '[{"id": "1", "title": "Shirt"}]',
        '[{"id": "1", "title": "Shirt", "image_url": "u", "price": 5, "quantity": 0}]',
        '[{"id": "1", "title": "A", "image_url": "u", "price": 5, "quantity": 1},'
        ' {"id": "1", "title": "B", "image_url": "u", "price": 5, "quantity": 2}]',
    ],
)
def test_malformed_payload_raises_value_error(raw):
    with pytest.raises(ValueError):
        deserialize_cart(raw)


def test_round_trip_keeps_extreme_finite_prices():
    items = (make_item("1", 1, 1e308), make_item("2", 1, -0.0), make_item("3", 1, 0.1))

    assert deserialize_cart(serialize_cart(items)) == items


@pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN", "null"])
def test_non_finite_price_in_record_is_rejected(literal):
    raw = '[{"id": "1", "title": "Shirt", "image_url": "u", "price": %s, "quantity": 1}]' % literal

    with pytest.raises(ValueError):
        deserialize_cart(raw)
