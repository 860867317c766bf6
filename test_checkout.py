"""
Order building and stock checks.
"""

from datetime import datetime, timezone

import pytest

from shopcart.core.cart_store import CartStore
from shopcart.core.checkout import CheckoutError, build_order, find_stock_problems
from shopcart.models import User

USER = User(id="u1", name="Asha", email="asha@example.com")


def test_build_order_snapshots_cart(storage, serum, perfume):
    cart = CartStore(storage)
    cart.add_item(serum, 2)
    cart.add_item(perfume, 1, perfume.get_variant("v200"))

    order = build_order(cart, USER, now=datetime(2025, 10, 20, tzinfo=timezone.utc))

    assert order.status == "Pending"
    assert order.total == 220
    assert order.user_email == "asha@example.com"
    assert [i.key for i in order.items] == ["p1", "p2:v200"]
    assert order.date.startswith("2025-10-20")
    # the cart is left as is
    assert cart.count == 3


def test_empty_cart_cannot_be_ordered(storage):
    with pytest.raises(CheckoutError):
        build_order(CartStore(storage), USER)


def test_stock_problems(storage, serum, perfume):
    cart = CartStore(storage)
    cart.add_item(serum, 12)
    cart.add_item(perfume, 2, perfume.get_variant("v50"))
    cart.add_item(perfume, 6, perfume.get_variant("v200"))

    problems = find_stock_problems(cart.items, [serum, perfume])

    assert problems == [
        {"key": "p1", "requested": 12, "available": 10},
        {"key": "p2:v200", "requested": 6, "available": 5},
    ]
    assert find_stock_problems(cart.items, [])[0]["available"] == 0
