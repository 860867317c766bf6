"""
Checkout helpers - turn a cart into an order snapshot.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from ..models.cart import CartLineItem, Order, User
from ..models.product import Product
from .catalog import find_product

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    """Raised when a cart cannot become an order."""
    pass


def find_stock_problems(items: Iterable[CartLineItem], catalog: Iterable[Product]) -> List[Dict]:
    """
    Compare cart lines with current catalog stock.

    Returns one entry per line whose quantity exceeds what is available now
    (the captured variant's stock, else the product's own). Products missing
    from the catalog count as zero stock.
    """
    catalog = list(catalog)
    problems = []

    for item in items:
        product = find_product(catalog, item.id)
        available = 0
        if product is not None:
            if item.selected_variant is not None:
                variant = product.get_variant(item.selected_variant.id)
                available = variant.stock if variant else 0
            else:
                available = product.stock

        if item.quantity > available:
            problems.append({"key": item.key, "requested": item.quantity, "available": available})

    if problems:
        logger.warning(f"[CHECKOUT] {len(problems)} line(s) exceed available stock")
    return problems


def build_order(store, user: User, now: Optional[datetime] = None) -> Order:
    """Snapshot the cart as a Pending order. The cart itself is left untouched."""
    items = store.items
    if not items:
        raise CheckoutError("Cannot place an order for an empty cart")

    placed_at = now or datetime.now(timezone.utc)
    order = Order(
        id=str(uuid.uuid4()),
        user_id=user.id,
        user_name=user.name,
        user_email=user.email,
        items=[item.model_copy(deep=True) for item in items],
        total=store.total,
        status="Pending",
        date=placed_at.isoformat(),
    )
    logger.info(f"[CHECKOUT] Built order {order.id} for {user.id}: {len(items)} lines, total {order.total:.2f}")
    return order
