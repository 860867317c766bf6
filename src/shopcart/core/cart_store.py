"""
Cart store - the session's authoritative cart, mirrored to a durable slot.
"""

import json
import logging
from typing import List, Optional

from ..models.cart import CartLineItem, line_key
from ..models.product import Product, ProductVariant
from ..utils import storage_utils

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "aurashka_cart"


class CartStore:
    """
    Ordered line items for one client session.

    Every mutation writes the full cart back to the storage slot. Write
    failures never raise; they are logged and reported through last_save_ok.
    Not thread-safe: one store per session.
    """

    def __init__(self, storage: Optional["storage_utils.KeyValueStorage"] = None, storage_key: str = CART_STORAGE_KEY):
        self.storage = storage if storage is not None else storage_utils.SQLiteStorage()
        self.storage_key = storage_key
        self.last_save_ok = True
        self._items: List[CartLineItem] = self._load()

    # persistence

    def _load(self) -> List[CartLineItem]:
        try:
            raw = self.storage.read(self.storage_key)
        except Exception as e:
            logger.warning(f"[CART] Could not read slot {self.storage_key}: {e}")
            return []

        if not raw:
            return []

        try:
            items = self.restore(raw)
        except Exception as e:
            logger.warning(f"[CART] Discarding unreadable cart in {self.storage_key}: {e}")
            return []

        logger.info(f"[CART] Restored {len(items)} line items from {self.storage_key}")
        return items

    def _save(self):
        try:
            ok = self.storage.write(self.storage_key, self.serialize())
        except Exception as e:
            logger.warning(f"[CART] Cart write failed, changes may not survive a reload: {e}")
            ok = False

        if not ok:
            logger.warning(f"[CART] Cart not persisted to {self.storage_key}")
        self.last_save_ok = bool(ok)

    def serialize(self) -> str:
        """JSON list of line items, camelCase keys."""
        return json.dumps([item.model_dump(by_alias=True, exclude_none=True) for item in self._items])

    @staticmethod
    def restore(payload: str) -> List[CartLineItem]:
        """Parse a serialized cart. Raises on malformed input."""
        data = json.loads(payload)
        if not isinstance(data, list):
            raise ValueError(f"expected a list of line items, got {type(data).__name__}")

        items: List[CartLineItem] = []
        for record in data:
            item = CartLineItem.model_validate(record)
            # keep the one-line-per-key invariant even for hand-edited slots
            existing = next((i for i in items if i.key == item.key), None)
            if existing is not None:
                existing.quantity += item.quantity
            else:
                items.append(item)
        return items

    # queries

    def _find(self, key: str) -> Optional[CartLineItem]:
        return next((item for item in self._items if item.key == key), None)

    @property
    def items(self) -> List[CartLineItem]:
        """Copies of the line items; change the cart through the store's methods."""
        return [item.model_copy(deep=True) for item in self._items]

    def get_item(self, key: str) -> Optional[CartLineItem]:
        item = self._find(key)
        return item.model_copy(deep=True) if item is not None else None

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total(self) -> float:
        return sum(item.unit_price * item.quantity for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    # mutations

    def add_item(self, product: Product, quantity: int = 1, variant: Optional[ProductVariant] = None):
        """Merge into the existing line for this product/variant, or append a snapshot."""
        key = line_key(product.id, variant)
        existing = self._find(key)

        if existing is not None:
            existing.quantity += quantity
            logger.info(f"[CART] {key}: quantity -> {existing.quantity}")
        else:
            snapshot = product.model_dump(exclude={"quantity", "selected_variant"})
            snapshot["price"] = variant.price if variant is not None else product.price
            item = CartLineItem(
                **snapshot,
                quantity=quantity,
                selected_variant=variant.model_copy() if variant is not None else None,
            )
            self._items.append(item)
            logger.info(f"[CART] Added {key} x{quantity} at {item.unit_price:.2f}")

        self._save()

    def remove_item(self, key: str):
        remaining = [item for item in self._items if item.key != key]
        if len(remaining) == len(self._items):
            logger.debug(f"[CART] remove_item: no line {key}")
            return

        self._items = remaining
        logger.info(f"[CART] Removed {key}")
        self._save()

    def update_quantity(self, key: str, quantity: int):
        """Absolute set; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(key)
            return

        item = self._find(key)
        if item is None:
            logger.debug(f"[CART] update_quantity: no line {key}")
            return

        item.quantity = quantity
        logger.info(f"[CART] {key}: quantity -> {quantity}")
        self._save()

    def clear(self):
        self._items = []
        logger.info("[CART] Cleared")
        self._save()

    clear_cart = clear
