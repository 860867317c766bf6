"""
Quantity selector - the variant picker and +/- control of a product view.
"""

import logging
from datetime import datetime
from typing import Optional

from ..models.product import Product, ProductVariant
from .pricing import is_out_of_stock, max_addable_quantity, price_for_cart, quote_product

logger = logging.getLogger(__name__)


class QuantitySelector:
    """Tracks the selected variant and requested quantity before an add-to-cart."""

    def __init__(self, product: Product):
        self.product = product
        self.selected_variant: Optional[ProductVariant] = None
        self.quantity = 1

    @property
    def max_quantity(self) -> int:
        return max_addable_quantity(self.product, self.selected_variant)

    def select_variant(self, variant: ProductVariant) -> bool:
        """Select a variant and reset the quantity to 1. Out-of-stock variants are refused."""
        if variant.stock <= 0:
            return False
        self.selected_variant = variant
        self.quantity = 1
        return True

    def increment(self, amount: int = 1) -> int:
        self.quantity = min(self.quantity + amount, self.max_quantity)
        self.quantity = max(self.quantity, 1)
        return self.quantity

    def decrement(self, amount: int = 1) -> int:
        self.quantity = max(self.quantity - amount, 1)
        return self.quantity

    @property
    def can_add_to_cart(self) -> bool:
        if is_out_of_stock(self.product):
            return False
        if self.product.has_variants:
            return self.selected_variant is not None and self.selected_variant.stock > 0
        return True

    def quote(self, now: Optional[datetime] = None):
        return quote_product(self.product, self.selected_variant, now)

    def add_to(self, store, now: Optional[datetime] = None) -> bool:
        """Price the current selection and add it to the cart store."""
        if not self.can_add_to_cart:
            logger.info(f"[QUANTITY] {self.product.id} cannot be added (out of stock or no variant selected)")
            return False

        product, variant = price_for_cart(self.product, self.selected_variant, now)
        store.add_item(product, self.quantity, variant)
        return True
