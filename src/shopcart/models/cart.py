"""
Shopping cart and order models.
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from .product import Product, ProductVariant


def line_key(product_id, variant: Optional[ProductVariant] = None) -> str:
    """Identity of a cart line: product id, plus ':' and variant id when a variant is selected."""
    if variant is not None:
        return f"{product_id}:{variant.id}"
    return str(product_id)


class CartLineItem(Product):
    """Snapshot of a product taken when it was added to the cart."""
    quantity: int = 1
    selected_variant: Optional[ProductVariant] = None

    @property
    def key(self) -> str:
        return line_key(self.id, self.selected_variant)

    @property
    def unit_price(self) -> float:
        if self.selected_variant is not None:
            return self.selected_variant.price
        return self.price

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class User(BaseModel):
    """Customer account as stored by the auth collaborator."""
    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    role: Optional[Literal["admin", "user"]] = None


class Order(BaseModel):
    """Order placed from a cart."""
    id: str
    user_id: str
    user_name: str
    user_email: str
    items: List[CartLineItem] = Field(default_factory=list)
    total: float = Field(ge=0)
    status: Literal["Pending", "Shipped", "Delivered", "Cancelled"] = "Pending"
    date: str
