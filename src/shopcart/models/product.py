"""
Product, variant and offer models for the storefront catalog.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional


class Tag(BaseModel):
    """Label shown on a product card."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    text: str
    color: str = ""


class ProductVariant(BaseModel):
    """Purchasable sub-option of a product (e.g. 50ml, Red)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    name: str
    price: float = Field(ge=0)
    old_price: Optional[float] = None
    stock: int = Field(default=0, ge=0)
    image: Optional[str] = None


class Offer(BaseModel):
    """Promotional override attached to a product."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    enabled: bool = False
    title: str = ""
    discount_percentage: Optional[float] = None
    discount_amount: Optional[float] = None
    end_date: Optional[str] = None  # ISO 8601
    highlight_color: Optional[str] = None
    text_color: Optional[str] = None


def _truthy_keys(v):
    # Firebase stores id sets as {id: true}
    if v is None:
        return []
    if isinstance(v, dict):
        return [str(k) for k, flag in v.items() if flag]
    return [str(i) for i in v]


class Product(BaseModel):
    """Catalog entry, read-only from the cart's point of view."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    price: float = Field(ge=0)
    old_price: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    description: str = ""
    category: str = ""
    subcategory: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    is_visible: Optional[bool] = None
    is_popular: bool = False
    variants: Optional[Dict[str, ProductVariant]] = None
    tags: Optional[Dict[str, Tag]] = None
    offer: Optional[Offer] = None
    related_product_ids: List[str] = Field(default_factory=list)
    related_category_ids: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    @field_validator("variants", "tags")
    @classmethod
    def fill_keyed_ids(cls, v):
        if not v:
            return v
        return {key: item.model_copy(update={"id": key}) for key, item in v.items()}

    @field_validator("related_product_ids", "related_category_ids", mode="before")
    @classmethod
    def normalize_id_sets(cls, v):
        return _truthy_keys(v)

    @property
    def variant_list(self) -> List[ProductVariant]:
        return list(self.variants.values()) if self.variants else []

    @property
    def has_variants(self) -> bool:
        return bool(self.variants)

    def get_variant(self, variant_id: str) -> Optional[ProductVariant]:
        if not self.variants:
            return None
        return self.variants.get(variant_id)
