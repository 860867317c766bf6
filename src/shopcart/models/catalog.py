"""
Catalog-level models: categories, recommendation settings, price quotes, snapshots.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

from .product import Product, _truthy_keys


class SubCategory(BaseModel):
    id: str = ""
    name: str


class Category(BaseModel):
    """Category as authored in the admin back-office."""
    id: str
    name: str
    image: str = ""
    subcategories: List[SubCategory] = Field(default_factory=list)

    @field_validator("subcategories", mode="before")
    @classmethod
    def flatten_keyed(cls, v):
        # stored as {key: {...}} in the realtime database
        if v is None:
            return []
        if isinstance(v, dict):
            return list(v.values())
        return v


class RecommendationSettings(BaseModel):
    """Global fallback used when a product has no recommendation overrides."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    mode: Literal["manual", "category", "random"] = "manual"
    category_ids: List[str] = Field(default_factory=list)

    @field_validator("category_ids", mode="before")
    @classmethod
    def normalize_ids(cls, v):
        return _truthy_keys(v)


class PriceQuote(BaseModel):
    """Price to charge plus the struck-through reference price."""
    price: float
    old_price: Optional[float] = None


class CatalogSnapshot(BaseModel):
    """Complete catalog as seen at one point in time."""
    products: List[Product] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)
    recommendations: RecommendationSettings = Field(default_factory=RecommendationSettings)
