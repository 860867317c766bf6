"""
Models package - data validation schemas for the storefront cart engine.
"""

# Product models
from .product import Tag, ProductVariant, Offer, Product

# Catalog models
from .catalog import SubCategory, Category, RecommendationSettings, PriceQuote, CatalogSnapshot

# Cart models
from .cart import line_key, CartLineItem, User, Order

__all__ = [
    # Product
    "Tag",
    "ProductVariant",
    "Offer",
    "Product",
    # Catalog
    "SubCategory",
    "Category",
    "RecommendationSettings",
    "PriceQuote",
    "CatalogSnapshot",
    # Cart
    "line_key",
    "CartLineItem",
    "User",
    "Order",
]
