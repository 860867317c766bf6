"""
Core module initialization.
"""

from .pricing import (
    resolve_price,
    quote_product,
    price_for_cart,
    offer_is_active,
    offer_time_left,
    effective_stock,
    is_out_of_stock,
    max_addable_quantity
)

from .cart_store import CartStore, CART_STORAGE_KEY

from .recommendations import select_recommendations, MAX_RECOMMENDATIONS

from .quantity import QuantitySelector

from .catalog import (
    visible_products,
    popular_products,
    filter_products,
    search_products,
    pick_products,
    category_name_lookup,
    subcategories_of,
    find_product,
    CatalogProvider,
    StaticCatalogProvider
)

from .checkout import build_order, find_stock_problems, CheckoutError

from .retry_utils import (
    retry_with_backoff,
    RetryConfig,
    CatalogResponseValidator,
    CatalogFetchError,
    TransientError,
    PermanentError
)

from .db import get_db_connection, init_database

__all__ = [
    # Pricing
    "resolve_price",
    "quote_product",
    "price_for_cart",
    "offer_is_active",
    "offer_time_left",
    "effective_stock",
    "is_out_of_stock",
    "max_addable_quantity",
    # Cart
    "CartStore",
    "CART_STORAGE_KEY",
    "QuantitySelector",
    # Recommendations
    "select_recommendations",
    "MAX_RECOMMENDATIONS",
    # Catalog
    "visible_products",
    "popular_products",
    "filter_products",
    "search_products",
    "pick_products",
    "category_name_lookup",
    "subcategories_of",
    "find_product",
    "CatalogProvider",
    "StaticCatalogProvider",
    # Checkout
    "build_order",
    "find_stock_problems",
    "CheckoutError",
    # Retry and validation
    "retry_with_backoff",
    "RetryConfig",
    "CatalogResponseValidator",
    "CatalogFetchError",
    "TransientError",
    "PermanentError",
    # Database
    "get_db_connection",
    "init_database",
]
