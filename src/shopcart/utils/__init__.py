"""
Utils module initialization.
"""

from .storage_utils import save_slot, load_slot, clear_slot, KeyValueStorage, SQLiteStorage, InMemoryStorage
from .firebase_utils import (
    fetch_node,
    parse_products,
    parse_categories,
    parse_recommendation_settings,
    FirebaseCatalogProvider
)

__all__ = [
    # Storage utilities
    "save_slot",
    "load_slot",
    "clear_slot",
    "KeyValueStorage",
    "SQLiteStorage",
    "InMemoryStorage",
    # Firebase utilities
    "fetch_node",
    "parse_products",
    "parse_categories",
    "parse_recommendation_settings",
    "FirebaseCatalogProvider",
]
