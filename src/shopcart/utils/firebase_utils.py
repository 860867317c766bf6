"""
Firebase utilities - catalog snapshots from the Realtime Database REST API, with retry logic.
"""

import logging
from typing import List, Optional

import requests
from pydantic import ValidationError

from ..core.catalog import CatalogProvider
from ..core.retry_utils import (
    CatalogResponseValidator,
    RetryConfig,
    TransientError,
    PermanentError,
    retry_with_backoff,
)
from ..models.catalog import CatalogSnapshot, Category, RecommendationSettings
from ..models.product import Product

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

# Database configuration (local emulator by default)
FIREBASE_DATABASE_URL = "http://localhost:9000"
REQUEST_TIMEOUT = 10


def fetch_node(path: str, base_url: str = FIREBASE_DATABASE_URL, auth_token: Optional[str] = None):
    """GET one node of the realtime database as decoded JSON (None for an empty node)."""
    url = f"{base_url.rstrip('/')}/{path.strip('/')}.json"
    params = {"auth": auth_token} if auth_token else None

    try:
        logger.info(f"[FIREBASE] Fetching {path}")
        response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.error(f"[FIREBASE] Request to {path} failed: {str(e)}")
        raise TransientError(f"Firebase request error: {str(e)}", path)

    if response.status_code in (401, 403, 404):
        raise PermanentError(f"Firebase returned {response.status_code} for {path}", path)
    if response.status_code >= 400:
        raise TransientError(f"Firebase returned {response.status_code} for {path}", path)

    try:
        return response.json()
    except ValueError as e:
        raise PermanentError(f"Firebase returned invalid JSON for {path}: {e}", path)


def parse_products(payload) -> List[Product]:
    """Keyed product records -> Products, the key becoming the id. Invalid records are skipped."""
    records = CatalogResponseValidator.validate_keyed_collection(payload, "products")
    products = []
    for key, record in records.items():
        if not CatalogResponseValidator.validate_product_record(record):
            logger.warning(f"[FIREBASE] Skipping invalid product record {key}")
            continue
        try:
            products.append(Product.model_validate({**record, "id": key}))
        except ValidationError as e:
            logger.warning(f"[FIREBASE] Skipping product {key}: {e.error_count()} validation errors")
    return products


def parse_categories(payload) -> List[Category]:
    records = CatalogResponseValidator.validate_keyed_collection(payload, "categories")
    categories = []
    for key, record in records.items():
        try:
            categories.append(Category.model_validate({**record, "id": key}))
        except ValidationError as e:
            logger.warning(f"[FIREBASE] Skipping category {key}: {e.error_count()} validation errors")
    return categories


def parse_recommendation_settings(payload) -> RecommendationSettings:
    if not isinstance(payload, dict):
        return RecommendationSettings()
    try:
        return RecommendationSettings.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"[FIREBASE] Invalid recommendation settings, using defaults: {e.error_count()} errors")
        return RecommendationSettings()


class FirebaseCatalogProvider(CatalogProvider):
    """Pulls products, categories and recommendation settings on each snapshot() call."""

    def __init__(
        self,
        base_url: str = FIREBASE_DATABASE_URL,
        auth_token: Optional[str] = None,
        retry_config: Optional[RetryConfig] = None
    ):
        self.base_url = base_url
        self.auth_token = auth_token
        self._fetch = retry_with_backoff(fetch_node, config=retry_config or RetryConfig())

    def snapshot(self) -> CatalogSnapshot:
        products = parse_products(self._fetch("products", self.base_url, self.auth_token))
        categories = parse_categories(self._fetch("categories", self.base_url, self.auth_token))
        settings = parse_recommendation_settings(
            self._fetch("site_settings/recommendations", self.base_url, self.auth_token)
        )
        logger.info(f"[FIREBASE] Snapshot: {len(products)} products, {len(categories)} categories")
        return CatalogSnapshot(products=products, categories=categories, recommendations=settings)
