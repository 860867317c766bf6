"""
Recommendation selector - related products for a product page.
"""

import logging
import random
from typing import Dict, Iterable, List, Optional

from ..models.catalog import RecommendationSettings
from ..models.product import Product

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 10


def _names_for(category_ids: Iterable[str], category_names: Dict[str, str]) -> set:
    return {category_names[cid] for cid in category_ids if cid in category_names}


def _eligible(product: Product, target: Product) -> bool:
    return product.is_visible is not False and str(product.id) != str(target.id)


def _unique(products: Iterable[Product]) -> List[Product]:
    seen = set()
    result = []
    for p in products:
        pid = str(p.id)
        if pid not in seen:
            seen.add(pid)
            result.append(p)
    return result


def _override_tier(catalog: List[Product], target: Product, category_names: Dict[str, str]) -> List[Product]:
    product_ids = {str(pid) for pid in target.related_product_ids}
    names = _names_for(target.related_category_ids, category_names)

    return _unique(
        p for p in catalog
        if str(p.id) in product_ids or p.category in names
    )


def _fallback_tier(
    catalog: List[Product],
    target: Product,
    category_names: Dict[str, str],
    settings: RecommendationSettings
) -> List[Product]:
    if settings.mode == "category":
        names = _names_for(settings.category_ids, category_names)
        return [p for p in catalog if p.category in names]

    if settings.mode == "random":
        return list(catalog)

    # manual: same category as the target
    if not target.category:
        return []
    return [p for p in catalog if p.category == target.category]


def select_recommendations(
    catalog: List[Product],
    target: Product,
    category_names: Optional[Dict[str, str]] = None,
    settings: Optional[RecommendationSettings] = None,
    limit: int = MAX_RECOMMENDATIONS,
    rng: Optional[random.Random] = None
) -> List[Product]:
    """
    Pick up to `limit` related products in random order.

    The product's own related ids/categories win outright when they match
    anything; otherwise the global mode decides. The target and hidden
    products are never returned.

    Args:
        catalog: Current catalog snapshot
        target: Product being viewed
        category_names: Category id -> name lookup
        settings: Global fallback; defaults to manual mode
        limit: Maximum number of products returned
        rng: Random source for the shuffle

    Returns:
        List of products, possibly empty
    """
    if not catalog:
        return []

    category_names = category_names or {}
    settings = settings or RecommendationSettings()
    rng = rng or random.Random()

    candidates = [p for p in catalog if _eligible(p, target)]

    result: List[Product] = []
    if target.related_product_ids or target.related_category_ids:
        result = _override_tier(candidates, target, category_names)
        logger.debug(f"[RECOMMEND] Override tier for {target.id}: {len(result)} candidates")

    if not result:
        result = _unique(_fallback_tier(candidates, target, category_names, settings))
        logger.debug(f"[RECOMMEND] {settings.mode} tier for {target.id}: {len(result)} candidates")

    rng.shuffle(result)
    return result[:max(limit, 0)]
