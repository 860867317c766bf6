"""
Catalog queries over a snapshot, and the snapshot provider interface.
"""

from typing import Dict, Iterable, List, Optional

from ..models.catalog import CatalogSnapshot, Category, RecommendationSettings
from ..models.product import Product

ALL = "All"


def visible_products(products: Iterable[Product]) -> List[Product]:
    """Only an explicit is_visible=False hides a product."""
    return [p for p in products if p.is_visible is not False]


def popular_products(products: Iterable[Product]) -> List[Product]:
    return [p for p in visible_products(products) if p.is_popular]


def filter_products(
    products: Iterable[Product],
    search_term: str = "",
    category: str = ALL,
    subcategory: str = ALL
) -> List[Product]:
    """Shop page filter: name search plus category/subcategory, 'All' meaning no filter."""
    term = (search_term or "").lower()
    return [
        p for p in visible_products(products)
        if term in p.name.lower()
        and (category == ALL or p.category == category)
        and (subcategory == ALL or p.subcategory == subcategory)
    ]


def search_products(products: Iterable[Product], term: str) -> List[Product]:
    """Case-insensitive match on name, description, category, subcategory or tag text."""
    term = (term or "").strip().lower()
    if not term:
        return []

    def matches(p: Product) -> bool:
        fields = [p.name, p.description, p.category, p.subcategory or ""]
        if p.tags:
            fields.extend(tag.text for tag in p.tags.values())
        return any(term in f.lower() for f in fields)

    return [p for p in visible_products(products) if matches(p)]


def pick_products(products: Iterable[Product], product_ids: Iterable) -> List[Product]:
    """Curated section (bestsellers, offer sections): listed ids that are visible, in catalog order."""
    if isinstance(product_ids, dict):
        wanted = {str(k) for k, flag in product_ids.items() if flag}
    else:
        wanted = {str(pid) for pid in product_ids}
    return [p for p in visible_products(products) if str(p.id) in wanted]


def category_name_lookup(categories: Iterable[Category]) -> Dict[str, str]:
    return {c.id: c.name for c in categories}


def subcategories_of(categories: Iterable[Category], category_name: str) -> List[str]:
    if category_name == ALL:
        return []
    category = next((c for c in categories if c.name == category_name), None)
    return [s.name for s in category.subcategories] if category else []


def find_product(products: Iterable[Product], product_id) -> Optional[Product]:
    return next((p for p in products if str(p.id) == str(product_id)), None)


class CatalogProvider:
    """Source of complete catalog snapshots."""

    def snapshot(self) -> CatalogSnapshot:
        raise NotImplementedError


class StaticCatalogProvider(CatalogProvider):
    """Serves a snapshot pushed in by the caller (e.g. from a live listener)."""

    def __init__(self, snapshot: Optional[CatalogSnapshot] = None):
        self._snapshot = snapshot or CatalogSnapshot()

    def push(
        self,
        products: Optional[List[Product]] = None,
        categories: Optional[List[Category]] = None,
        recommendations: Optional[RecommendationSettings] = None
    ):
        """Replace parts of the held snapshot; omitted parts are kept."""
        self._snapshot = CatalogSnapshot(
            products=products if products is not None else self._snapshot.products,
            categories=categories if categories is not None else self._snapshot.categories,
            recommendations=recommendations or self._snapshot.recommendations,
        )

    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot
