"""
Recommendation selector: tier cascade, exclusions, bounds.
"""

import random

from shopcart.core.catalog import category_name_lookup
from shopcart.core.recommendations import select_recommendations
from shopcart.models import Product, RecommendationSettings


def make(pid, category="Skincare", **kwargs):
    return Product(id=pid, name=f"Product {pid}", price=10, stock=5, category=category, **kwargs)


def ids(products):
    return {p.id for p in products}


def test_override_ids_are_exclusive(categories):
    target = make("T", related_product_ids=["A", "B"])
    catalog = [target, make("A"), make("B"), make("C"), make("D")]

    for seed in range(20):
        result = select_recommendations(catalog, target, category_name_lookup(categories), rng=random.Random(seed))
        assert ids(result) == {"A", "B"}


def test_override_union_of_ids_and_categories_without_duplicates(categories):
    target = make("T", related_product_ids={"A": True, "X": False}, related_category_ids=["c2"])
    catalog = [
        target,
        make("A", category="Fragrance"),
        make("F1", category="Fragrance"),
        make("S1"),
    ]

    result = select_recommendations(catalog, target, category_name_lookup(categories))

    assert sorted(p.id for p in result) == ["A", "F1"]


def test_manual_mode_uses_target_category(categories):
    target = make("T")
    catalog = [target, make("S1"), make("S2"), make("F1", category="Fragrance")]

    result = select_recommendations(catalog, target, category_name_lookup(categories))

    assert ids(result) == {"S1", "S2"}


def test_category_mode_uses_allow_list(categories):
    target = make("T")
    catalog = [target, make("S1"), make("F1", category="Fragrance"), make("H1", category="Haircare")]
    settings = RecommendationSettings.model_validate({"mode": "category", "categoryIds": {"c2": True, "c3": True}})

    result = select_recommendations(catalog, target, category_name_lookup(categories), settings)

    assert ids(result) == {"F1", "H1"}


def test_random_mode_uses_whole_catalog(categories):
    target = make("T")
    catalog = [target, make("S1"), make("F1", category="Fragrance"), make("H1", category="Haircare")]

    result = select_recommendations(catalog, target, {}, RecommendationSettings(mode="random"))

    assert ids(result) == {"S1", "F1", "H1"}


def test_override_with_no_matches_falls_back(categories):
    target = make("T", related_product_ids=["gone"])
    catalog = [target, make("S1")]

    result = select_recommendations(catalog, target, category_name_lookup(categories))

    assert ids(result) == {"S1"}


def test_target_and_hidden_products_excluded(categories):
    target = make(7)
    catalog = [target, make("7"), make("S1", is_visible=False), make("S2", is_visible=True), make("S3")]

    result = select_recommendations(catalog, target, {}, RecommendationSettings(mode="random"))

    assert ids(result) == {"S2", "S3"}


def test_result_bounded_to_ten():
    target = make("T")
    catalog = [target] + [make(f"S{i}") for i in range(25)]

    result = select_recommendations(catalog, target)

    assert len(result) == 10
    assert "T" not in ids(result)
    assert len(ids(result)) == 10


def test_shuffle_is_a_permutation():
    target = make("T")
    catalog = [target] + [make(f"S{i}") for i in range(6)]

    first = select_recommendations(catalog, target, rng=random.Random(1))
    second = select_recommendations(catalog, target, rng=random.Random(2))

    assert ids(first) == ids(second) == {f"S{i}" for i in range(6)}


def test_empty_inputs_give_empty_list(categories):
    target = make("T")
    assert select_recommendations([], target) == []

    settings = RecommendationSettings(mode="category", category_ids=["unknown"])
    assert select_recommendations([target, make("S1")], target, category_name_lookup(categories), settings) == []
