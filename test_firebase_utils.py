"""
Catalog snapshots from the realtime database REST API (requests mocked).
"""

import pytest
import requests

from shopcart.core.retry_utils import PermanentError, RetryConfig, TransientError, retry_with_backoff
from shopcart.utils import firebase_utils
from shopcart.utils.firebase_utils import FirebaseCatalogProvider, fetch_node, parse_products


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload


DATABASE = {
    "products": {
        "-Nabc": {
            "name": "Rose Serum",
            "price": 50,
            "stock": 0,
            "category": "Skincare",
            "images": ["https://img/1.jpg"],
            "variants": {"v1": {"name": "30ml", "price": 50, "stock": 4}},
            "offer": {"enabled": True, "discountPercentage": 10},
            "relatedProductIds": {"-Ndef": True},
        },
        "-Ndef": {"name": "Neem Wash", "price": 20, "stock": 3, "category": "Skincare", "isVisible": False},
        "-Nbad": {"name": "", "price": "free"},
    },
    "categories": {"c1": {"name": "Skincare", "image": ""}},
    "site_settings/recommendations": {"mode": "category", "categoryIds": {"c1": True}},
}


@pytest.fixture
def fake_firebase(monkeypatch):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params))
        path = url.split("localhost:9000/")[1][:-len(".json")]
        return FakeResponse(DATABASE.get(path))

    monkeypatch.setattr(firebase_utils.requests, "get", fake_get)
    return calls


def test_snapshot_parses_keyed_records(fake_firebase):
    snapshot = FirebaseCatalogProvider(auth_token="secret").snapshot()

    assert [p.id for p in snapshot.products] == ["-Nabc", "-Ndef"]
    serum = snapshot.products[0]
    assert serum.get_variant("v1").id == "v1"
    assert serum.offer.discount_percentage == 10
    assert serum.related_product_ids == ["-Ndef"]
    assert snapshot.products[1].is_visible is False
    assert snapshot.categories[0].id == "c1"
    assert snapshot.recommendations.mode == "category"
    assert snapshot.recommendations.category_ids == ["c1"]
    assert all(params == {"auth": "secret"} for _, params in fake_firebase)


def test_empty_nodes_give_empty_snapshot(monkeypatch):
    monkeypatch.setattr(firebase_utils.requests, "get", lambda url, params=None, timeout=None: FakeResponse(None))

    snapshot = FirebaseCatalogProvider().snapshot()

    assert snapshot.products == []
    assert snapshot.recommendations.mode == "manual"


def test_array_payload_uses_index_keys():
    products = parse_products([None, {"name": "Soap", "price": 5}])
    assert [p.id for p in products] == ["1"]


def test_http_errors_are_classified(monkeypatch):
    monkeypatch.setattr(firebase_utils.requests, "get", lambda url, params=None, timeout=None: FakeResponse({}, 401))
    with pytest.raises(PermanentError):
        fetch_node("products")

    monkeypatch.setattr(firebase_utils.requests, "get", lambda url, params=None, timeout=None: FakeResponse({}, 503))
    with pytest.raises(TransientError):
        fetch_node("products")


def test_connection_errors_are_retried(monkeypatch):
    attempts = []

    def flaky_get(url, params=None, timeout=None):
        attempts.append(url)
        if len(attempts) < 3:
            raise requests.ConnectionError("connection refused")
        return FakeResponse({"p1": {"name": "Soap", "price": 5}})

    monkeypatch.setattr(firebase_utils.requests, "get", flaky_get)
    fetch = retry_with_backoff(fetch_node, config=RetryConfig(max_retries=3), sleep=lambda s: None)

    assert fetch("products") == {"p1": {"name": "Soap", "price": 5}}
    assert len(attempts) == 3


def test_retry_gives_up_after_max_retries():
    waits = []

    @retry_with_backoff(config=RetryConfig(max_retries=2, jitter=False), sleep=waits.append)
    def always_down():
        raise TransientError("down", "products")

    with pytest.raises(TransientError):
        always_down()
    assert waits == [1.0, 2.0]


def test_permanent_errors_are_not_retried():
    calls = []

    @retry_with_backoff(sleep=lambda s: pytest.fail("should not wait"))
    def forbidden():
        calls.append(1)
        raise PermanentError("forbidden", "products")

    with pytest.raises(PermanentError):
        forbidden()
    assert calls == [1]
