from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from catalog_scraper import api
from catalog_scraper.api import app, get_fetcher
from catalog_scraper.crawler import page_url

from conftest import FakeFetcher, listing_html


COLLECTION = "https://shop.example.com/collections/all"
BAD_REQUEST_BODY = {"error": "A full startUrl query parameter is required."}


@pytest.fixture
def client():
    fetch = FakeFetcher(
        {
            page_url(COLLECTION, 1): listing_html(
                [("Paddle", "/products/paddle?variant=1", "$1,234.56"), ("Ball", "/products/ball", "N/A")],
                total=1,
            ),
        }
    )
    app.dependency_overrides[get_fetcher] = lambda: fetch
    with TestClient(app) as c:
        c.fetch = fetch
        yield c
    app.dependency_overrides.clear()


def test_catalog_products_ok(client):
    resp = client.get("/catalogProducts", params={"startUrl": COLLECTION + "?ref=x"})
    assert resp.status_code == 200
    assert resp.json() == {
        "baseUrl": "https://shop.example.com",
        "products": [{"name": "Paddle", "url": "/products/paddle", "price": 1234.56}],
    }
    assert client.fetch.calls == [COLLECTION + "?page=1"]


def test_missing_start_url(client):
    resp = client.get("/catalogProducts")
    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST_BODY


def test_repeated_start_url_is_rejected(client):
    resp = client.get("/catalogProducts?startUrl=a&startUrl=b")
    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST_BODY


@pytest.mark.parametrize("start_url", ["/collections/all", "http://[::1/collections/all"])
def test_malformed_start_url_is_rejected(client, start_url):
    resp = client.get("/catalogProducts", params={"startUrl": start_url})
    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST_BODY


def test_unreachable_collection_returns_empty_list(client):
    resp = client.get("/catalogProducts", params={"startUrl": "https://shop.example.com/collections/none"})
    assert resp.status_code == 200
    assert resp.json() == {"baseUrl": "https://shop.example.com", "products": []}


def test_internal_error_is_generic():
    def broken(url):
        raise RuntimeError("secret detail")

    app.dependency_overrides[get_fetcher] = lambda: broken
    try:
        with TestClient(app) as c:
            resp = c.get("/catalogProducts", params={"startUrl": COLLECTION})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 500
    assert resp.json() == {"error": "An error occurred while fetching products."}
    assert "secret" not in resp.text


def test_overflowing_price_entry_is_dropped():
    fetch = FakeFetcher(
        {
            page_url(COLLECTION, 1): listing_html(
                [("Big", "/products/big", "$" + "9" * 400), ("Ball", "/products/ball", "$3.00")]
            ),
        }
    )
    app.dependency_overrides[get_fetcher] = lambda: fetch
    try:
        with TestClient(app) as c:
            resp = c.get("/catalogProducts", params={"startUrl": COLLECTION})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 200
    assert resp.json()["products"] == [{"name": "Ball", "url": "/products/ball", "price": 3.0}]


def test_get_fetcher_closes_its_session():
    session = MagicMock()
    with patch.object(api, "create_session", return_value=session):
        gen = get_fetcher()
        fetch = next(gen)
        assert callable(fetch)
        session.close.assert_not_called()
        with pytest.raises(StopIteration):
            next(gen)
    session.close.assert_called_once_with()
