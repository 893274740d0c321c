import pytest
from sqlalchemy.exc import OperationalError

from chocostore.exceptions import RemoteFetchError
from chocostore.services import catalog


class BrokenSession:
    def exec(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("server closed the connection"))

    def get(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("server closed the connection"))


def test_categories_sorted_by_name(session, catalog_data):
    assert [c.name for c in catalog.list_categories(session)] == ["Bars", "Gift Boxes"]


def test_products_filtered_by_category(session, catalog_data):
    products = catalog.list_products(session, catalog_data["bars"].id)

    assert [p.name for p in products] == ["Dark Bar", "Milk Bar"]


def test_sizes_sorted_by_price(session, catalog_data):
    sizes = catalog.list_product_sizes(session, catalog_data["dark"].id)

    assert [s.size_name for s in sizes] == ["Small", "Large"]


def test_states_sorted_by_name(session, catalog_data):
    assert [s.name for s in catalog.list_states(session)] == ["Goa", "Karnataka"]


def test_lookup_of_missing_rows_returns_none(session, catalog_data):
    assert catalog.get_product(session, 999) is None
    assert catalog.get_state(session, None) is None


def test_store_failure_becomes_remote_fetch_error():
    with pytest.raises(RemoteFetchError) as exc:
        catalog.list_categories(BrokenSession())

    assert exc.value.message == "Failed to load categories"

    with pytest.raises(RemoteFetchError):
        catalog.get_product_size(BrokenSession(), 1)


def test_public_catalog_routes(client, catalog_data):
    categories = client.get("/catalog/categories").json()
    assert [c["name"] for c in categories] == ["Bars", "Gift Boxes"]

    products = client.get(f"/catalog/categories/{catalog_data['bars'].id}/products").json()
    assert [p["name"] for p in products] == ["Dark Bar", "Milk Bar"]

    sizes = client.get(f"/catalog/products/{catalog_data['dark'].id}/sizes").json()
    assert [s["size_name"] for s in sizes] == ["Small", "Large"]

    states = client.get("/catalog/states").json()
    assert [s["name"] for s in states] == ["Goa", "Karnataka"]


def test_products_listing_includes_sizes(client, catalog_data):
    products = client.get("/catalog/products").json()
    dark = next(p for p in products if p["name"] == "Dark Bar")

    assert [s["size_name"] for s in dark["sizes"]] == ["Small", "Large"]


def test_unknown_category_is_404(client, catalog_data):
    assert client.get("/catalog/categories/999/products").status_code == 404


def test_fetch_failure_returns_error_notice(client, monkeypatch):
    def fail(session):
        raise RemoteFetchError("categories", "timeout")

    monkeypatch.setattr(catalog, "list_categories", fail)

    resp = client.get("/catalog/categories")

    assert resp.status_code == 503
    assert resp.json()["notice"] == {
        "title": "Error",
        "description": "Failed to load categories",
        "variant": "destructive",
    }
