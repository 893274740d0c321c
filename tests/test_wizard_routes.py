import json
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from chocostore.models.order import Order
from chocostore.models.order_item import OrderItem
from chocostore.services import order_service
from chocostore.services.print_service import PRINT_DATA_COOKIE


def _post(client, path, state, **body):
    resp = client.post(f"/customize{path}", json={"state": state, **body})
    assert resp.status_code == 200, resp.text
    return resp.json()


def _customer(state_id):
    return {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address_line_1": "12 MG Road",
        "city": "Bengaluru",
        "state_id": state_id,
        "pincode": "560001",
    }


def _walk_to_review(client, data):
    state = client.get("/customize/").json()["state"]
    state = _post(client, "/customer", state, customer=_customer(data["karnataka"].id))["state"]
    state = _post(client, "/advance", state)["state"]

    state = _post(client, "/select-category", state, category_id=data["bars"].id)["state"]
    state = _post(client, "/select-product", state, product_id=data["dark"].id)["state"]
    state = _post(client, "/select-size", state, size_id=data["small"].id)["state"]
    state = _post(client, "/quantity", state, quantity=2)["state"]
    state = _post(client, "/cart/add", state)["state"]

    state = _post(client, "/select-product", state, product_id=data["dark"].id)["state"]
    state = _post(client, "/select-size", state, size_id=data["large"].id)["state"]
    state = _post(client, "/cart/add", state)["state"]

    return _post(client, "/advance", state)["state"]


def test_full_order_flow(client, session, catalog_data):
    state = _walk_to_review(client, catalog_data)
    assert state["current_step"] == 3
    assert len(state["cart"]["lines"]) == 2

    summary = _post(client, "/summary", state)
    assert Decimal(summary["pricing"]["subtotal"]) == Decimal("55")
    assert Decimal(summary["pricing"]["total"]) == Decimal("105")
    assert summary["state_name"] == "Karnataka"

    resp = client.post("/customize/submit", json={"state": state})
    assert resp.status_code == 201, resp.text
    placed = resp.json()
    assert Decimal(placed["total_amount"]) == Decimal("105")
    assert placed["status"] == "Pending"
    assert placed["notice"]["title"] == "Order Placed Successfully!"
    assert PRINT_DATA_COOKIE in resp.cookies

    confirmation = client.get(placed["confirmation_url"]).json()
    assert confirmation["order_number"] == placed["order_number"]
    assert Decimal(str(confirmation["total_amount"])) == Decimal("105")
    assert confirmation["customer"]["state"] == "Karnataka"
    assert len(confirmation["items"]) == 2

    print_data = client.get("/OrderConfirmation").json()
    assert print_data["orderNumber"] == placed["order_number"]
    assert Decimal(print_data["total"]) == Decimal("105")
    assert "2x Dark Bar (Small)" in print_data["items"]

    assert len(session.exec(select(Order)).all()) == 1
    assert len(session.exec(select(OrderItem)).all()) == 2


def test_advance_without_details_is_not_accepted(client):
    state = client.get("/customize/").json()["state"]

    result = _post(client, "/advance", state)

    assert result["accepted"] is False
    assert result["notice"]["title"] == "Missing Information"
    assert result["state"]["current_step"] == 1


def test_select_unknown_product_is_404(client, catalog_data):
    state = client.get("/customize/").json()["state"]

    resp = client.post("/customize/select-product", json={"state": state, "product_id": 999})

    assert resp.status_code == 404


def test_submit_before_review_is_422(client, catalog_data):
    state = client.get("/customize/").json()["state"]

    resp = client.post("/customize/submit", json={"state": state})

    assert resp.status_code == 422
    assert resp.json()["notice"]["title"] == "Review Required"


def test_items_failure_reports_order_failed(client, session, catalog_data, monkeypatch):
    state = _walk_to_review(client, catalog_data)

    def broken_insert(*args, **kwargs):
        raise SQLAlchemyError("items insert failed")

    monkeypatch.setattr(order_service, "_insert_order_items", broken_insert)

    resp = client.post("/customize/submit", json={"state": state})

    assert resp.status_code == 502
    body = resp.json()
    assert body["notice"]["title"] == "Order Failed"
    assert session.get(Order, body["order_id"]) is not None


def test_customer_image_upload(client, fake_s3):
    state = client.get("/customize/").json()["state"]
    state = _post(client, "/customer", state, customer={"name": "Asha Rao"})["state"]

    resp = client.post(
        "/customize/image",
        data={"state": json.dumps(state)},
        files={"image": ("design.png", b"\x89PNG fake", "image/png")},
    )

    assert resp.status_code == 200, resp.text
    url = resp.json()["state"]["customer_image_url"]
    assert url.startswith("https://cdn.example.test/orderimages/asha-rao_")
    assert len(fake_s3.objects) == 1


def test_order_confirmation_without_cookie_is_404(client):
    assert client.get("/OrderConfirmation").status_code == 404


def test_order_pdf(client, catalog_data):
    state = _walk_to_review(client, catalog_data)
    order_id = client.post("/customize/submit", json={"state": state}).json()["order_id"]

    resp = client.get(f"/print/{order_id}/pdf")

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")


def test_print_unknown_order_is_404(client, catalog_data):
    assert client.get("/print/999").status_code == 404
