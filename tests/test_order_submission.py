from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from chocostore.exceptions import OrderItemsWriteError, OrderSubmissionError, OrderValidationError
from chocostore.models.order import Order
from chocostore.models.order_item import OrderItem
from chocostore.schemas.catalog_schemas import ProductRead, ProductSizeRead
from chocostore.services import order_service, wizard
from chocostore.services.order_service import submit_order
from chocostore.services.wizard import WizardState, WizardStep

from tests.factories import order as _order

TODAY = date(2024, 3, 15)


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


def _ready_state(data, lines=None):
    """A wizard state on the review step with the given (size, quantity) lines."""
    state = wizard.update_customer(WizardState(), **_customer(data["karnataka"].id)).state
    state = wizard.advance(state).state

    dark = ProductRead.model_validate(data["dark"])
    lines = lines or [(data["small"], 2), (data["large"], 1)]
    for size, quantity in lines:
        state.cart.add_item(dark, ProductSizeRead.model_validate(size), quantity)

    return wizard.advance(state).state


def test_submit_creates_order_and_items(session, catalog_data):
    placed = submit_order(session, _ready_state(catalog_data), today=TODAY)

    order = placed.order
    assert order.order_number == "ORD-20240315-000001"
    assert order.subtotal == Decimal("55")
    assert order.delivery_charge == Decimal("50")
    assert order.total_amount == order.subtotal + order.delivery_charge == Decimal("105")
    assert order.status == "Pending"

    items = session.exec(select(OrderItem).where(OrderItem.order_id == order.id)).all()
    assert len(items) == 2
    assert sum(i.total_price for i in items) == order.subtotal
    assert {(i.size_name, i.quantity) for i in items} == {("Small", 2), ("Large", 1)}
    assert len(session.exec(select(Order)).all()) == 1


def test_customer_details_are_copied_onto_order(session, catalog_data):
    order = submit_order(session, _ready_state(catalog_data), today=TODAY).order

    assert order.customer_name == "Asha Rao"
    assert order.state_id == catalog_data["karnataka"].id
    assert order.address_line_2 is None


def test_prices_come_from_the_store(session, catalog_data):
    state = _ready_state(catalog_data, [(catalog_data["small"], 2)])
    state.cart.lines[0].size.price = Decimal("0.01")

    order = submit_order(session, state, today=TODAY).order

    assert order.subtotal == Decimal("30")


def test_second_order_continues_sequence(session, catalog_data):
    submit_order(session, _ready_state(catalog_data), today=TODAY)
    second = submit_order(session, _ready_state(catalog_data), today=TODAY).order

    assert second.order_number == "ORD-20240315-000002"


def test_must_be_on_review_step(session, catalog_data):
    state = _ready_state(catalog_data)
    state.current_step = WizardStep.PRODUCT_SELECTION

    with pytest.raises(OrderValidationError) as exc:
        submit_order(session, state, today=TODAY)

    assert exc.value.title == "Review Required"
    assert session.exec(select(Order)).all() == []


def test_empty_cart_is_rejected(session, catalog_data):
    state = _ready_state(catalog_data)
    state.cart.lines = []

    with pytest.raises(OrderValidationError) as exc:
        submit_order(session, state, today=TODAY)

    assert exc.value.title == "Empty Cart"


def test_missing_customer_field_is_rejected(session, catalog_data):
    state = _ready_state(catalog_data)
    state.customer.phone = ""

    with pytest.raises(OrderValidationError) as exc:
        submit_order(session, state, today=TODAY)

    assert exc.value.title == "Missing Information"


def test_unknown_delivery_state_is_rejected(session, catalog_data):
    state = _ready_state(catalog_data)
    state.customer.state_id = 999

    with pytest.raises(OrderValidationError):
        submit_order(session, state, today=TODAY)


def test_removed_size_is_rejected(session, catalog_data):
    state = _ready_state(catalog_data)
    session.delete(catalog_data["large"])
    session.commit()

    with pytest.raises(OrderValidationError) as exc:
        submit_order(session, state, today=TODAY)

    assert exc.value.title == "Item Unavailable"
    assert session.exec(select(Order)).all() == []


def test_items_failure_leaves_order_without_items(session, catalog_data, monkeypatch):
    def broken_insert(*args, **kwargs):
        raise OperationalError("INSERT INTO order_items", {}, Exception("connection lost"))

    monkeypatch.setattr(order_service, "_insert_order_items", broken_insert)

    with pytest.raises(OrderItemsWriteError) as exc:
        submit_order(session, _ready_state(catalog_data), today=TODAY)

    orphan = session.get(Order, exc.value.order_id)
    assert orphan is not None
    assert orphan.total_amount == Decimal("105")
    assert session.exec(select(OrderItem)).all() == []


def test_gives_up_when_order_number_keeps_colliding(session, catalog_data):
    # latest order has sequence 0, so every attempt picks the taken ...-000001
    session.add(_order("ORD-20240315-000001", datetime(2024, 3, 1, 9, tzinfo=timezone.utc), catalog_data["karnataka"].id))
    session.add(_order("ORD-20240314-000000", datetime(2024, 3, 14, 9, tzinfo=timezone.utc), catalog_data["karnataka"].id))
    session.commit()

    with pytest.raises(OrderSubmissionError):
        submit_order(session, _ready_state(catalog_data), today=TODAY)

    assert len(session.exec(select(Order)).all()) == 2


def test_product_name_comes_from_the_store(session, catalog_data):
    state = _ready_state(catalog_data, [(catalog_data["small"], 1)])
    state.cart.lines[0].product.name = "FREE GOLD BAR"

    placed = submit_order(session, state, today=TODAY)

    assert [i.product_name for i in placed.items] == ["Dark Bar"]


def test_repeated_lines_are_merged_into_one_item(session, catalog_data):
    state = _ready_state(catalog_data, [(catalog_data["small"], 1)])
    state.cart.lines.append(state.cart.lines[0].model_copy(deep=True))

    placed = submit_order(session, state, today=TODAY)

    assert [(i.size_name, i.quantity) for i in placed.items] == [("Small", 2)]
    assert placed.order.subtotal == Decimal("30")


def test_line_with_unknown_product_is_rejected(session, catalog_data):
    state = _ready_state(catalog_data, [(catalog_data["small"], 1)])
    state.cart.lines[0].product.id = 999

    with pytest.raises(OrderValidationError) as exc:
        submit_order(session, state, today=TODAY)

    assert exc.value.title == "Item Unavailable"
