# chocostore/services/order_service.py
"""
Order submission.

Two sequential writes: the order row first (its generated id is needed by the
items), then one order_items row per cart line. The writes are not wrapped in
one transaction. If the items write fails the order row stays behind without
items and the caller gets OrderItemsWriteError carrying its id.
"""
import logging
from datetime import date
from typing import List, NamedTuple, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from chocostore.constants.order_status import DEFAULT_ORDER_STATUS
from chocostore.exceptions import (
    OrderItemsWriteError,
    OrderSubmissionError,
    OrderValidationError,
    RemoteFetchError,
)
from chocostore.models.order import Order
from chocostore.models.order_item import OrderItem
from chocostore.schemas.catalog_schemas import ProductRead, ProductSizeRead
from chocostore.services import catalog
from chocostore.services.cart import Cart
from chocostore.services.order_id import next_order_id
from chocostore.services.pricing import PriceBreakdown, price_cart
from chocostore.services.wizard import WizardState, WizardStep, missing_customer_fields

logger = logging.getLogger(__name__)

ORDER_NUMBER_MAX_ATTEMPTS = 3


class SubmittedOrder(NamedTuple):
    order: Order
    items: List[OrderItem]


def validate_submission(state: WizardState) -> None:
    if state.current_step != WizardStep.REVIEW:
        raise OrderValidationError(
            "Please review your order before placing it",
            title="Review Required",
        )

    if state.cart.is_empty:
        raise OrderValidationError(
            "Please add items to cart before placing order",
            title="Empty Cart",
        )

    if missing_customer_fields(state.customer):
        raise OrderValidationError("Please fill in all required fields")


def reprice_cart(session: Session, cart: Cart) -> Cart:
    """Rebuild the cart from stored products and sizes.

    Only ids and quantities are taken from the posted state; names and
    prices come from the store. Repeated (product, size) lines are merged.
    """
    repriced = Cart()
    for line in cart.lines:
        product = catalog.get_product(session, line.product.id)
        size = catalog.get_product_size(session, line.size.id)
        if product is None or size is None or size.product_id != product.id:
            raise OrderValidationError(
                f"{line.product.name} ({line.size.size_name}) is no longer available",
                title="Item Unavailable",
            )
        repriced.add_item(
            ProductRead.model_validate(product),
            ProductSizeRead.model_validate(size),
            line.quantity,
        )
    return repriced


def _insert_order(
    session: Session,
    state: WizardState,
    pricing: PriceBreakdown,
    today: Optional[date] = None,
) -> Order:
    customer = state.customer

    for attempt in range(1, ORDER_NUMBER_MAX_ATTEMPTS + 1):
        try:
            order_number = next_order_id(session, today)
        except SQLAlchemyError as e:
            logger.error(f"Could not allocate an order number: {e}")
            raise OrderSubmissionError() from e

        order = Order(
            order_number=order_number,
            customer_name=customer.name.strip(),
            customer_email=customer.email.strip(),
            customer_phone=customer.phone.strip(),
            address_line_1=customer.address_line_1.strip(),
            address_line_2=customer.address_line_2.strip() or None,
            city=customer.city.strip(),
            state_id=customer.state_id,
            pincode=customer.pincode.strip(),
            image_url=state.customer_image_url,
            subtotal=pricing.subtotal,
            delivery_charge=pricing.delivery_charge,
            total_amount=pricing.total,
            status=DEFAULT_ORDER_STATUS,
        )
        session.add(order)

        try:
            session.commit()
        except IntegrityError as e:
            session.rollback()
            logger.warning(
                f"Order number {order_number} rejected (attempt {attempt}/{ORDER_NUMBER_MAX_ATTEMPTS}): {e}"
            )
            continue
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error creating order: {e}")
            raise OrderSubmissionError() from e

        session.refresh(order)
        logger.info(f"Created order {order.id} ({order.order_number}) total {order.total_amount}")
        return order

    logger.error("Giving up on order creation, no free order number")
    raise OrderSubmissionError()


def _insert_order_items(session: Session, order: Order, cart: Cart) -> List[OrderItem]:
    items = [
        OrderItem(
            order_id=order.id,
            product_id=line.product.id,
            product_name=line.product.name,
            size_name=line.size.size_name,
            price=line.size.price,
            quantity=line.quantity,
            total_price=line.line_total,
        )
        for line in cart.lines
    ]

    session.add_all(items)
    session.commit()
    for item in items:
        session.refresh(item)
    return items


def submit_order(session: Session, state: WizardState, today: Optional[date] = None) -> SubmittedOrder:
    validate_submission(state)

    try:
        cart = reprice_cart(session, state.cart)
        delivery_state = catalog.get_state(session, state.customer.state_id)
    except RemoteFetchError as e:
        raise OrderSubmissionError() from e

    if delivery_state is None:
        raise OrderValidationError("Please choose a delivery state")

    pricing = price_cart(cart, delivery_state)

    # write 1: the order row
    order = _insert_order(session, state, pricing, today)

    order_id, order_number = order.id, order.order_number

    # write 2: its items
    try:
        items = _insert_order_items(session, order, cart)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Order {order_id} ({order_number}) saved without items: {e}")
        raise OrderItemsWriteError(order_id) from e

    logger.info(f"Order {order.id} stored with {len(items)} items")
    return SubmittedOrder(order=order, items=items)
