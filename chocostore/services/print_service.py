# chocostore/services/print_service.py
import io
import json
import logging
from typing import Optional
from urllib.parse import quote, unquote

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from chocostore.exceptions import RemoteFetchError
from chocostore.models.delivery_state import DeliveryState
from chocostore.models.order import Order
from chocostore.models.order_item import OrderItem

logger = logging.getLogger(__name__)

PRINT_DATA_COOKIE = "printData"


def get_order_confirmation(session: Session, order_id: int) -> Optional[dict]:
    """Order, its items and the delivery state name, as shown on the print view."""
    try:
        order = session.get(Order, order_id)
        if not order:
            return None

        state = session.get(DeliveryState, order.state_id)
        items = session.exec(
            select(OrderItem)
            .where(OrderItem.order_id == order.id)
            .order_by(OrderItem.id)
        ).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching order details for {order_id}: {e}")
        raise RemoteFetchError("order details", str(e)) from e

    return {
        "order_id": order.id,
        "order_number": order.order_number,
        "status": order.status,
        "created_at": order.created_at,
        "customer": {
            "name": order.customer_name,
            "email": order.customer_email,
            "phone": order.customer_phone,
            "address_line_1": order.address_line_1,
            "address_line_2": order.address_line_2,
            "city": order.city,
            "state": state.name if state else None,
            "pincode": order.pincode,
        },
        "image_url": order.image_url,
        "items": [
            {
                "product_id": i.product_id,
                "product_name": i.product_name,
                "size_name": i.size_name,
                "price": i.price,
                "quantity": i.quantity,
                "total_price": i.total_price,
            }
            for i in items
        ],
        "subtotal": order.subtotal,
        "delivery_charge": order.delivery_charge,
        "total_amount": order.total_amount,
    }


def build_print_data(order: Order, items) -> str:
    """JSON blob of the display fields kept client side for the print page.

    Percent-encoded so it can travel as a cookie value.
    """
    return quote(json.dumps({
        "orderId": order.id,
        "orderNumber": order.order_number,
        "name": order.customer_name,
        "phone": order.customer_phone,
        "items": [f"{i.quantity}x {i.product_name} ({i.size_name})" for i in items],
        "total": str(order.total_amount),
    }), safe="")


def read_print_data(raw: Optional[str]) -> Optional[dict]:
    if not raw:
        return None
    try:
        data = json.loads(unquote(raw))
    except ValueError:
        logger.warning("Discarding unreadable print data")
        return None
    return data if isinstance(data, dict) else None


def render_order_pdf(confirmation: dict) -> bytes:
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    _, height = A4

    y = height - 60
    c.setFont("Helvetica-Bold", 16)
    c.drawString(50, y, f"Order {confirmation['order_number']}")

    c.setFont("Helvetica", 10)
    y -= 20
    c.drawString(50, y, f"Date: {confirmation['created_at']:%d %b %Y}")
    c.drawString(300, y, f"Status: {confirmation['status']}")

    customer = confirmation["customer"]
    y -= 30
    c.setFont("Helvetica-Bold", 11)
    c.drawString(50, y, "Deliver to")
    c.setFont("Helvetica", 10)
    address_lines = [
        customer["name"],
        customer["address_line_1"],
        customer["address_line_2"],
        f"{customer['city']}, {customer['state'] or ''} {customer['pincode']}",
        f"{customer['phone']}  {customer['email']}",
    ]
    for line in address_lines:
        if line:
            y -= 14
            c.drawString(50, y, line)

    y -= 30
    c.setFont("Helvetica-Bold", 10)
    c.drawString(50, y, "Item")
    c.drawString(300, y, "Price")
    c.drawString(380, y, "Qty")
    c.drawString(450, y, "Total")
    c.setFont("Helvetica", 10)

    for item in confirmation["items"]:
        y -= 16
        if y < 80:
            c.showPage()
            c.setFont("Helvetica", 10)
            y = height - 60
        c.drawString(50, y, f"{item['product_name']} ({item['size_name']})")
        c.drawString(300, y, f"{item['price']}")
        c.drawString(380, y, f"{item['quantity']}")
        c.drawString(450, y, f"{item['total_price']}")

    y -= 30
    c.drawString(300, y, "Subtotal")
    c.drawString(450, y, f"{confirmation['subtotal']}")
    y -= 14
    c.drawString(300, y, "Delivery")
    c.drawString(450, y, f"{confirmation['delivery_charge']}")
    y -= 16
    c.setFont("Helvetica-Bold", 11)
    c.drawString(300, y, "Total")
    c.drawString(450, y, f"{confirmation['total_amount']}")

    c.save()
    return buffer.getvalue()
