from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from chocostore.constants.order_status import DEFAULT_ORDER_STATUS
from chocostore.models.order_item import OrderItem
from chocostore.utils.clock import utcnow

class Order(SQLModel, table=True):
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    # human readable label, ORD-YYYYMMDD-NNNNNN
    order_number: str = Field(index=True, unique=True)

    # denormalized copy of the customer details
    customer_name: str
    customer_email: str
    customer_phone: str
    address_line_1: str
    address_line_2: Optional[str] = None
    city: str
    state_id: int = Field(foreign_key="states.id")
    pincode: str
    image_url: Optional[str] = None

    subtotal: Decimal = Field(max_digits=12, decimal_places=2)
    delivery_charge: Decimal = Field(default=0, max_digits=10, decimal_places=2)
    total_amount: Decimal = Field(max_digits=12, decimal_places=2)

    status: str = Field(default=DEFAULT_ORDER_STATUS, index=True)

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)

    items: List["OrderItem"] = Relationship(back_populates="order")
