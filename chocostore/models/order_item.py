from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from decimal import Decimal

from chocostore.utils.clock import utcnow

if TYPE_CHECKING:
    from chocostore.models.order import Order

class OrderItem(SQLModel, table=True):
    __tablename__ = "order_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    product_id: int = Field(foreign_key="products.id")

    # copied from the cart at order time, never updated
    product_name: str
    size_name: str
    price: Decimal = Field(max_digits=10, decimal_places=2)
    quantity: int
    total_price: Decimal = Field(max_digits=12, decimal_places=2)

    created_at: datetime = Field(default_factory=utcnow)

    order: Optional["Order"] = Relationship(back_populates="items")
