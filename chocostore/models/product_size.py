from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from decimal import Decimal

from chocostore.utils.clock import utcnow

if TYPE_CHECKING:
    from chocostore.models.product import Product

class ProductSize(SQLModel, table=True):
    __tablename__ = "product_sizes"

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    size_name: str
    price: Decimal = Field(default=0, max_digits=10, decimal_places=2, ge=0)
    created_at: datetime = Field(default_factory=utcnow)

    product: Optional["Product"] = Relationship(back_populates="sizes")
