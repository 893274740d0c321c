from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING, List
from datetime import datetime

from chocostore.utils.clock import utcnow

if TYPE_CHECKING:
    from chocostore.models.category import Category
    from chocostore.models.product_size import ProductSize

class Product(SQLModel, table=True):
    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None

    # public URL issued by object storage
    image_url: Optional[str] = None
    image_key: Optional[str] = None

    category_id: int = Field(foreign_key="categories.id", index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    category: Optional["Category"] = Relationship(back_populates="products")
    sizes: List["ProductSize"] = Relationship(back_populates="product")
