# chocostore/schemas/catalog_schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from decimal import Decimal


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    category_id: int


class ProductSizeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    size_name: str
    price: Decimal = Field(ge=0)


class ProductDetail(ProductRead):
    sizes: List[ProductSizeRead] = []


class StateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    delivery_charge: Decimal = Decimal("0")
