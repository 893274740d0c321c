from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal


class ProductSizeCreate(BaseModel):
    size_name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)


class ProductSizeUpdate(BaseModel):
    size_name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0)
