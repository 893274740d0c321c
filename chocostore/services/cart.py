# chocostore/services/cart.py
"""
In-memory cart held inside the wizard state.

Lines are keyed by (product.id, size.id); adding an existing pair bumps its
quantity instead of adding a second line. A line never has quantity < 1.
"""
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from chocostore.schemas.catalog_schemas import ProductRead, ProductSizeRead


class CartLine(BaseModel):
    product: ProductRead
    size: ProductSizeRead
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.size.price * self.quantity


class Cart(BaseModel):
    lines: List[CartLine] = []

    @property
    def is_empty(self) -> bool:
        return len(self.lines) == 0

    def _index_of(self, product_id: int, size_id: int) -> int:
        for index, line in enumerate(self.lines):
            if line.product.id == product_id and line.size.id == size_id:
                return index
        return -1

    def add_item(self, product: ProductRead, size: ProductSizeRead, quantity: int) -> bool:
        if quantity < 1:
            return False

        existing = self._index_of(product.id, size.id)
        if existing > -1:
            self.lines[existing].quantity += quantity
        else:
            self.lines.append(CartLine(product=product, size=size, quantity=quantity))
        return True

    def update_quantity(self, index: int, new_quantity: int) -> bool:
        if new_quantity < 1 or not 0 <= index < len(self.lines):
            return False
        self.lines[index].quantity = new_quantity
        return True

    def remove_item(self, index: int) -> bool:
        if not 0 <= index < len(self.lines):
            return False
        del self.lines[index]
        return True

    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))
