# chocostore/services/pricing.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from chocostore.services.cart import Cart


class PriceBreakdown(BaseModel):
    subtotal: Decimal
    delivery_charge: Decimal
    total: Decimal


def delivery_charge_for(state) -> Decimal:
    """Flat surcharge of the selected delivery state, 0 when none is selected."""
    if state is None:
        return Decimal("0")
    return Decimal(str(state.delivery_charge or 0))


def price_cart(cart: Cart, state: Optional[object] = None) -> PriceBreakdown:
    subtotal = cart.subtotal()
    delivery_charge = delivery_charge_for(state)

    return PriceBreakdown(
        subtotal=subtotal,
        delivery_charge=delivery_charge,
        total=subtotal + delivery_charge,
    )
