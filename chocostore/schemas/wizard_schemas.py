# chocostore/schemas/wizard_schemas.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from chocostore.services.pricing import PriceBreakdown
from chocostore.services.wizard import CustomerDetails, Notice, WizardResult, WizardState


class WizardRequest(BaseModel):
    state: WizardState


class CustomerUpdateRequest(WizardRequest):
    customer: CustomerDetails


class CategorySelectRequest(WizardRequest):
    category_id: int


class ProductSelectRequest(WizardRequest):
    product_id: int


class SizeSelectRequest(WizardRequest):
    size_id: int


class QuantityRequest(WizardRequest):
    quantity: int


class CartLineUpdateRequest(WizardRequest):
    index: int
    quantity: int


class CartLineRemoveRequest(WizardRequest):
    index: int


class WizardSummaryResponse(WizardResult):
    pricing: PriceBreakdown
    state_name: Optional[str] = None


class OrderPlacedResponse(BaseModel):
    order_id: int
    order_number: str
    subtotal: Decimal
    delivery_charge: Decimal
    total_amount: Decimal
    status: str
    confirmation_url: str
    notice: Notice
