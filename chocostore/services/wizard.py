# chocostore/services/wizard.py
"""
Order wizard step controller.

The wizard state is a plain serializable object the client holds and posts
back. Every transition below is a pure function: it takes a state, returns a
WizardResult with a new state, and never mutates the state it was given.
Rejected transitions hand back the given state plus a notice for the user.

Steps are strictly linear:

    1 Customer Details -> 2 Product Selection -> 3 Review & Submit

Inside step 2 the selection is itself linear: picking a category clears the
product and size, picking a product clears the size. Nothing reaches the
cart until add_selection_to_cart is called.
"""
from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, Field

from chocostore.schemas.catalog_schemas import ProductRead, ProductSizeRead
from chocostore.services.cart import Cart

REQUIRED_CUSTOMER_FIELDS = (
    "name",
    "email",
    "phone",
    "address_line_1",
    "city",
    "state_id",
    "pincode",
)


class WizardStep(IntEnum):
    CUSTOMER_DETAILS = 1
    PRODUCT_SELECTION = 2
    REVIEW = 3


class CustomerDetails(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    address_line_1: str = ""
    address_line_2: str = ""
    city: str = ""
    state_id: Optional[int] = None
    pincode: str = ""


class ProductSelection(BaseModel):
    category_id: Optional[int] = None
    product: Optional[ProductRead] = None
    size: Optional[ProductSizeRead] = None
    quantity: int = Field(default=1, ge=1)


class Notice(BaseModel):
    title: str
    description: str
    variant: str = "default"


class WizardState(BaseModel):
    current_step: WizardStep = WizardStep.CUSTOMER_DETAILS
    customer: CustomerDetails = Field(default_factory=CustomerDetails)
    selection: ProductSelection = Field(default_factory=ProductSelection)
    cart: Cart = Field(default_factory=Cart)
    customer_image_url: Optional[str] = None


class WizardResult(BaseModel):
    state: WizardState
    accepted: bool = True
    notice: Optional[Notice] = None


def missing_customer_fields(customer: CustomerDetails) -> List[str]:
    missing = []
    for field in REQUIRED_CUSTOMER_FIELDS:
        value = getattr(customer, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def _accepted(state: WizardState, title: str = None, description: str = None) -> WizardResult:
    notice = Notice(title=title, description=description) if title else None
    return WizardResult(state=state, accepted=True, notice=notice)


def _rejected(state: WizardState, title: str, description: str) -> WizardResult:
    return WizardResult(
        state=state,
        accepted=False,
        notice=Notice(title=title, description=description, variant="destructive"),
    )


def _not_on_step(state: WizardState, step: WizardStep) -> Optional[WizardResult]:
    if state.current_step != step:
        return _rejected(
            state,
            "Wrong Step",
            f"This action is only available on step {int(step)}",
        )
    return None


def new_wizard() -> WizardResult:
    return WizardResult(state=WizardState())


def update_customer(state: WizardState, **fields) -> WizardResult:
    merged = {**state.customer.model_dump(), **fields}
    new_state = state.model_copy(deep=True)
    new_state.customer = CustomerDetails(**merged)
    return _accepted(new_state)


def set_customer_image(state: WizardState, image_url: Optional[str]) -> WizardResult:
    new_state = state.model_copy(deep=True)
    new_state.customer_image_url = image_url
    return _accepted(new_state)


def advance(state: WizardState) -> WizardResult:
    step = state.current_step

    if step == WizardStep.CUSTOMER_DETAILS:
        if missing_customer_fields(state.customer):
            return _rejected(
                state,
                "Missing Information",
                "Please fill in all required fields",
            )
    elif step == WizardStep.PRODUCT_SELECTION:
        if state.cart.is_empty:
            return _rejected(
                state,
                "Empty Cart",
                "Please add items to cart before reviewing your order",
            )
    else:
        return _rejected(state, "Last Step", "Already at the last step")

    new_state = state.model_copy(deep=True)
    new_state.current_step = WizardStep(step + 1)
    return _accepted(new_state)


def back(state: WizardState) -> WizardResult:
    if state.current_step == WizardStep.CUSTOMER_DETAILS:
        return _rejected(state, "First Step", "There is no previous step")

    new_state = state.model_copy(deep=True)
    new_state.current_step = WizardStep(state.current_step - 1)
    return _accepted(new_state)


def select_category(state: WizardState, category_id: int) -> WizardResult:
    wrong_step = _not_on_step(state, WizardStep.PRODUCT_SELECTION)
    if wrong_step:
        return wrong_step

    new_state = state.model_copy(deep=True)
    new_state.selection.category_id = category_id
    new_state.selection.product = None
    new_state.selection.size = None
    return _accepted(new_state)


def select_product(state: WizardState, product: ProductRead) -> WizardResult:
    wrong_step = _not_on_step(state, WizardStep.PRODUCT_SELECTION)
    if wrong_step:
        return wrong_step

    if state.selection.category_id is None or product.category_id != state.selection.category_id:
        return _rejected(
            state,
            "Selection Required",
            "Please choose a product from the selected category",
        )

    new_state = state.model_copy(deep=True)
    new_state.selection.product = product
    new_state.selection.size = None
    return _accepted(new_state)


def select_size(state: WizardState, size: ProductSizeRead) -> WizardResult:
    wrong_step = _not_on_step(state, WizardStep.PRODUCT_SELECTION)
    if wrong_step:
        return wrong_step

    product = state.selection.product
    if product is None or size.product_id != product.id:
        return _rejected(
            state,
            "Selection Required",
            "Please choose a size of the selected product",
        )

    new_state = state.model_copy(deep=True)
    new_state.selection.size = size
    return _accepted(new_state)


def set_quantity(state: WizardState, quantity: int) -> WizardResult:
    wrong_step = _not_on_step(state, WizardStep.PRODUCT_SELECTION)
    if wrong_step:
        return wrong_step

    new_state = state.model_copy(deep=True)
    new_state.selection.quantity = max(1, quantity)
    return _accepted(new_state)


def add_selection_to_cart(state: WizardState) -> WizardResult:
    wrong_step = _not_on_step(state, WizardStep.PRODUCT_SELECTION)
    if wrong_step:
        return wrong_step

    selection = state.selection
    if selection.product is None or selection.size is None:
        return _rejected(
            state,
            "Selection Required",
            "Please select a product and size",
        )

    new_state = state.model_copy(deep=True)
    picked = new_state.selection
    new_state.cart.add_item(picked.product, picked.size, picked.quantity)

    # category stays so the next product can be picked from the same list
    new_state.selection.product = None
    new_state.selection.size = None
    new_state.selection.quantity = 1

    return _accepted(
        new_state,
        "Added to Cart",
        f"{selection.quantity}x {selection.product.name} ({selection.size.size_name}) added to cart",
    )


def update_cart_quantity(state: WizardState, index: int, quantity: int) -> WizardResult:
    wrong_step = _not_on_step(state, WizardStep.PRODUCT_SELECTION)
    if wrong_step:
        return wrong_step

    new_state = state.model_copy(deep=True)
    if not new_state.cart.update_quantity(index, quantity):
        return _rejected(state, "Invalid Quantity", "Quantity must be at least 1")
    return _accepted(new_state)


def remove_cart_item(state: WizardState, index: int) -> WizardResult:
    wrong_step = _not_on_step(state, WizardStep.PRODUCT_SELECTION)
    if wrong_step:
        return wrong_step

    new_state = state.model_copy(deep=True)
    if not new_state.cart.remove_item(index):
        return _rejected(state, "Not Found", "That item is no longer in the cart")
    return _accepted(new_state, "Removed from Cart", "Item removed from cart")
