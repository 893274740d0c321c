# chocostore/routes/wizard.py
"""
HTTP surface of the order wizard.

The client keeps the WizardState and posts it with every call; each endpoint
applies one transition and answers with the new state, whether it was
accepted, and an optional notice to show.
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile
from pydantic import ValidationError
from sqlmodel import Session

from chocostore.database import get_session
from chocostore.schemas.catalog_schemas import ProductRead, ProductSizeRead
from chocostore.schemas.wizard_schemas import (
    CartLineRemoveRequest,
    CartLineUpdateRequest,
    CategorySelectRequest,
    CustomerUpdateRequest,
    OrderPlacedResponse,
    ProductSelectRequest,
    QuantityRequest,
    SizeSelectRequest,
    WizardRequest,
    WizardSummaryResponse,
)
from chocostore.services import catalog, wizard
from chocostore.services.order_service import submit_order
from chocostore.services.pricing import price_cart
from chocostore.services.print_service import PRINT_DATA_COOKIE, build_print_data
from chocostore.services.r2_helper import upload_order_image
from chocostore.services.wizard import Notice, WizardResult, WizardState


router = APIRouter()


@router.get("/", response_model=WizardResult)
def start_wizard():
    return wizard.new_wizard()


@router.post("/customer", response_model=WizardResult)
def update_customer(payload: CustomerUpdateRequest):
    fields = payload.customer.model_dump(exclude_unset=True)
    return wizard.update_customer(payload.state, **fields)


@router.post("/advance", response_model=WizardResult)
def advance(payload: WizardRequest):
    return wizard.advance(payload.state)


@router.post("/back", response_model=WizardResult)
def back(payload: WizardRequest):
    return wizard.back(payload.state)


@router.post("/select-category", response_model=WizardResult)
def select_category(payload: CategorySelectRequest, session: Session = Depends(get_session)):
    category = catalog.get_category(session, payload.category_id)
    if not category:
        raise HTTPException(404, "Category not found")
    return wizard.select_category(payload.state, category.id)


@router.post("/select-product", response_model=WizardResult)
def select_product(payload: ProductSelectRequest, session: Session = Depends(get_session)):
    product = catalog.get_product(session, payload.product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return wizard.select_product(payload.state, ProductRead.model_validate(product))


@router.post("/select-size", response_model=WizardResult)
def select_size(payload: SizeSelectRequest, session: Session = Depends(get_session)):
    size = catalog.get_product_size(session, payload.size_id)
    if not size:
        raise HTTPException(404, "Size not found")
    return wizard.select_size(payload.state, ProductSizeRead.model_validate(size))


@router.post("/quantity", response_model=WizardResult)
def set_quantity(payload: QuantityRequest):
    return wizard.set_quantity(payload.state, payload.quantity)


@router.post("/cart/add", response_model=WizardResult)
def add_to_cart(payload: WizardRequest):
    return wizard.add_selection_to_cart(payload.state)


@router.post("/cart/update", response_model=WizardResult)
def update_cart_item(payload: CartLineUpdateRequest):
    return wizard.update_cart_quantity(payload.state, payload.index, payload.quantity)


@router.post("/cart/remove", response_model=WizardResult)
def remove_cart_item(payload: CartLineRemoveRequest):
    return wizard.remove_cart_item(payload.state, payload.index)


@router.post("/summary", response_model=WizardSummaryResponse)
def order_summary(payload: WizardRequest, session: Session = Depends(get_session)):
    state = payload.state
    delivery_state = catalog.get_state(session, state.customer.state_id)

    return WizardSummaryResponse(
        state=state,
        pricing=price_cart(state.cart, delivery_state),
        state_name=delivery_state.name if delivery_state else None,
    )


@router.post("/image", response_model=WizardResult)
def upload_customer_image(
    state: str = Form(...),
    image: UploadFile = File(...),
):
    try:
        current = WizardState.model_validate_json(state)
    except ValidationError as e:
        raise HTTPException(422, f"Invalid wizard state: {e.errors()[0]['msg']}")

    _, image_url = upload_order_image(image, current.customer.name)
    return wizard.set_customer_image(current, image_url)


@router.post("/submit", status_code=201, response_model=OrderPlacedResponse)
def place_order(
    payload: WizardRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    placed = submit_order(session, payload.state)
    order = placed.order

    response.set_cookie(
        PRINT_DATA_COOKIE,
        build_print_data(order, placed.items),
        samesite="lax",
    )

    return OrderPlacedResponse(
        order_id=order.id,
        order_number=order.order_number,
        subtotal=order.subtotal,
        delivery_charge=order.delivery_charge,
        total_amount=order.total_amount,
        status=order.status,
        confirmation_url=f"/print/{order.id}",
        notice=Notice(
            title="Order Placed Successfully!",
            description="Redirecting to order summary...",
        ),
    )
