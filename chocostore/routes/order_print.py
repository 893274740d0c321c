from fastapi import APIRouter, Cookie, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlmodel import Session
from typing import Optional
import io

from chocostore.database import get_session
from chocostore.services.print_service import (
    PRINT_DATA_COOKIE,
    get_order_confirmation,
    read_print_data,
    render_order_pdf,
)

router = APIRouter()


@router.get("/print/{order_id}")
def order_print_view(order_id: int, session: Session = Depends(get_session)):
    confirmation = get_order_confirmation(session, order_id)
    if not confirmation:
        raise HTTPException(status_code=404, detail="Order not found")
    return confirmation


@router.get("/print/{order_id}/pdf")
def order_print_pdf(order_id: int, session: Session = Depends(get_session)):
    confirmation = get_order_confirmation(session, order_id)
    if not confirmation:
        raise HTTPException(status_code=404, detail="Order not found")

    pdf = render_order_pdf(confirmation)
    filename = f"{confirmation['order_number']}_OrderDetails.pdf"

    return StreamingResponse(
        io.BytesIO(pdf),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/OrderConfirmation")
def last_order_confirmation(print_data: Optional[str] = Cookie(None, alias=PRINT_DATA_COOKIE)):
    data = read_print_data(print_data)
    if data is None:
        raise HTTPException(status_code=404, detail="No recent order to show")
    return data
