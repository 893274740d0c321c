# -------- ADMIN ORDERS --------
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlmodel import Session, or_, select
from chocostore.constants.order_status import OrderStatus
from chocostore.database import get_session
from chocostore.dependencies.admin import require_admin
from chocostore.models.order import Order
from chocostore.models.order_item import OrderItem
from chocostore.schemas.order_schemas import OrderStatusUpdate
from chocostore.services.order_export import export_orders_xlsx
from chocostore.services.print_service import get_order_confirmation
from chocostore.utils.clock import utcnow
from chocostore.utils.pagination import paginate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


def _filtered_orders(
    search: Optional[str],
    status: Optional[OrderStatus],
    start_date: Optional[date],
    end_date: Optional[date],
):
    query = select(Order)

    if search:
        term = f"%{search.strip()}%"
        query = query.where(
            or_(
                Order.customer_name.ilike(term),
                Order.customer_email.ilike(term),
                Order.order_number.ilike(term),
            )
        )

    if status:
        query = query.where(Order.status == status.value)

    # end date is inclusive
    if start_date:
        query = query.where(Order.created_at >= datetime.combine(start_date, time.min, tzinfo=timezone.utc))
    if end_date:
        query = query.where(Order.created_at < datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc))

    return query.order_by(Order.created_at.desc(), Order.id.desc())


@router.get("")
def list_orders(
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    session: Session = Depends(get_session),
):
    return paginate(
        session=session,
        query=_filtered_orders(search, status, start_date, end_date),
        page=page,
        limit=limit,
        transform=lambda o: {
            "order_id": o.id,
            "order_number": o.order_number,
            "customer_name": o.customer_name,
            "customer_email": o.customer_email,
            "date": o.created_at.date(),
            "total_amount": o.total_amount,
            "status": o.status,
        },
    )


@router.get("/export")
def export_orders(
    search: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    session: Session = Depends(get_session),
):
    orders = session.exec(_filtered_orders(search, status, start_date, end_date)).all()
    buffer = export_orders_xlsx(orders)
    filename = f"orders_{utcnow():%Y%m%d}.xlsx"

    return StreamingResponse(
        buffer,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{order_id}")
def order_details(order_id: int, session: Session = Depends(get_session)):
    details = get_order_confirmation(session, order_id)
    if not details:
        raise HTTPException(status_code=404, detail="Order not found")
    return details


@router.put("/{order_id}/status")
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    order = session.get(Order, order_id)
    if not order:
        raise HTTPException(404, "Order not found")

    previous = order.status
    order.status = data.status.value
    order.updated_at = utcnow()

    session.add(order)
    session.commit()
    session.refresh(order)
    logger.info(f"Order {order.order_number} status {previous} -> {order.status}")

    return {"order_id": order.id, "status": order.status}


@router.delete("/{order_id}")
def delete_order(order_id: int, session: Session = Depends(get_session)):
    order = session.get(Order, order_id)
    if not order:
        raise HTTPException(404, "Order not found")

    items = session.exec(select(OrderItem).where(OrderItem.order_id == order_id)).all()
    for item in items:
        session.delete(item)
    session.flush()

    session.delete(order)
    session.commit()
    logger.info(f"Deleted order {order_id} with {len(items)} items")

    return {"message": "Order deleted"}
