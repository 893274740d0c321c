from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlmodel import Session, select
from chocostore.constants.order_status import OrderStatus
from chocostore.database import get_session
from chocostore.dependencies.admin import require_admin
from chocostore.models.category import Category
from chocostore.models.gallery import GalleryItem
from chocostore.models.order import Order
from chocostore.models.product import Product
from chocostore.models.review import Review

router = APIRouter(dependencies=[Depends(require_admin)])

RECENT_ORDERS_LIMIT = 5


def _count(session: Session, model, *where) -> int:
    query = select(func.count()).select_from(model)
    for clause in where:
        query = query.where(clause)
    return session.exec(query).one()


@router.get("")
def dashboard(session: Session = Depends(get_session)):
    revenue = session.exec(select(func.sum(Order.total_amount))).one()

    recent = session.exec(
        select(Order)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(RECENT_ORDERS_LIMIT)
    ).all()

    return {
        "total_orders": _count(session, Order),
        "total_revenue": Decimal(str(revenue or 0)),
        "pending_orders": _count(session, Order, Order.status == OrderStatus.pending.value),
        "total_products": _count(session, Product),
        "total_categories": _count(session, Category),
        "total_gallery_items": _count(session, GalleryItem),
        "total_reviews": _count(session, Review),
        "recent_orders": [
            {
                "order_id": o.id,
                "order_number": o.order_number,
                "customer_name": o.customer_name,
                "total_amount": o.total_amount,
                "status": o.status,
                "created_at": o.created_at,
            }
            for o in recent
        ],
    }
