# chocostore/services/order_id.py
"""
Human readable order numbers: ORD-YYYYMMDD-NNNNNN.

The sequence continues from the most recently created order regardless of
its date prefix. The number is a display label; uniqueness comes from the
unique constraint on orders.order_number and the retry in order_service.
"""
import logging
import re
from datetime import date
from typing import Optional

from sqlmodel import Session, select

from chocostore.models.order import Order
from chocostore.utils.clock import utc_today

logger = logging.getLogger(__name__)

ORDER_ID_PREFIX = "ORD"
SEQUENCE_WIDTH = 6
_SUFFIX_RE = re.compile(r"-(\d+)$")


def parse_sequence(order_number: Optional[str]) -> int:
    """Trailing numeric suffix of an order number, 0 if there is none."""
    if not order_number:
        return 0
    match = _SUFFIX_RE.search(order_number)
    return int(match.group(1)) if match else 0


def format_order_id(day: date, sequence: int) -> str:
    return f"{ORDER_ID_PREFIX}-{day:%Y%m%d}-{sequence:0{SEQUENCE_WIDTH}d}"


def latest_order_number(session: Session) -> Optional[str]:
    return session.exec(
        select(Order.order_number)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(1)
    ).first()


def next_order_id(session: Session, today: Optional[date] = None) -> str:
    today = today or utc_today()
    last = latest_order_number(session)
    next_id = format_order_id(today, parse_sequence(last) + 1)
    logger.info(f"Allocated order number {next_id} (previous: {last})")
    return next_id
