from pydantic import BaseModel
from chocostore.constants.order_status import OrderStatus


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
