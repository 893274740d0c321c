from enum import Enum


class OrderStatus(str, Enum):
    """Admin-settable order states. Any status may be set at any time."""

    pending = "Pending"
    processing = "Processing"
    delivered = "Delivered"
    completed = "Completed"
    cancelled = "Cancelled"


DEFAULT_ORDER_STATUS = OrderStatus.pending.value
