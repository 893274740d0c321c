from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from chocostore.utils.clock import utcnow

class DeliveryState(SQLModel, table=True):
    """A delivery region with a flat surcharge applied once per order."""
    __tablename__ = "states"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    delivery_charge: Decimal = Field(default=0, max_digits=10, decimal_places=2, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
