from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from chocostore.utils.clock import utcnow

class Review(SQLModel, table=True):
    __tablename__ = "reviews"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_name: str
    customer_email: str
    rating: int = Field(default=5, ge=1, le=5)
    review_text: str
    is_approved: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
