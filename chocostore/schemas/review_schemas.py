from pydantic import EmailStr
from datetime import datetime
from sqlmodel import SQLModel, Field


class ReviewCreate(SQLModel):
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    rating: int = Field(ge=1, le=5)
    review_text: str = Field(min_length=1)

class ReviewRead(SQLModel):
    id: int
    customer_name: str
    rating: int
    review_text: str
    created_at: datetime

class ReviewApprovalUpdate(SQLModel):
    is_approved: bool | None = None
