from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from chocostore.utils.clock import utcnow


class AdminUser(SQLModel, table=True):
    __tablename__ = "admin_users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password: str
    role: str = Field(default="admin")
    can_login: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
