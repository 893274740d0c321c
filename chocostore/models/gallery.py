from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from chocostore.utils.clock import utcnow

class GalleryItem(SQLModel, table=True):
    __tablename__ = "gallery"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    image_url: str
    image_key: Optional[str] = None
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
