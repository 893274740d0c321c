from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal


class StateCreate(BaseModel):
    name: str
    delivery_charge: Decimal = Field(ge=0)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str):
        if not value.strip():
            raise ValueError("State name is required")
        return value.strip()


class StateUpdate(BaseModel):
    name: Optional[str] = None
    delivery_charge: Optional[Decimal] = Field(default=None, ge=0)
