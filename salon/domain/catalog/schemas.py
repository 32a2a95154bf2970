"""Catalog schemas - Pydantic models for salon services"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ServiceCreate(BaseModel):
    """Schema for creating or replacing a service"""

    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    duration_min: int = Field(..., gt=0)
    manicurist_commission_rate: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class ServiceUpdate(ServiceCreate):
    """PUT replaces every field"""


class ServiceResponse(BaseModel):
    service_id: int
    name: str
    description: Optional[str]
    price: Decimal
    duration_min: int
    manicurist_commission_rate: Decimal
    created_at: Optional[datetime] = None
