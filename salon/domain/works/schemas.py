"""Walk-in work schemas"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class WorkCreate(BaseModel):
    service_id: int
    work_date: datetime
    client_name: Optional[str] = Field(None, max_length=150)
    service_price_custom: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)

    @field_validator("client_name")
    @classmethod
    def blank_name_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v


class AdminWorkCreate(WorkCreate):
    manicurist_id: int


class WorkUpdate(BaseModel):
    service_price_custom: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class WorkCreated(BaseModel):
    message: str
    work_id: int
    commission_amount: Decimal


class WorkUpdated(BaseModel):
    message: str
    new_commission: Decimal


class WorkRecord(BaseModel):
    work_id: int
    work_date: datetime
    client_name: Optional[str]
    manicurist_id: int
    manicurist_name: Optional[str] = None
    service_name: Optional[str]
    default_price: Optional[Decimal]
    paid_price: Optional[Decimal]
    commission_amount: Optional[Decimal]
    is_paid: Optional[bool]
    payment_date: Optional[datetime]


class WorkSummary(BaseModel):
    total_works: int
    total_paid: Decimal
    total_commission: Decimal
    total_paid_commission: Decimal
    total_pending_commission: Decimal


class WorkListResponse(BaseModel):
    works: list[WorkRecord]
    summary: WorkSummary
