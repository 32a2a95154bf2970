"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppointmentCreate(BaseModel):
    """Client booking request"""

    manicurist_id: int
    service_id: int
    start_time: datetime
    client_comments: Optional[str] = Field(None, max_length=1000)


class AdminAppointmentCreate(AppointmentCreate):
    """Booking on behalf of a client"""

    client_id: int


class AppointmentStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def strip_status(cls, v):
        return v.strip()


class AppointmentReschedule(BaseModel):
    start_time: datetime


class AppointmentCreated(BaseModel):
    message: str
    appointment_id: int


class AvailabilityResponse(BaseModel):
    available: bool
    manicurist_id: int
    service_id: int
    start_time: datetime
    end_time: datetime


class RescheduleResponse(BaseModel):
    message: str
    appointment_id: int
    start_time: datetime
    end_time: datetime


class AppointmentResponse(BaseModel):
    """Appointment row joined with service, people and commission"""

    model_config = ConfigDict(from_attributes=True)

    appointment_id: int
    start_time: datetime
    end_time: datetime
    status: str
    is_walkin: bool = False
    client_comments: Optional[str] = None
    service_id: int
    service_name: Optional[str] = None
    price: Optional[Decimal] = None
    client_id: Optional[int] = None
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    manicurist_id: int
    manicurist_name: Optional[str] = None
    commission_amount: Optional[Decimal] = None
    is_paid: Optional[bool] = None
