"""Appointment router - FastAPI endpoints for bookings and their lifecycle"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import Actor, Capability, get_current_user, require_capability
from ...database import get_db
from ...models import Appointment
from .schemas import (
    AdminAppointmentCreate,
    AppointmentCreate,
    AppointmentCreated,
    AppointmentReschedule,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AvailabilityResponse,
    RescheduleResponse,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def to_response(a: Appointment, include_commission: bool = True) -> AppointmentResponse:
    client_name = a.client_name_walkin if a.is_walkin else (a.client.full_name if a.client else None)
    return AppointmentResponse(
        appointment_id=a.id,
        start_time=a.start_time,
        end_time=a.end_time,
        status=a.status,
        is_walkin=a.is_walkin,
        client_comments=a.client_comments,
        service_id=a.service_id,
        service_name=a.service.name if a.service else None,
        price=a.service.price if a.service else None,
        client_id=a.client_id,
        client_name=client_name,
        client_phone=a.client.phone_number if a.client else None,
        manicurist_id=a.manicurist_id,
        manicurist_name=a.manicurist.full_name if a.manicurist else None,
        commission_amount=a.commission.commission_amount if a.commission and include_commission else None,
        is_paid=a.commission.is_paid if a.commission and include_commission else None,
    )


# ============================================================================
# BOOKING
# ============================================================================


@router.post("", response_model=AppointmentCreated, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    actor: Actor = Depends(require_capability(Capability.BOOK_OWN_APPOINTMENT)),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment for the authenticated client"""
    appointment = service.create(
        client_id=actor.user_id,
        manicurist_id=data.manicurist_id,
        service_id=data.service_id,
        start_time=data.start_time,
        client_comments=data.client_comments,
    )
    return AppointmentCreated(message="Appointment booked successfully", appointment_id=appointment.id)


@router.post("/admin", response_model=AppointmentCreated, status_code=201)
async def create_appointment_admin(
    data: AdminAppointmentCreate,
    actor: Actor = Depends(require_capability(Capability.MANAGE_ALL_APPOINTMENTS)),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment on behalf of any client"""
    appointment = service.create(
        client_id=data.client_id,
        manicurist_id=data.manicurist_id,
        service_id=data.service_id,
        start_time=data.start_time,
        client_comments=data.client_comments,
    )
    return AppointmentCreated(message="Appointment created successfully", appointment_id=appointment.id)


@router.get("/availability", response_model=AvailabilityResponse)
async def check_availability(
    manicurist_id: int = Query(...),
    service_id: int = Query(...),
    start_time: datetime = Query(...),
    actor: Actor = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Whether the manicurist is free for the service starting at start_time"""
    return service.check_availability(manicurist_id, service_id, start_time)


# ============================================================================
# LISTINGS
# ============================================================================


@router.get("/client", response_model=list[AppointmentResponse])
async def get_client_appointments(
    actor: Actor = Depends(require_capability(Capability.BOOK_OWN_APPOINTMENT)),
    service: AppointmentService = Depends(get_appointment_service),
):
    return [to_response(a, include_commission=False) for a in service.list_for_client(actor.user_id)]


@router.get("/manicurist", response_model=list[AppointmentResponse])
async def get_manicurist_appointments(
    actor: Actor = Depends(require_capability(Capability.RECORD_OWN_WORK)),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointments assigned to the authenticated manicurist, with commission"""
    return [to_response(a) for a in service.list_for_manicurist(actor.user_id)]


@router.get("/all", response_model=list[AppointmentResponse])
async def get_all_appointments(
    actor: Actor = Depends(require_capability(Capability.MANAGE_ALL_APPOINTMENTS)),
    service: AppointmentService = Depends(get_appointment_service),
):
    return [to_response(a) for a in service.list_all()]


# ============================================================================
# LIFECYCLE
# ============================================================================


@router.put("/{appointment_id}/cancel")
async def cancel_appointment(
    appointment_id: int,
    actor: Actor = Depends(require_capability(Capability.CANCEL_APPOINTMENT)),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Cancel as the client, the assigned manicurist or an administrator"""
    service.cancel(appointment_id, actor)
    return {"message": "Appointment cancelled successfully"}


@router.put("/{appointment_id}/status")
async def update_appointment_status(
    appointment_id: int,
    data: AppointmentStatusUpdate,
    actor: Actor = Depends(require_capability(Capability.UPDATE_APPOINTMENT_STATUS)),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.update_status(appointment_id, data.status, actor)
    return {"message": "Appointment status updated", "status": appointment.status}


@router.put("/{appointment_id}/reschedule", response_model=RescheduleResponse)
async def reschedule_appointment(
    appointment_id: int,
    data: AppointmentReschedule,
    actor: Actor = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.reschedule(appointment_id, data.start_time, actor)
    return RescheduleResponse(
        message="Appointment rescheduled successfully",
        appointment_id=appointment.id,
        start_time=appointment.start_time,
        end_time=appointment.end_time,
    )


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: int,
    actor: Actor = Depends(require_capability(Capability.MANAGE_ALL_APPOINTMENTS)),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Delete an appointment and its commission (admin only)"""
    service.delete(appointment_id)
    return {"message": "Appointment deleted successfully"}
