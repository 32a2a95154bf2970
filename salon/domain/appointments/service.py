"""Appointment service - Booking, status lifecycle and deletion"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import Actor
from ...errors import ConflictError, ForbiddenError, InternalError, NotFoundError, SalonError, ValidationError
from ...models import Appointment, AppointmentStatus, Role
from ...shared.validators import normalize_timestamp
from ..scheduling import (
    compute_commission,
    compute_end_time,
    has_conflict,
    quantize_money,
    resolve_charged_price,
)
from .repository import AppointmentRepository

logger = logging.getLogger(__name__)

# Scheduled is the only state that moves; Completed and Cancelled are terminal
ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class WalkinDetails:
    """Marks a creation as walk-in work: no client account, no availability check"""

    client_name: str


def parse_status(value: str) -> AppointmentStatus:
    try:
        return AppointmentStatus(value)
    except ValueError as e:
        valid = ", ".join(s.value for s in AppointmentStatus)
        raise ValidationError(f"Invalid status '{value}'. Expected one of: {valid}") from e


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create(
        self,
        client_id: Optional[int],
        manicurist_id: int,
        service_id: int,
        start_time: datetime,
        walkin: Optional[WalkinDetails] = None,
        price_override: Optional[Decimal] = None,
        client_comments: Optional[str] = None,
    ) -> Appointment:
        """
        Create an appointment and its commission as one unit of work.

        The service lookup, the manicurist lock, the availability check and
        both inserts share a single transaction; any failure rolls back
        everything so no appointment exists without its commission.
        """
        start = normalize_timestamp(start_time)

        try:
            service = self.repo.get_service(self.db, service_id)
            if not service:
                raise NotFoundError("Service not found")

            end = compute_end_time(start, service.duration_min)
            charged_price = resolve_charged_price(service.price, price_override)
            commission_amount = quantize_money(
                compute_commission(charged_price, service.manicurist_commission_rate)
            )

            manicurist = self.repo.lock_manicurist(self.db, manicurist_id)
            if not manicurist or manicurist.role_id != Role.MANICURIST.value:
                raise ValidationError("User is not a manicurist or does not exist")

            if client_id is not None and not self.repo.get_user(self.db, client_id):
                raise ValidationError("Client does not exist")

            if walkin is None and has_conflict(self.db, manicurist_id, start, end):
                logger.warning(
                    f"⚠️ Booking rejected: manicurist {manicurist_id} busy {start.isoformat()} - {end.isoformat()}"
                )
                raise ConflictError()

            appointment = self.repo.add_appointment(
                self.db,
                client_id=client_id,
                manicurist_id=manicurist_id,
                service_id=service.id,
                start_time=start,
                end_time=end,
                status=(
                    AppointmentStatus.COMPLETED.value if walkin else AppointmentStatus.SCHEDULED.value
                ),
                is_walkin=walkin is not None,
                client_name_walkin=walkin.client_name if walkin else None,
                client_comments=client_comments,
            )

            commission_data = {
                "appointment_id": appointment.id,
                "manicurist_id": manicurist_id,
                "service_price": charged_price,
                "commission_amount": commission_amount,
            }
            if walkin:
                # Walk-in commissions wait for a manual payment step
                commission_data["is_paid"] = False
            self.repo.add_commission(self.db, **commission_data)

            self.db.commit()
        except SalonError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create appointment for manicurist {manicurist_id}: {e}")
            raise InternalError("Could not save the appointment") from e

        self.db.refresh(appointment)
        logger.info(
            f"✅ {'Walk-in' if walkin else 'Appointment'} {appointment.id} created: manicurist={manicurist_id} "
            f"service={service_id} {start.isoformat()} - {end.isoformat()} commission={commission_amount}"
        )
        return appointment

    def check_availability(self, manicurist_id: int, service_id: int, start_time: datetime) -> dict:
        """Read-only preview of whether a booking would conflict"""
        start = normalize_timestamp(start_time)
        service = self.repo.get_service(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        end = compute_end_time(start, service.duration_min)
        return {
            "available": not has_conflict(self.db, manicurist_id, start, end),
            "manicurist_id": manicurist_id,
            "service_id": service_id,
            "start_time": start,
            "end_time": end,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.repo.get_appointment(self.db, appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    @staticmethod
    def _transition(appointment: Appointment, new_status: AppointmentStatus) -> bool:
        """Apply a status change; returns False when it is already in that state"""
        current = AppointmentStatus(appointment.status)
        if current is new_status:
            return False
        if new_status not in ALLOWED_TRANSITIONS[current]:
            raise ValidationError(
                f"Cannot change an appointment from {current.value} to {new_status.value}"
            )
        appointment.status = new_status.value
        return True

    def _commit(self, action: str, appointment_id: int) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to {action} appointment {appointment_id}: {e}")
            raise InternalError(f"Could not {action} the appointment") from e

    def cancel(self, appointment_id: int, actor: Actor) -> Appointment:
        """
        Cancel an appointment. The commission row is kept as the historical record.
        """
        appointment = self.get_appointment(appointment_id)

        if actor.user_id not in (appointment.client_id, appointment.manicurist_id) and not actor.is_admin:
            logger.warning(f"⚠️ User {actor.user_id} tried to cancel appointment {appointment_id}")
            raise ForbiddenError("You do not have permission to cancel this appointment")

        if self._transition(appointment, AppointmentStatus.CANCELLED):
            self._commit("cancel", appointment_id)
            logger.info(f"🚫 Appointment {appointment_id} cancelled by user {actor.user_id}")
        return appointment

    def update_status(self, appointment_id: int, new_status: str, actor: Actor) -> Appointment:
        """Status change by the assigned manicurist or an administrator; commission untouched"""
        status = parse_status(new_status)
        appointment = self.get_appointment(appointment_id)

        if appointment.manicurist_id != actor.user_id and not actor.is_admin:
            logger.warning(f"⚠️ User {actor.user_id} tried to update status of appointment {appointment_id}")
            raise ForbiddenError("You do not have permission to update this appointment")

        if self._transition(appointment, status):
            self._commit("update", appointment_id)
            logger.info(f"🔄 Appointment {appointment_id} set to {status.value} by user {actor.user_id}")
        return appointment

    def reschedule(self, appointment_id: int, new_start: datetime, actor: Actor) -> Appointment:
        """Move a scheduled appointment; its own current slot never counts as a conflict"""
        start = normalize_timestamp(new_start)
        appointment = self.get_appointment(appointment_id)

        if actor.user_id not in (appointment.client_id, appointment.manicurist_id) and not actor.is_admin:
            raise ForbiddenError("You do not have permission to reschedule this appointment")
        if appointment.status != AppointmentStatus.SCHEDULED.value:
            raise ValidationError("Only scheduled appointments can be rescheduled")

        try:
            self.repo.lock_manicurist(self.db, appointment.manicurist_id)
            end = compute_end_time(start, appointment.service.duration_min)
            if has_conflict(
                self.db, appointment.manicurist_id, start, end, excluding_appointment_id=appointment.id
            ):
                raise ConflictError()
            appointment.start_time = start
            appointment.end_time = end
            self.db.commit()
        except SalonError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to reschedule appointment {appointment_id}: {e}")
            raise InternalError("Could not reschedule the appointment") from e

        logger.info(f"📅 Appointment {appointment_id} moved to {start.isoformat()} by user {actor.user_id}")
        return appointment

    def delete(self, appointment_id: int) -> None:
        """Remove an appointment together with its commission"""
        appointment = self.get_appointment(appointment_id)
        try:
            self.repo.delete_appointment(self.db, appointment)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete appointment {appointment_id}: {e}")
            raise InternalError("Could not delete the appointment") from e
        logger.info(f"🗑️ Appointment {appointment_id} deleted with its commission")

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def list_for_client(self, client_id: int) -> list[Appointment]:
        return self.repo.list_for_client(self.db, client_id)

    def list_for_manicurist(self, manicurist_id: int) -> list[Appointment]:
        return self.repo.list_for_manicurist(self.db, manicurist_id)

    def list_all(self) -> list[Appointment]:
        return self.repo.list_all(self.db)
