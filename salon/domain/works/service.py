"""Work service - Walk-in recording, price corrections and commission totals"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import Actor
from ...config import WALKIN_DEFAULT_CLIENT_NAME
from ...errors import ForbiddenError, InternalError, NotFoundError, ValidationError
from ...models import Appointment
from ..appointments import AppointmentService, WalkinDetails
from ..appointments.repository import AppointmentRepository
from ..scheduling import compute_commission, quantize_money, summarize_commissions
from .repository import WorkRepository

logger = logging.getLogger(__name__)


class WorkService:
    """Service layer for walk-in work records"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkRepository()
        self.appointments = AppointmentService(db)

    def record(
        self,
        manicurist_id: int,
        service_id: int,
        work_date: datetime,
        client_name: Optional[str] = None,
        service_price_custom: Optional[Decimal] = None,
    ) -> Appointment:
        """Store already-completed work; walk-ins never go through the availability check"""
        return self.appointments.create(
            client_id=None,
            manicurist_id=manicurist_id,
            service_id=service_id,
            start_time=work_date,
            walkin=WalkinDetails(client_name=client_name or WALKIN_DEFAULT_CLIENT_NAME),
            price_override=service_price_custom,
        )

    def get_work(self, work_id: int) -> Appointment:
        work = self.repo.get_work(self.db, work_id)
        if not work:
            raise NotFoundError("Work not found")
        return work

    def _get_owned_work(self, work_id: int, actor: Actor, action: str) -> Appointment:
        work = self.get_work(work_id)
        if work.manicurist_id != actor.user_id and not actor.is_admin:
            logger.warning(f"⚠️ User {actor.user_id} tried to {action} work {work_id}")
            raise ForbiddenError(f"You do not have permission to {action} this work")
        return work

    def update_price(self, work_id: int, actor: Actor, new_price: Decimal) -> Decimal:
        """Recompute the commission from the corrected price and the service's current rate"""
        work = self._get_owned_work(work_id, actor, "edit")
        commission = work.commission
        if commission is None:
            raise NotFoundError("Commission not found for this work")

        new_amount = quantize_money(compute_commission(new_price, work.service.manicurist_commission_rate))
        commission.service_price = new_price
        commission.commission_amount = new_amount
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update work {work_id}: {e}")
            raise InternalError("Could not update the work") from e

        logger.info(f"💰 Work {work_id} repriced to {new_price}; commission now {new_amount}")
        return commission.commission_amount

    def mark_paid(self, work_id: int) -> Appointment:
        work = self.get_work(work_id)
        commission = work.commission
        if commission is None:
            raise NotFoundError("Commission not found for this work")
        if commission.is_paid:
            return work

        commission.is_paid = True
        commission.payment_date = datetime.now(timezone.utc).replace(tzinfo=None)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to mark work {work_id} as paid: {e}")
            raise InternalError("Could not update the work") from e

        logger.info(f"✅ Commission for work {work_id} marked as paid")
        return work

    def delete(self, work_id: int, actor: Actor) -> None:
        work = self._get_owned_work(work_id, actor, "delete")
        try:
            AppointmentRepository.delete_appointment(self.db, work)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete work {work_id}: {e}")
            raise InternalError("Could not delete the work") from e
        logger.info(f"🗑️ Work {work_id} deleted by user {actor.user_id}")

    def list_works(
        self,
        manicurist_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> tuple[list[Appointment], dict]:
        """Filtered records plus aggregates computed over the same filtered set"""
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date must be on or before end_date")

        works = self.repo.list_works(self.db, manicurist_id, start_date, end_date)
        summary = summarize_commissions(w.commission for w in works)
        return works, summary
