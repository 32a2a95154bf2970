"""Work repository - Walk-in records are appointments flagged is_walkin"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment


class WorkRepository:
    """Repository for walk-in work queries"""

    @staticmethod
    def get_work(db: Session, work_id: int) -> Optional[Appointment]:
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.service), joinedload(Appointment.commission))
            .filter(Appointment.id == work_id, Appointment.is_walkin.is_(True))
            .first()
        )

    @staticmethod
    def list_works(
        db: Session,
        manicurist_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Appointment]:
        """
        Walk-in records, newest first. Date bounds are inclusive calendar days
        on the work's start time.
        """
        query = (
            db.query(Appointment)
            .options(
                joinedload(Appointment.service),
                joinedload(Appointment.commission),
                joinedload(Appointment.manicurist),
            )
            .filter(Appointment.is_walkin.is_(True))
        )

        if manicurist_id:
            query = query.filter(Appointment.manicurist_id == manicurist_id)
        if start_date:
            query = query.filter(Appointment.start_time >= datetime.combine(start_date, time.min))
        if end_date:
            next_day = datetime.combine(end_date + timedelta(days=1), time.min)
            query = query.filter(Appointment.start_time < next_day)

        return query.order_by(Appointment.start_time.desc()).all()
