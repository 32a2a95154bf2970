"""Appointment repository - Database operations for appointments and their commissions"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, Commission, Service, User


class AppointmentRepository:
    """
    Repository for appointment database operations.

    Write methods only flush; the service decides when the unit of work commits.
    """

    @staticmethod
    def get_service(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def lock_manicurist(db: Session, manicurist_id: int) -> Optional[User]:
        """
        Row-lock the manicurist so concurrent bookings for the same person
        serialize between the availability check and the insert.
        """
        return db.query(User).filter(User.id == manicurist_id).with_for_update().first()

    @staticmethod
    def get_appointment(db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def add_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.flush()
        return appointment

    @staticmethod
    def add_commission(db: Session, **commission_data) -> Commission:
        commission = Commission(**commission_data)
        db.add(commission)
        db.flush()
        return commission

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        """Delete the commission first, then the appointment (FK order)"""
        if appointment.commission is not None:
            db.delete(appointment.commission)
        db.delete(appointment)
        db.flush()

    @staticmethod
    def _with_details(db: Session):
        return db.query(Appointment).options(
            joinedload(Appointment.service),
            joinedload(Appointment.client),
            joinedload(Appointment.manicurist),
            joinedload(Appointment.commission),
        )

    @classmethod
    def list_for_client(cls, db: Session, client_id: int) -> list[Appointment]:
        return (
            cls._with_details(db)
            .filter(Appointment.client_id == client_id)
            .order_by(Appointment.start_time.desc())
            .all()
        )

    @classmethod
    def list_for_manicurist(cls, db: Session, manicurist_id: int) -> list[Appointment]:
        """Booked appointments only; walk-ins are listed through the works endpoints"""
        return (
            cls._with_details(db)
            .filter(Appointment.manicurist_id == manicurist_id, Appointment.is_walkin.is_(False))
            .order_by(Appointment.start_time.desc())
            .all()
        )

    @classmethod
    def list_all(cls, db: Session) -> list[Appointment]:
        return (
            cls._with_details(db)
            .filter(Appointment.is_walkin.is_(False))
            .order_by(Appointment.start_time.desc())
            .all()
        )
