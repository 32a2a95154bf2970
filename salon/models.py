import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Role(enum.IntEnum):
    """Closed set of account roles, persisted as users.role_id"""

    ADMIN = 1
    MANICURIST = 2
    CLIENT = 3


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "Agendada"
    COMPLETED = "Completada"
    CANCELLED = "Cancelada"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, nullable=False, default=Role.CLIENT.value, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone_number = Column(String(30), nullable=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    @property
    def role(self) -> Role:
        return Role(self.role_id)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Service(Base):
    """Catalog entry a manicurist can perform"""

    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("duration_min > 0", name="ck_services_duration_positive"),
        CheckConstraint(
            "manicurist_commission_rate >= 0 AND manicurist_commission_rate <= 100",
            name="ck_services_commission_rate_range",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    duration_min = Column(Integer, nullable=False)
    manicurist_commission_rate = Column(Numeric(5, 2), nullable=False)  # percentage 0-100
    created_at = Column(DateTime, server_default=func.now())

    appointments = relationship("Appointment", back_populates="service")


class Appointment(Base):
    """Booked appointment or recorded walk-in work"""

    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_appointments_end_after_start"),
        Index("ix_appointments_manicurist_start", "manicurist_id", "start_time"),
    )

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("users.id"), nullable=True)  # NULL for walk-ins
    manicurist_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(
        String(20), nullable=False, default=AppointmentStatus.SCHEDULED.value, index=True
    )
    is_walkin = Column(Boolean, nullable=False, default=False)
    client_name_walkin = Column(String(150), nullable=True)
    client_comments = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    client = relationship("User", foreign_keys=[client_id])
    manicurist = relationship("User", foreign_keys=[manicurist_id])
    service = relationship("Service", back_populates="appointments")
    commission = relationship("Commission", back_populates="appointment", uselist=False)


class Commission(Base):
    """Amount owed to the manicurist for one appointment, fixed at the charged price"""

    __tablename__ = "commissions"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), unique=True, nullable=False)
    manicurist_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    service_price = Column(Numeric(12, 2), nullable=False)  # price actually charged
    commission_amount = Column(Numeric(12, 2), nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    payment_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    appointment = relationship("Appointment", back_populates="commission")
