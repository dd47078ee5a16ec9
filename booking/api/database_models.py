"""SQLAlchemy database models for the booking store."""
import uuid
from datetime import datetime, UTC
from sqlalchemy import Column, String, Date, DateTime, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now():
    """Get current UTC timestamp, naive, as the DateTime column stores it."""
    return datetime.now(UTC).replace(tzinfo=None)


def new_appointment_id() -> str:
    """Opaque 32-char hex identifier."""
    return uuid.uuid4().hex


class Appointment(Base):
    """Booked slot. One row per (date, time), enforced by the database."""
    __tablename__ = "appointments"
    __table_args__ = (
        UniqueConstraint("date", "time", name="uq_appointments_date_time"),
    )

    id = Column(String(32), primary_key=True, default=new_appointment_id)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(254), nullable=False)
    phone = Column(String(32), nullable=True)
    reason = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    def __repr__(self):
        return f"<Appointment(id={self.id}, date={self.date}, time={self.time})>"
