"""Appointment persistence.

The (date, time) uniqueness invariant is a UNIQUE constraint on the
appointments table. Callers may pre-check with find_by_slot(), but only the
constraint decides who wins when two inserts race for the same slot.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy import create_engine, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from booking import config
from booking.api.database_models import Base, Appointment, new_appointment_id, utc_now
from booking.api.models import AppointmentRecord
from booking.errors import ConflictError, NotFoundError, StorageError
from booking.logging_config import get_logger

logger = get_logger(__name__)

SLOT_CONSTRAINT = "uq_appointments_date_time"
# SQLite reports the columns instead of the constraint name
SLOT_CONSTRAINT_COLUMNS = "appointments.date, appointments.time"


def is_slot_conflict(exc: IntegrityError) -> bool:
    """True iff the violated constraint is the (date, time) uniqueness rule."""
    message = str(exc.orig)
    return SLOT_CONSTRAINT in message or SLOT_CONSTRAINT_COLUMNS in message


class AppointmentStore:
    """
    Repository for appointment records.

    Responsibilities:
    - Insert appointments, reporting constraint violations as ConflictError
    - Look up by slot, by day, or list everything in (date, time) order
    - Delete by id (the only removal path)

    Every database failure that is not a business-rule violation is raised
    as StorageError.
    """

    def __init__(self, database_url: str, timeout: Optional[float] = None):
        """
        Initialize store with database connection.

        Args:
            database_url: SQLAlchemy connection string
            timeout: Seconds to wait for a connection / busy database
        """
        timeout = config.STORAGE_TIMEOUT_SECONDS if timeout is None else timeout

        if database_url.startswith("sqlite"):
            engine_kwargs = {
                "connect_args": {"check_same_thread": False, "timeout": timeout}
            }
        else:
            engine_kwargs = {"pool_timeout": timeout}

        self.engine = create_engine(database_url, pool_pre_ping=True, **engine_kwargs)
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

    def _storage_failure(self, operation: str, exc: Exception) -> StorageError:
        logger.error("storage_failure", operation=operation, error=str(exc))
        return StorageError(f"Failed to {operation}", detail=str(exc))

    def find_by_slot(self, day: date, time_label: str) -> Optional[AppointmentRecord]:
        """
        Get the appointment occupying a slot, if any.

        Args:
            day: Calendar date
            time_label: Slot label (HH:MM)

        Returns:
            AppointmentRecord or None
        """
        try:
            with self.SessionLocal() as db:
                row = db.query(Appointment).filter(
                    Appointment.date == day,
                    Appointment.time == time_label
                ).first()
                return AppointmentRecord.model_validate(row) if row else None
        except SQLAlchemyError as e:
            raise self._storage_failure("check slot", e) from e

    def insert(
        self,
        day: date,
        time_label: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
        reason: Optional[str] = None
    ) -> AppointmentRecord:
        """
        Persist a new appointment.

        Returns:
            The stored record with its generated id and created_at

        Raises:
            ConflictError: If the database already holds this (date, time)
            StorageError: On any other database failure
        """
        try:
            with self.SessionLocal() as db:
                row = Appointment(
                    id=new_appointment_id(),
                    date=day,
                    time=time_label,
                    name=name,
                    email=email,
                    phone=phone,
                    reason=reason,
                    created_at=utc_now(),
                )
                db.add(row)
                db.commit()
                return AppointmentRecord.model_validate(row)
        except IntegrityError as e:
            if not is_slot_conflict(e):
                raise self._storage_failure("create appointment", e) from e
            logger.info("slot_conflict_on_insert", date=day.isoformat(), time=time_label)
            raise ConflictError("This time slot is already booked") from e
        except SQLAlchemyError as e:
            raise self._storage_failure("create appointment", e) from e

    def delete(self, appointment_id: str) -> AppointmentRecord:
        """
        Delete an appointment by id.

        Returns:
            The removed record

        Raises:
            NotFoundError: If no appointment has this id (including one
                that was just removed by a concurrent cancel)
        """
        try:
            with self.SessionLocal() as db:
                row = db.get(Appointment, appointment_id)
                if row is None:
                    raise NotFoundError("Appointment not found")

                removed = AppointmentRecord.model_validate(row)
                result = db.execute(
                    delete(Appointment).where(Appointment.id == appointment_id)
                )
                if result.rowcount == 0:
                    raise NotFoundError("Appointment not found")

                db.commit()
                return removed
        except SQLAlchemyError as e:
            raise self._storage_failure("cancel appointment", e) from e

    def list_all(self) -> List[AppointmentRecord]:
        """All appointments ordered by (date, time)."""
        try:
            with self.SessionLocal() as db:
                rows = db.query(Appointment).order_by(
                    Appointment.date, Appointment.time
                ).all()
                return [AppointmentRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch appointments", e) from e

    def list_for_day(self, day: date) -> List[AppointmentRecord]:
        """Appointments on one calendar day, ordered by time."""
        try:
            with self.SessionLocal() as db:
                rows = db.query(Appointment).filter(
                    Appointment.date == day
                ).order_by(Appointment.time).all()
                return [AppointmentRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            raise self._storage_failure("fetch available slots", e) from e

    def close(self):
        """Dispose of pooled connections."""
        self.engine.dispose()
