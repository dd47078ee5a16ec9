"""Booking operations: availability, create, cancel, list.

Create runs a fixed sequence of gates, first failure wins:
fields -> date -> weekday -> past -> slot grid -> pre-check -> insert.
The pre-check only gives a friendlier error in the non-racing case; the
store's unique constraint is what actually prevents double-booking.
"""
from datetime import date, datetime
from typing import List, Optional

from booking.api.models import AppointmentCreate, AppointmentRecord, Availability
from booking.errors import ConflictError, ValidationError
from booking.input_validator import InputValidator
from booking.logging_config import get_logger
from booking.slots import SlotPolicy, TimeOfDay, get_default_policy, parse_time_label
from booking.store import AppointmentStore

logger = get_logger(__name__)

WEEKDAYS_ONLY_MESSAGE = "Appointments are only available on weekdays (Mon-Fri)"


class BookingService:
    """Coordinates the slot policy with the appointment store."""

    def __init__(self, store: AppointmentStore, policy: Optional[SlotPolicy] = None):
        self.store = store
        self.policy = policy or get_default_policy()

    def availability(
        self,
        day,
        now: datetime,
        period: TimeOfDay = TimeOfDay.ANY
    ) -> Availability:
        """
        Compute bookable and booked labels for a day.

        A past date is not an error: it yields empty lists and a message.

        Args:
            day: YYYY-MM-DD string or date
            now: Current instant
            period: Optional time-of-day filter for the available labels

        Raises:
            ValidationError: Missing/invalid date, or not a bookable weekday
        """
        day = InputValidator.parse_date(day)

        if not self.policy.is_bookable_weekday(day):
            raise ValidationError(WEEKDAYS_ONLY_MESSAGE)

        if day < now.date():
            return Availability(date=day, message="This date is in the past")

        booked = self.booked_times(day)
        available = self.policy.available_slots(day, booked, now)
        available = self.policy.filter_by_time_of_day(available, period)

        return Availability(
            date=day,
            available_slots=available,
            booked_slots=booked,
            total_available=len(available),
            total_booked=len(booked),
        )

    def create(self, candidate: AppointmentCreate, now: datetime) -> AppointmentRecord:
        """
        Book a slot.

        Args:
            candidate: Requested appointment fields
            now: Current instant

        Returns:
            The stored appointment

        Raises:
            ValidationError: Bad field, non-weekday, past slot or off-grid time
            ConflictError: Slot already taken (pre-check or constraint)
            StorageError: Persistence failure
        """
        if not (candidate.date or "").strip():
            raise ValidationError("Date is required")
        time_label = (candidate.time or "").strip()
        if not time_label:
            raise ValidationError("Time is required")

        name = InputValidator.clean_name(candidate.name)
        email = InputValidator.clean_email(candidate.email)
        phone = InputValidator.clean_phone(candidate.phone)
        reason = InputValidator.clean_reason(candidate.reason)

        day = InputValidator.parse_date(candidate.date)

        if not self.policy.is_bookable_weekday(day):
            raise ValidationError(WEEKDAYS_ONLY_MESSAGE)

        # Unparsable labels fall through to the grid check
        if parse_time_label(time_label) and self.policy.is_past(day, time_label, now):
            raise ValidationError("Cannot book appointments in the past")

        if time_label not in self.policy.business_slots():
            raise ValidationError(
                "Invalid time slot",
                detail=(
                    f"Business hours are {self.policy.start_time} - {self.policy.end_time} "
                    f"in {self.policy.slot_duration_minutes}-minute increments"
                )
            )

        if self.store.find_by_slot(day, time_label):
            logger.info("slot_conflict_on_precheck", date=day.isoformat(), time=time_label)
            raise ConflictError("This time slot is already booked")

        appointment = self.store.insert(
            day=day,
            time_label=time_label,
            name=name,
            email=email,
            phone=phone,
            reason=reason,
        )
        logger.info(
            "appointment_created",
            appointment_id=appointment.id,
            date=day.isoformat(),
            time=time_label,
        )
        return appointment

    def cancel(self, appointment_id: str) -> AppointmentRecord:
        """
        Cancel (delete) an appointment.

        Raises:
            ValidationError: Malformed id
            NotFoundError: No appointment with this id
        """
        appointment_id = InputValidator.validate_appointment_id(appointment_id)
        removed = self.store.delete(appointment_id)
        logger.info(
            "appointment_cancelled",
            appointment_id=removed.id,
            date=removed.date.isoformat(),
            time=removed.time,
        )
        return removed

    def list_appointments(self) -> List[AppointmentRecord]:
        """All appointments in (date, time) order."""
        return self.store.list_all()

    def booked_times(self, day: date) -> List[str]:
        """Labels already taken on a day."""
        return [appointment.time for appointment in self.store.list_for_day(day)]
