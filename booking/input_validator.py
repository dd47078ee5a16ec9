"""Field rules for appointment requests."""
import re
from datetime import date, datetime
from typing import Optional

from booking import config
from booking.errors import ValidationError


class InputValidator:
    """
    Validates and normalizes appointment fields.

    Rules:
    - name: required, non-empty after trimming
    - email: required, basic address syntax, lowercased
    - phone: optional, exactly 10 digits once separators are stripped
    - reason: optional, at most 200 characters
    """

    EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
    PHONE_SEPARATORS = re.compile(r'[ \-()+]')
    PHONE_DIGITS_PATTERN = re.compile(r'[0-9]+')
    DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')
    APPOINTMENT_ID_PATTERN = re.compile(r'^[0-9a-f]{32}$')

    @staticmethod
    def clean_name(name: Optional[str]) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        return name

    @staticmethod
    def clean_email(email: Optional[str]) -> str:
        """
        Trim and lowercase an email address.

        Raises:
            ValidationError: If missing or not name@domain.tld
        """
        email = (email or "").strip().lower()
        if not email or not InputValidator.EMAIL_PATTERN.match(email):
            raise ValidationError(
                "Valid email is required",
                detail="Please provide a valid email (e.g., name@example.com)"
            )
        return email

    @staticmethod
    def clean_phone(phone: Optional[str]) -> Optional[str]:
        """
        Validate an optional phone number.

        Separators (space, -, (, ), +) are ignored when counting digits.
        The number is stored as typed (trimmed).

        Returns:
            Trimmed phone, or None when not provided

        Raises:
            ValidationError: If the remaining characters are not exactly 10 digits
        """
        phone = (phone or "").strip()
        if not phone:
            return None

        digits = InputValidator.PHONE_SEPARATORS.sub('', phone)
        if not InputValidator.PHONE_DIGITS_PATTERN.fullmatch(digits) or len(digits) != config.PHONE_DIGITS:
            raise ValidationError(
                "Invalid phone number",
                detail=f"Phone number must contain exactly {config.PHONE_DIGITS} digits"
            )
        return phone

    @staticmethod
    def clean_reason(reason: Optional[str]) -> Optional[str]:
        reason = (reason or "").strip()
        if not reason:
            return None
        if len(reason) > config.MAX_REASON_LENGTH:
            raise ValidationError(
                f"Reason must be {config.MAX_REASON_LENGTH} characters or less"
            )
        return reason

    @staticmethod
    def parse_date(value) -> date:
        """
        Parse a YYYY-MM-DD calendar date.

        Raises:
            ValidationError: If missing or not a real calendar date
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not value:
            raise ValidationError("Date parameter is required (YYYY-MM-DD)")
        value = str(value).strip()
        if not InputValidator.DATE_PATTERN.fullmatch(value):
            raise ValidationError("Invalid date format. Use YYYY-MM-DD")
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            raise ValidationError("Invalid date format. Use YYYY-MM-DD")

    @staticmethod
    def validate_appointment_id(appointment_id: str) -> str:
        """Appointment ids are 32 lowercase hex characters."""
        if not appointment_id or not InputValidator.APPOINTMENT_ID_PATTERN.match(appointment_id):
            raise ValidationError("Invalid appointment ID format")
        return appointment_id
