"""API package initialization."""
from booking.api.models import AppointmentCreate, AppointmentRecord, Availability, ErrorResponse

__all__ = ["AppointmentCreate", "AppointmentRecord", "Availability", "ErrorResponse"]
