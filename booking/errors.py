"""Booking error taxonomy.

Every failure a caller can see is one of these classes. Each carries a
stable ``code`` and the HTTP status it maps to, so the API layer never
has to parse messages to tell them apart.
"""


class BookingError(Exception):
    """Base class for all booking failures."""

    code = "BOOKING_ERROR"
    status_code = 500

    def __init__(self, message: str, detail: str = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(BookingError):
    """Malformed input or a business rule knowable without storage."""

    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(BookingError):
    """Raised when an appointment id does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class ConflictError(BookingError):
    """Raised when the (date, time) slot is already booked."""

    code = "CONFLICT"
    status_code = 409


class StorageError(BookingError):
    """Persistence layer failure unrelated to business rules. Safe to retry."""

    code = "STORAGE_ERROR"
    status_code = 503
