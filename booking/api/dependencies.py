"""FastAPI dependency injection functions."""
from datetime import datetime
from booking import config
from booking.booking_service import BookingService
from booking.store import AppointmentStore


# Initialize singletons
_store = None


def get_store() -> AppointmentStore:
    """Get or create the appointment store singleton."""
    global _store
    if _store is None:
        _store = AppointmentStore(database_url=config.DATABASE_URL)
    return _store


def close_store():
    """
    Close the global store.

    Call this during application shutdown to release pooled connections.
    """
    global _store

    if _store is not None:
        _store.close()
        _store = None


def get_booking_service() -> BookingService:
    """Booking service bound to the shared store and default slot policy."""
    return BookingService(get_store())


def get_now() -> datetime:
    """
    Current local instant for time-sensitive operations.

    Overridden in tests to pin the clock.
    """
    return datetime.now()
