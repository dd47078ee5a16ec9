"""Shared test fixtures."""
import pytest
from datetime import date, datetime
from booking.api.models import AppointmentCreate
from booking.booking_service import BookingService
from booking.store import AppointmentStore


MONDAY = date(2025, 1, 6)
SATURDAY = date(2025, 1, 4)
# Friday before MONDAY, early morning
NOW = datetime(2025, 1, 3, 8, 0)


@pytest.fixture
def now() -> datetime:
    """Pinned clock for time-sensitive operations."""
    return NOW


@pytest.fixture
def store(tmp_path):
    """AppointmentStore backed by a throwaway SQLite file."""
    store = AppointmentStore(database_url=f"sqlite:///{tmp_path / 'appointments.db'}")
    yield store
    store.close()


@pytest.fixture
def booking_service(store) -> BookingService:
    return BookingService(store)


@pytest.fixture
def make_request():
    """Factory for appointment requests with valid defaults."""
    def _create(**overrides) -> AppointmentCreate:
        data = {
            "date": MONDAY.isoformat(),
            "time": "09:00",
            "name": "Jane Doe",
            "email": "jane@example.com",
        }
        data.update(overrides)
        return AppointmentCreate(**data)
    return _create
