"""Pydantic models for API request/response validation."""
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class AppointmentCreate(BaseModel):
    """
    Request schema for POST /api/appointments.

    Field rules (email syntax, phone digits, slot grid) are enforced by the
    booking service so every rule violation is reported the same way.
    """
    date: str = Field(..., description="Calendar date (YYYY-MM-DD)", examples=["2025-01-06"])
    time: str = Field(..., description="Slot label (HH:MM)", examples=["09:00"])
    name: str = Field(..., description="Client name", examples=["Jane Doe"])
    email: str = Field(..., description="Client email", examples=["jane@example.com"])
    phone: Optional[str] = Field(None, description="10-digit phone number", examples=["555-123-4567"])
    reason: Optional[str] = Field(None, description="Reason for visit (max 200 characters)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2025-01-06",
                "time": "09:00",
                "name": "Jane Doe",
                "email": "jane@example.com",
                "phone": "555-123-4567",
                "reason": "Annual check-up"
            }
        }
    )


class AppointmentRecord(BaseModel):
    """Stored appointment, as returned to callers."""
    id: str
    date: date
    time: str
    name: str
    email: str
    phone: Optional[str] = None
    reason: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Availability(BaseModel):
    """Bookable and booked labels for one day."""
    date: date
    available_slots: List[str] = Field(default_factory=list)
    booked_slots: List[str] = Field(default_factory=list)
    total_available: int = 0
    total_booked: int = 0
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response schema."""
    status_code: int = Field(..., description="HTTP status code")
    success: bool = Field(False, description="Always false for errors")
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    code: Optional[str] = Field(None, description="Error code")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status_code": 409,
                "success": False,
                "error": "This time slot is already booked",
                "detail": None,
                "code": "CONFLICT"
            }
        }
    )
