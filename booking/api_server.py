"""FastAPI server for appointment slot booking.

Features:
- CORS middleware for the booking frontend
- Request IDs on every response and log line
- Error taxonomy mapped to distinct status codes and error codes
- Health check endpoint
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
from fastapi import FastAPI, Request, status, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from booking import config
from booking.api.dependencies import get_booking_service, get_now, close_store
from booking.api.models import AppointmentCreate, ErrorResponse
from booking.booking_service import BookingService
from booking.errors import BookingError
from booking.logging_config import setup_structured_logging, get_logger, RequestIDMiddleware
from booking.slots import TimeOfDay

setup_structured_logging(log_level=config.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown logic."""
    logger.info("server_starting")

    yield

    close_store()
    logger.info("server_stopped")


app = FastAPI(
    title="Appointment Booking API",
    description="Book, list and cancel half-hour appointment slots",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestIDMiddleware)


def error_response(status_code: int, error: str, detail: Optional[str], code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            status_code=status_code,
            error=error,
            detail=detail,
            code=code
        ).model_dump()
    )


# Global exception handlers
@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    """Render validation, not-found, conflict and storage failures."""
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, code=exc.code, error=exc.message)
    else:
        logger.info("request_rejected", path=request.url.path, code=exc.code, error=exc.message)
    return error_response(exc.status_code, exc.message, exc.detail, exc.code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors like any other validation failure."""
    logger.info("request_rejected", path=request.url.path, code="VALIDATION_ERROR")
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        str(exc.errors()),
        "VALIDATION_ERROR"
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected exceptions."""
    logger.error("unexpected_error", path=request.url.path, error=str(exc), exc_info=True)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        "An unexpected error occurred. Please try again later.",
        "INTERNAL_ERROR"
    )


@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint for load balancers."""
    return {
        "status": "healthy",
        "service": "appointment-booking-api",
        "version": "1.0.0"
    }


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API info."""
    return {
        "message": "Appointment Booking API",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/api/appointments", tags=["Appointments"])
def list_appointments(service: BookingService = Depends(get_booking_service)):
    """List all appointments ordered by date and time."""
    appointments = service.list_appointments()
    return {
        "status_code": status.HTTP_200_OK,
        "success": True,
        "data": appointments,
        "count": len(appointments)
    }


@app.get("/api/appointments/available", tags=["Appointments"])
def available_slots(
    date: Optional[str] = None,
    period: TimeOfDay = TimeOfDay.ANY,
    service: BookingService = Depends(get_booking_service),
    now: datetime = Depends(get_now)
):
    """
    GET /api/appointments/available?date=2025-01-06&period=morning

    Past dates succeed with empty lists; weekends are rejected.
    """
    availability = service.availability(date, now, period)
    response = {"status_code": status.HTTP_200_OK, "success": True}
    response.update(availability.model_dump(exclude_none=True))
    return response


@app.post("/api/appointments", tags=["Appointments"], status_code=status.HTTP_201_CREATED)
def create_appointment(
    request: AppointmentCreate,
    service: BookingService = Depends(get_booking_service),
    now: datetime = Depends(get_now)
):
    """
    Book a slot.

    Raises:
        400: Invalid field, weekend, past slot or off-grid time
        409: Slot already booked
        503: Storage unavailable
    """
    appointment = service.create(request, now)
    return {
        "status_code": status.HTTP_201_CREATED,
        "success": True,
        "message": "Appointment created successfully",
        "data": appointment
    }


@app.delete("/api/appointments/{appointment_id}", tags=["Appointments"])
def cancel_appointment(
    appointment_id: str,
    service: BookingService = Depends(get_booking_service)
):
    """Cancel (delete) an appointment by id."""
    appointment = service.cancel(appointment_id)
    return {
        "status_code": status.HTTP_200_OK,
        "success": True,
        "message": "Appointment cancelled successfully",
        "data": appointment
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.API_PORT)
