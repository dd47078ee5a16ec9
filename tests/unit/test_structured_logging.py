"""Tests for structured logging."""
import json
import logging
from datetime import datetime
from fastapi import FastAPI
from fastapi.testclient import TestClient
from booking.logging_config import (
    RequestIDMiddleware,
    generate_request_id,
    get_logger,
    setup_structured_logging,
)
from booking.api.dependencies import get_booking_service, get_now
from booking.api_server import app
from booking.booking_service import BookingService


class TestStructuredLogging:
    """Test structured logging with request IDs."""

    def test_setup_configures_structlog(self):
        """Should configure structlog processors."""
        setup_structured_logging(log_level="INFO")
        logger = get_logger(__name__)

        assert hasattr(logger, 'info')
        assert hasattr(logger, 'error')
        assert hasattr(logger, 'warning')

    def test_request_id_in_endpoint_event_lines(self, caplog, store):
        """Events logged while handling a request carry that request's id."""
        app.dependency_overrides[get_booking_service] = lambda: BookingService(store)
        app.dependency_overrides[get_now] = lambda: datetime(2025, 1, 3, 8, 0)
        try:
            with caplog.at_level(logging.INFO):
                response = TestClient(app).post("/api/appointments", json={
                    "date": "2025-01-06",
                    "time": "09:00",
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                })
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 201
        events = [
            json.loads(record.getMessage())
            for record in caplog.records
            if record.name == "booking.booking_service"
        ]
        created = next(e for e in events if e["event"] == "appointment_created")
        assert created["request_id"] == response.headers["X-Request-ID"]
        assert created["appointment_id"] == response.json()["data"]["id"]

    def test_generate_request_id_format(self):
        """Should generate request IDs with correct format."""
        request_id = generate_request_id()

        assert request_id.startswith("req-")
        assert len(request_id) == 16  # "req-" (4) + 12 hex chars
        assert request_id != generate_request_id()

    def test_request_id_middleware_adds_header(self):
        """Should add X-Request-ID header to responses."""
        app = FastAPI()

        @app.get('/test')
        def test_route():
            return {"ok": True}

        app.add_middleware(RequestIDMiddleware)

        with TestClient(app) as client:
            first = client.get('/test')
            second = client.get('/test')

        assert first.headers['X-Request-ID'].startswith('req-')
        assert first.headers['X-Request-ID'] != second.headers['X-Request-ID']
