"""Configuration for the appointment booking service.

Business hours live here - modify as needed without touching code.
Deployment settings are read from the environment (.env supported).
"""
import os
from dotenv import load_dotenv

load_dotenv()

OPERATING_HOURS = {
    "days": ["monday", "tuesday", "wednesday", "thursday", "friday"],
    "start_time": "09:00",
    "end_time": "17:00",
    "slot_duration_minutes": 30,
}

# Field rules
MAX_REASON_LENGTH = 200
PHONE_DIGITS = 10

# Storage
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///appointments.db")
STORAGE_TIMEOUT_SECONDS = float(os.getenv("STORAGE_TIMEOUT_SECONDS", "10"))

# API
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
API_PORT = int(os.getenv("PORT", "8000"))
