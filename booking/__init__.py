"""Appointment slot booking service."""
