"""Test appointment field rules."""
import pytest
from datetime import date, datetime
from booking.errors import ValidationError
from booking.input_validator import InputValidator


class TestPhone:

    @pytest.mark.parametrize("phone", [
        "5551234567",
        "555-123-4567",
        "(555) 123-4567",
        "+555 123 4567",
    ])
    def test_ten_digits_after_separators_accepted(self, phone):
        assert InputValidator.clean_phone(phone) == phone

    @pytest.mark.parametrize("phone", [
        "12345",
        "555-123-45678",
        "555.123.4567",
        "555-abc-4567",
        "\uff15\uff15\uff15\uff11\uff12\uff13\uff14\uff15\uff16\uff17",
        "555\t123\n4567",
    ])
    def test_invalid_phone_rejected(self, phone):
        with pytest.raises(ValidationError):
            InputValidator.clean_phone(phone)

    @pytest.mark.parametrize("phone", [None, "", "   "])
    def test_missing_phone_is_none(self, phone):
        assert InputValidator.clean_phone(phone) is None


class TestEmail:

    def test_email_lowercased_and_trimmed(self):
        assert InputValidator.clean_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"

    @pytest.mark.parametrize("email", [None, "", "jane", "jane@", "jane@example", "@example.com"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValidationError) as exc_info:
            InputValidator.clean_email(email)
        assert exc_info.value.code == "VALIDATION_ERROR"


class TestNameAndReason:

    def test_name_trimmed(self):
        assert InputValidator.clean_name("  Jane Doe ") == "Jane Doe"

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name_rejected(self, name):
        with pytest.raises(ValidationError):
            InputValidator.clean_name(name)

    def test_reason_at_limit_accepted(self):
        assert InputValidator.clean_reason("x" * 200) == "x" * 200

    def test_reason_over_limit_rejected(self):
        with pytest.raises(ValidationError):
            InputValidator.clean_reason("x" * 201)

    def test_blank_reason_is_none(self):
        assert InputValidator.clean_reason("  ") is None


class TestParseDate:

    def test_iso_string(self):
        assert InputValidator.parse_date("2025-01-06") == date(2025, 1, 6)

    def test_date_and_datetime_passthrough(self):
        assert InputValidator.parse_date(date(2025, 1, 6)) == date(2025, 1, 6)
        assert InputValidator.parse_date(datetime(2025, 1, 6, 9, 30)) == date(2025, 1, 6)

    def test_missing_date(self):
        with pytest.raises(ValidationError) as exc_info:
            InputValidator.parse_date(None)
        assert "required" in exc_info.value.message

    @pytest.mark.parametrize("value", ["2025-02-30", "06/01/2025", "tomorrow", "2025-1-6", "20250106"])
    def test_not_a_calendar_date(self, value):
        with pytest.raises(ValidationError):
            InputValidator.parse_date(value)


class TestAppointmentId:

    def test_hex_id_accepted(self):
        appointment_id = "0123456789abcdef0123456789abcdef"
        assert InputValidator.validate_appointment_id(appointment_id) == appointment_id

    @pytest.mark.parametrize("appointment_id", ["", "abc", "0123456789ABCDEF0123456789ABCDEF", "z" * 32])
    def test_malformed_id_rejected(self, appointment_id):
        with pytest.raises(ValidationError):
            InputValidator.validate_appointment_id(appointment_id)
