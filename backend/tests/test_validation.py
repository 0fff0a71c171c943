import pytest

from jobseeker.utils.formatting import format_date, share_message
from jobseeker.utils.validation import (
    is_valid_email,
    is_valid_password,
    is_valid_phone,
    validate_login_form,
    validate_signup_form,
)


class TestFieldValidators:
    @pytest.mark.parametrize("email", ["a@b.com", "nimal.perera@mail.lk"])
    def test_valid_email(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["", "plain", "a@b", "a b@c.com", "@b.com"])
    def test_invalid_email(self, email):
        assert not is_valid_email(email)

    def test_password_length(self):
        assert is_valid_password("abcdef")
        assert not is_valid_password("abcde")

    @pytest.mark.parametrize("phone", ["0771234567", "+94771234567", "077 123 4567"])
    def test_valid_phone(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["771234567", "+9477123456", "07712345678", "07712a4567"])
    def test_invalid_phone(self, phone):
        assert not is_valid_phone(phone)


class TestForms:
    def test_valid_signup(self):
        assert validate_signup_form("Amal", "a@b.com", "0771234567", "abcdef", "abcdef") == {}

    def test_short_password(self):
        errors = validate_signup_form("Amal", "a@b.com", "0771234567", "abc", "abc")
        assert errors == {"password": "Password must be at least 6 characters"}

    def test_mismatched_confirmation(self):
        errors = validate_signup_form("Amal", "a@b.com", "0771234567", "abcdef", "abcdeg")
        assert errors["confirm_password"] == "Passwords do not match"

    def test_every_field_reported(self):
        errors = validate_signup_form("  ", "bad", "123", "", "")
        assert set(errors) == {"name", "email", "phone", "password", "confirm_password"}

    def test_login(self):
        assert validate_login_form("a@b.com", "abcdef") == {}
        assert validate_login_form("", "") == {
            "email": "Email is required",
            "password": "Password is required",
        }


class TestFormatting:
    def test_format_date(self):
        assert format_date("2025-01-05T10:00:00+00:00") == "Jan 5, 2025"

    def test_share_message(self):
        assert share_message("Software Engineer", "Acme", "Colombo") == (
            "Check out this job: Software Engineer at Acme in Colombo. Download JobSeeker app to apply!"
        )
