"""
Form validation for the account screens.

Everything here runs locally, before any call to the identity provider, and
returns per-field error messages keyed the way the sign-up and login forms
name their inputs.
"""
import re

from jobseeker.config import settings

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Sri Lankan numbers: +94 or 0 followed by nine digits
PHONE_RE = re.compile(r"^(\+94|0)[0-9]{9}$")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def is_valid_password(password: str) -> bool:
    return len(password) >= settings.min_password_length


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(re.sub(r"\s", "", phone)))


def _check_email(email: str, errors: dict[str, str]) -> None:
    if not email.strip():
        errors["email"] = "Email is required"
    elif not is_valid_email(email.strip()):
        errors["email"] = "Invalid email format"


def _check_password(password: str, errors: dict[str, str]) -> None:
    if not password:
        errors["password"] = "Password is required"
    elif not is_valid_password(password):
        errors["password"] = f"Password must be at least {settings.min_password_length} characters"


def validate_signup_form(
    name: str,
    email: str,
    phone: str,
    password: str,
    confirm_password: str,
) -> dict[str, str]:
    """Return field -> message for every invalid sign-up field (empty when valid)."""
    errors: dict[str, str] = {}
    if not name.strip():
        errors["name"] = "Name is required"
    _check_email(email, errors)
    if not phone.strip():
        errors["phone"] = "Phone number is required"
    elif not is_valid_phone(phone):
        errors["phone"] = "Invalid phone number"
    _check_password(password, errors)
    if not confirm_password:
        errors["confirm_password"] = "Please confirm your password"
    elif password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"
    return errors


def validate_login_form(email: str, password: str) -> dict[str, str]:
    errors: dict[str, str] = {}
    _check_email(email, errors)
    _check_password(password, errors)
    return errors
