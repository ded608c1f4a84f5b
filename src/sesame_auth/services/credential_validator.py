"""Registration input validation.

Normalizes registration input, enforces the registration rules and
produces a storage-ready record whose passwords are hashed.
"""

import re
from dataclasses import fields, replace

from sesame_auth.exceptions import ValidationError
from sesame_auth.schemas import PreparedRegistration, RegisterInput
from sesame_auth.services.password_service import PasswordHashingService

# Permissive RFC 5322 style pattern: local part of printable specials,
# dot-separated domain labels of at most 63 characters.
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$",
)
EMAIL_MIN_LENGTH = 3
EMAIL_MAX_LENGTH = 254
# Column widths of the accounts table
NAME_MAX_LENGTH = 100
USERNAME_MAX_LENGTH = 255

FIELD_MAX_LENGTHS = {
    "first_name": NAME_MAX_LENGTH,
    "last_name": NAME_MAX_LENGTH,
    "username": USERNAME_MAX_LENGTH,
}


def is_valid_email(email: str) -> bool:
    """Return True if the email has a plausible address syntax."""
    if not EMAIL_MIN_LENGTH <= len(email) <= EMAIL_MAX_LENGTH:
        return False
    return EMAIL_PATTERN.match(email) is not None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _strip(value: str) -> str:
    return value.strip() if isinstance(value, str) else value


class CredentialValidator:
    """Validates registration input and prepares it for storage.

    Checks run in a fixed order so callers always see the first
    violation: required fields, field lengths, password confirmation,
    password length, email syntax.
    """

    MAX_PASSWORD_LENGTH = 100

    def __init__(self, password_service: PasswordHashingService):
        self._password_service = password_service

    def normalize(self, registration: RegisterInput) -> RegisterInput:
        """Strip surrounding whitespace and lower-case the email.

        Passwords are left untouched.
        """
        return replace(
            registration,
            first_name=_strip(registration.first_name),
            last_name=_strip(registration.last_name),
            email=_strip(registration.email).lower()
            if isinstance(registration.email, str)
            else registration.email,
            username=_strip(registration.username),
        )

    def validate(self, registration: RegisterInput) -> None:
        """Check registration input.

        Raises
        ------
        ValidationError
            On the first rule the input violates
        """
        for field in fields(registration):
            value = getattr(registration, field.name)
            if not isinstance(value, str) or not value.strip():
                msg = f"{field.name} is required"
                raise ValidationError(msg, details={"field": field.name})

        for name, max_length in FIELD_MAX_LENGTHS.items():
            if len(getattr(registration, name)) > max_length:
                msg = f"{name} too long"
                raise ValidationError(msg, details={"field": name})

        if registration.password != registration.confirm_password:
            msg = "passwords must match"
            raise ValidationError(msg, details={"field": "confirm_password"})

        if len(registration.password) > self.MAX_PASSWORD_LENGTH:
            msg = "password too long"
            raise ValidationError(msg, details={"field": "password"})

        if not is_valid_email(registration.email):
            msg = "invalid email"
            raise ValidationError(msg, details={"field": "email"})

    def prepare_for_storage(self, registration: RegisterInput) -> PreparedRegistration:
        """Normalize, validate and hash a registration.

        Password and confirmation are hashed independently, so their
        digests differ even though the plaintexts are equal.

        Raises
        ------
        ValidationError
            If the input is invalid
        """
        normalized = self.normalize(registration)
        self.validate(normalized)

        return PreparedRegistration(
            first_name=normalized.first_name,
            last_name=normalized.last_name,
            email=normalized.email,
            username=normalized.username,
            password_hash=self._password_service.hash(normalized.password),
            confirm_password_hash=self._password_service.hash(
                normalized.confirm_password,
            ),
        )
