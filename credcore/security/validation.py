"""
Credential Validator - Syntax checks run before any I/O

Module: security.validation
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Registration rules (presence, username length/charset, email, password)
  - Login presence check

SECURITY NOTES:
- Pure functions, no logging (inputs include plaintext passwords)
- Rules applied in a fixed order, first failure wins
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..core.constants import (
    EMAIL_PATTERN,
    ERROR_MESSAGES,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    USERNAME_PATTERN,
)
from .results import AuthErrorKind, ErrorKind, ValidationErrorKind

_USERNAME_RE = re.compile(USERNAME_PATTERN)
_EMAIL_RE = re.compile(EMAIL_PATTERN)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a validation pass

    Attributes:
        valid: True if every rule passed
        error: Kind of the first failing rule
        field: Offending field name
        message: Human-readable message
    """
    valid: bool
    error: Optional[ErrorKind] = None
    field: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def passed(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def rejected(cls, error: ErrorKind, field: Optional[str] = None) -> "ValidationResult":
        return cls(
            valid=False,
            error=error,
            field=field,
            message=ERROR_MESSAGES[error.value],
        )


def validate_registration(
    username: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> ValidationResult:
    """
    Check registration input syntax

    Args:
        username: Requested username
        email: Email address
        password: Plaintext password

    Returns:
        ValidationResult (first failing rule wins)
    """
    for name, value in (("username", username), ("email", email), ("password", password)):
        if not value:
            return ValidationResult.rejected(ValidationErrorKind.MISSING_FIELD, name)

    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return ValidationResult.rejected(ValidationErrorKind.USERNAME_LENGTH, "username")

    if not _USERNAME_RE.fullmatch(username):
        return ValidationResult.rejected(ValidationErrorKind.USERNAME_CHARSET, "username")

    if not _EMAIL_RE.fullmatch(email):
        return ValidationResult.rejected(ValidationErrorKind.EMAIL_FORMAT, "email")

    if len(password) < PASSWORD_MIN_LENGTH:
        return ValidationResult.rejected(ValidationErrorKind.PASSWORD_LENGTH, "password")

    return ValidationResult.passed()


def validate_login(identifier: Optional[str], password: Optional[str]) -> ValidationResult:
    """Check that both login fields are present"""
    if not identifier:
        return ValidationResult.rejected(AuthErrorKind.MISSING_FIELD, "identifier")
    if not password:
        return ValidationResult.rejected(AuthErrorKind.MISSING_FIELD, "password")
    return ValidationResult.passed()


# ============================================================================
# Unit Tests
# ============================================================================

if __name__ == "__main__":
    import unittest

    class TestValidateRegistration(unittest.TestCase):
        """Quick self-test for the registration rules"""

        def test_valid_input(self):
            """Test well-formed input passes"""
            result = validate_registration("bob01", "bob@x.com", "longenough1")
            self.assertTrue(result.valid)

        def test_missing_field_wins(self):
            """Test missing field is reported before anything else"""
            result = validate_registration("x", "", "short")
            self.assertEqual(result.error, ValidationErrorKind.MISSING_FIELD)
            self.assertEqual(result.field, "email")

        def test_username_charset(self):
            """Test username with a dash is rejected"""
            result = validate_registration("bob-01", "bob@x.com", "longenough1")
            self.assertEqual(result.error, ValidationErrorKind.USERNAME_CHARSET)

    unittest.main()
