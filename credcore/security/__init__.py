"""
Security module - validation, registration, login and token checks

Provides:
- validate_registration / validate_login: input syntax rules
- AccountRegistrar: account creation with uniqueness handling
- SessionIssuer: credential verification and token issuance
- TokenGuard: bearer token verification
- Result and error kind enums
"""

from .results import (
    Result,
    Identity,
    LoginSession,
    ValidationErrorKind,
    RegistrationErrorKind,
    AuthErrorKind,
)
from .validation import ValidationResult, validate_registration, validate_login
from .registrar import AccountRegistrar
from .session_issuer import SessionIssuer
from .token_guard import TokenGuard, extract_bearer_token

__all__ = [
    "Result",
    "Identity",
    "LoginSession",
    "ValidationErrorKind",
    "RegistrationErrorKind",
    "AuthErrorKind",
    "ValidationResult",
    "validate_registration",
    "validate_login",
    "AccountRegistrar",
    "SessionIssuer",
    "TokenGuard",
    "extract_bearer_token",
]
