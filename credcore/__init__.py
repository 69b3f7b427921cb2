"""
credcore - Credential management core

Registers accounts, authenticates returning users and issues/verifies
bearer tokens for a request layer that lives elsewhere.

CHANGELOG:
[2026-10-18 v0.1.0] Initial release
  - Credential validation rules
  - Account registration with race-safe uniqueness
  - Login with bcrypt verification and one-hour JWTs
  - Bearer token guard
  - Memory, JSON and SQLite account stores

ARCHITECTURE:
- core: configuration, constants, CredentialService facade
- security: validator, registrar, session issuer, token guard
- persistence: UserStore implementations and audit trail

SECURITY NOTES:
- Passwords hashed with bcrypt, never logged
- Unknown user and wrong password are indistinguishable to callers
- Missing signing secret is a loud CONFIGURATION_ERROR
"""

__version__ = "0.1.0"

from .core.config import AuthConfig, ConfigError
from .core.credential_service import CredentialService
from .security.results import (
    Result,
    Identity,
    LoginSession,
    ValidationErrorKind,
    RegistrationErrorKind,
    AuthErrorKind,
)
from .persistence.models import Account
from .persistence.user_store import UserStore, UserStoreError, UniqueViolationError

__all__ = [
    "AuthConfig",
    "ConfigError",
    "CredentialService",
    "Result",
    "Identity",
    "LoginSession",
    "ValidationErrorKind",
    "RegistrationErrorKind",
    "AuthErrorKind",
    "Account",
    "UserStore",
    "UserStoreError",
    "UniqueViolationError",
]
