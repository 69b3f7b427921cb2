"""
Results - Tagged success/failure values returned by every component

Module: security.results
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Error kind enums (validation, registration, authentication)
  - Generic Result container
  - Identity and LoginSession payloads

ARCHITECTURE:
Components convert internal exceptions into a Result at their boundary.
Callers branch on ``result.ok`` and ``result.error`` instead of catching.
Only infrastructure failures (store unreachable) escape as exceptions.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar, Union

from ..core.constants import ERROR_MESSAGES, TOKEN_TYPE
from ..persistence.models import Account


class ValidationErrorKind(Enum):
    """Registration input rejected before any I/O"""
    MISSING_FIELD = "missing_field"
    USERNAME_LENGTH = "username_length"
    USERNAME_CHARSET = "username_charset"
    EMAIL_FORMAT = "email_format"
    PASSWORD_LENGTH = "password_length"


class RegistrationErrorKind(Enum):
    """Uniqueness conflicts reported by the registrar"""
    USERNAME_TAKEN = "username_taken"
    EMAIL_TAKEN = "email_taken"
    ACCOUNT_EXISTS = "account_exists"


class AuthErrorKind(Enum):
    """Login and token verification failures"""
    MISSING_FIELD = "auth_missing_field"
    INVALID_CREDENTIALS = "invalid_credentials"
    NO_TOKEN = "no_token"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    CONFIGURATION_ERROR = "configuration_error"


ErrorKind = Union[ValidationErrorKind, RegistrationErrorKind, AuthErrorKind]

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a component operation

    Exactly one of ``value`` / ``error`` is set.
    """
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: Optional[str] = None) -> "Result[T]":
        return cls(
            error=error,
            message=message or ERROR_MESSAGES.get(error.value, error.value),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Response payload for the request layer"""
        if self.ok:
            payload = self.value.to_dict() if hasattr(self.value, "to_dict") else self.value
            return {"ok": True, "result": payload}
        return {"ok": False, "error": self.error.value, "message": self.message}


@dataclass(frozen=True)
class Identity:
    """Authenticated identity decoded from a token"""
    user_id: str
    username: str

    def to_dict(self) -> Dict[str, Any]:
        return {"userId": self.user_id, "username": self.username}


@dataclass(frozen=True)
class LoginSession:
    """Token issued at login plus the public account fields"""
    token: str
    expires_at: datetime
    expires_in: int
    account: Account
    token_type: str = TOKEN_TYPE

    @property
    def identity(self) -> Identity:
        return Identity(user_id=self.account.id, username=self.account.username)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "token_type": self.token_type,
            "expires_in": self.expires_in,
            "expires_at": self.expires_at.isoformat(),
            "user": self.account.to_dict(),
        }
