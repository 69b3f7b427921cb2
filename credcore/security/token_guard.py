"""
Token Guard - Per-request bearer token check

Module: security.token_guard
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - "<scheme> <token>" header parsing
  - Expired / invalid / valid classification as a Result
  - Identity exposed without a store lookup

ARCHITECTURE:
Each call is an independent Unverified -> {Verified, Rejected} step; the
guard holds nothing but its JWTHandler. Identity is taken from the token
as-is: an account renamed after login keeps its old username until the
token expires.
"""

import logging
from typing import Optional

from ..core.config import AuthConfig
from ..persistence.audit_store import AuditLogger, record_event
from .authentication.jwt_handler import (
    JWTConfigurationError,
    JWTError,
    JWTExpiredError,
    JWTHandler,
)
from .results import AuthErrorKind, Identity, Result


def extract_bearer_token(header_value: Optional[str]) -> Optional[str]:
    """
    Take the token out of an Authorization header value

    Returns:
        The second whitespace-separated part, or None when the value is
        absent or not exactly "<scheme> <token>"
    """
    if not header_value:
        return None
    parts = header_value.split()
    if len(parts) != 2:
        return None
    return parts[1]


class TokenGuard:
    """
    Verifies bearer tokens on protected requests
    """

    def __init__(
        self,
        config: AuthConfig,
        audit: Optional[AuditLogger] = None,
        jwt_handler: Optional[JWTHandler] = None,
    ):
        self.logger = logging.getLogger("security.token_guard")
        self.audit = audit

        self.jwt_handler = jwt_handler
        self._config_error: Optional[str] = None
        if self.jwt_handler is None:
            try:
                self.jwt_handler = JWTHandler(
                    secret_key=config.jwt_secret,
                    algorithm=config.jwt_algorithm,
                    token_expire_minutes=config.token_expire_minutes,
                )
            except JWTConfigurationError as e:
                self._config_error = str(e)
                self.logger.error(f"Token verification disabled: {e}")

    def authenticate(self, raw_header_value: Optional[str]) -> Result[Identity]:
        """
        Authenticate a request from its Authorization header value

        Args:
            raw_header_value: e.g. "Bearer eyJhbGciOi..."

        Returns:
            Result with the Identity, or NO_TOKEN / TOKEN_EXPIRED /
            TOKEN_INVALID / CONFIGURATION_ERROR
        """
        token = extract_bearer_token(raw_header_value)
        if token is None:
            return self._reject(AuthErrorKind.NO_TOKEN)
        return self.verify_token(token)

    def verify_token(self, token: str) -> Result[Identity]:
        """Verify an already extracted token"""
        if self.jwt_handler is None:
            self.logger.error(f"Cannot verify token: {self._config_error}")
            record_event(self.audit, "log_configuration_error", "token_guard")
            return Result.failure(AuthErrorKind.CONFIGURATION_ERROR)

        try:
            claims = self.jwt_handler.verify(token)
        except JWTExpiredError:
            return self._reject(AuthErrorKind.TOKEN_EXPIRED)
        except JWTError as e:
            self.logger.debug(f"Token rejected: {e}")
            return self._reject(AuthErrorKind.TOKEN_INVALID)

        return Result.success(Identity(user_id=claims.user_id, username=claims.username))

    def _reject(self, kind: AuthErrorKind) -> Result[Identity]:
        self.logger.warning(f"Access denied: {kind.value}")
        record_event(self.audit, "log_token_rejected", kind.value)
        return Result.failure(kind)
