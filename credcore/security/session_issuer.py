"""
Session Issuer - Verify credentials and mint access tokens

Module: security.session_issuer
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Login by username or email
  - bcrypt verification, one-hour HS256 token
  - Unknown identifier and wrong password collapsed into one error

SECURITY NOTES:
- "No such user" and "wrong password" both yield INVALID_CREDENTIALS,
  and both pay the cost of one bcrypt comparison
- A missing signing secret fails the request with CONFIGURATION_ERROR;
  it is logged at ERROR level, never bypassed
- The submitted identifier is never written to the audit trail
"""

import logging
from typing import Optional

from ..core.config import AuthConfig
from ..persistence.audit_store import AuditLogger, record_event
from ..persistence.user_store import UserStore
from .authentication.jwt_handler import JWTConfigurationError, JWTHandler
from .authentication.password_hasher import PasswordHasher
from .results import AuthErrorKind, LoginSession, Result
from .validation import validate_login


class SessionIssuer:
    """
    Authenticates credentials and issues tokens
    """

    def __init__(
        self,
        store: UserStore,
        config: AuthConfig,
        hasher: Optional[PasswordHasher] = None,
        audit: Optional[AuditLogger] = None,
        jwt_handler: Optional[JWTHandler] = None,
    ):
        """
        Args:
            store: Account store
            config: Auth configuration (signing secret, token lifetime)
            hasher: Password hasher matching the registrar's
            audit: Optional audit trail
            jwt_handler: Pre-built handler (overrides config secret)
        """
        self.logger = logging.getLogger("security.session_issuer")
        self.store = store
        self.hasher = hasher or PasswordHasher(config.bcrypt_rounds)
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
                self.logger.error(f"Token issuance disabled: {e}")

    def login(self, identifier: str, password: str) -> Result[LoginSession]:
        """
        Authenticate and issue a token

        Args:
            identifier: Username or email
            password: Plaintext password

        Returns:
            Result with a LoginSession, or an AuthErrorKind failure

        Raises:
            UserStoreError: If the store itself fails
        """
        validation = validate_login(identifier, password)
        if not validation.valid:
            return self._fail(validation.error)

        if self.jwt_handler is None:
            self.logger.error(f"Cannot issue token: {self._config_error}")
            record_event(self.audit, "log_configuration_error", "session_issuer")
            return Result.failure(AuthErrorKind.CONFIGURATION_ERROR)

        record = self.store.find_by_username_or_email(identifier, identifier)

        if record is None:
            self.hasher.dummy_verify(password)
            self.logger.warning("Authentication failed: unknown identifier")
            return self._fail(AuthErrorKind.INVALID_CREDENTIALS)

        if not self.hasher.verify(password, record.password_hash):
            self.logger.warning(f"Authentication failed for {record.username}")
            return self._fail(AuthErrorKind.INVALID_CREDENTIALS, record.username)

        issued = self.jwt_handler.generate_token(record.account_id, record.username)

        self.logger.info(f"Login: {record.username} ({record.account_id})")
        record_event(self.audit, "log_login_success", record.account_id, record.username)

        return Result.success(
            LoginSession(
                token=issued.token,
                token_type=issued.token_type,
                expires_at=issued.expires_at,
                expires_in=issued.expires_in,
                account=record.to_account(),
            )
        )

    def _fail(self, kind: AuthErrorKind, username: Optional[str] = None) -> Result[LoginSession]:
        # username only when the identifier matched a stored account
        record_event(self.audit, "log_login_failed", username, kind.value)
        return Result.failure(kind)
