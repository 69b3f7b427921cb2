"""
Account Registrar - Create accounts with unique username and email

Module: security.registrar
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Validation, uniqueness pre-check, bcrypt hashing, insert
  - Insert-time uniqueness violations classified (registration race)
  - Profile lookup by account id

ARCHITECTURE:
register() performs one read (pre-check) and one write (insert). The
pre-check gives a friendly answer in the common case; the store's atomic
insert is what actually guarantees uniqueness when two registrations
interleave, and its UniqueViolationError is mapped to the same kinds.

SECURITY NOTES:
- Plaintext passwords are never logged or stored
- The returned Account has no password hash field
"""

import logging
from typing import Optional

from ..persistence.audit_store import AuditLogger, record_event
from ..persistence.models import Account
from ..persistence.user_store import (
    FIELD_EMAIL,
    FIELD_USERNAME,
    UniqueViolationError,
    UserStore,
)
from .authentication.password_hasher import PasswordHasher
from .results import RegistrationErrorKind, Result
from .validation import validate_registration


class AccountRegistrar:
    """
    Registers new accounts against a UserStore
    """

    def __init__(
        self,
        store: UserStore,
        hasher: Optional[PasswordHasher] = None,
        audit: Optional[AuditLogger] = None,
    ):
        """
        Args:
            store: Account store
            hasher: Password hasher (bcrypt, default cost)
            audit: Optional audit trail
        """
        self.logger = logging.getLogger("security.registrar")
        self.store = store
        self.hasher = hasher or PasswordHasher()
        self.audit = audit

    def register(self, username: str, email: str, password: str) -> Result[Account]:
        """
        Register a new account

        Args:
            username: Requested username (unique)
            email: Email address (unique)
            password: Plaintext password (will be hashed)

        Returns:
            Result with the public Account, or a ValidationErrorKind /
            RegistrationErrorKind failure

        Raises:
            UserStoreError: If the store itself fails
        """
        validation = validate_registration(username, email, password)
        if not validation.valid:
            self.logger.info(
                f"Registration rejected ({validation.error.value}, field={validation.field})"
            )
            return self._reject(None, validation.error)

        existing = self.store.find_by_username_or_email(username, email)
        if existing is not None:
            if existing.username == username:
                return self._reject(username, RegistrationErrorKind.USERNAME_TAKEN)
            return self._reject(username, RegistrationErrorKind.EMAIL_TAKEN)

        password_hash = self.hasher.hash(password)

        try:
            record = self.store.insert_account(username, email, password_hash)
        except UniqueViolationError as e:
            self.logger.warning(f"Concurrent registration detected for {username} ({e.field})")
            return self._reject(username, self._classify_violation(e))

        self.logger.info(f"Account registered: {username} ({record.account_id})")
        record_event(self.audit, "log_account_created", record.account_id, username)
        return Result.success(record.to_account())

    def get_account(self, account_id: str) -> Optional[Account]:
        """
        Look up an account's public profile

        Returns:
            Account if found, None otherwise
        """
        record = self.store.get_account(account_id)
        return record.to_account() if record else None

    @staticmethod
    def _classify_violation(error: UniqueViolationError) -> RegistrationErrorKind:
        if error.field == FIELD_USERNAME:
            return RegistrationErrorKind.USERNAME_TAKEN
        if error.field == FIELD_EMAIL:
            return RegistrationErrorKind.EMAIL_TAKEN
        return RegistrationErrorKind.ACCOUNT_EXISTS

    def _reject(self, username, kind) -> Result[Account]:
        if isinstance(kind, RegistrationErrorKind):
            self.logger.info(f"Registration conflict for {username}: {kind.value}")
        record_event(self.audit, "log_registration_rejected", username, kind.value)
        return Result.failure(kind)
