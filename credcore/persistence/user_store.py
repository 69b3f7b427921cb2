"""
User Store - Persistence interface consumed by the credential core

Module: persistence.user_store
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Abstract UserStore contract
  - UniqueViolationError naming the violated field
  - InMemoryUserStore reference implementation

ARCHITECTURE:
The store is the only point of mutual exclusion in the core. Every
implementation must make insert_account() an atomic check-and-insert and
report a duplicate username/email by raising UniqueViolationError with the
field that fired. Any other failure is a UserStoreError and propagates to
the caller as an infrastructure fault.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .models import AccountRecord

FIELD_USERNAME = "username"
FIELD_EMAIL = "email"


class UserStoreError(Exception):
    """Base store error (infrastructure failure)"""
    pass


class UniqueViolationError(UserStoreError):
    """Insert rejected by a uniqueness constraint"""

    def __init__(self, field: Optional[str], message: Optional[str] = None):
        """
        Args:
            field: "username", "email", or None if the store cannot tell
            message: Optional detail
        """
        self.field = field
        super().__init__(message or f"Unique constraint violated ({field or 'unknown'})")


class UserStore(ABC):
    """
    Abstract account store

    Subclasses implement lookup and atomic insert.
    """

    @abstractmethod
    def find_by_username_or_email(
        self,
        username: str,
        email: str,
    ) -> Optional[AccountRecord]:
        """
        Find a row whose username equals ``username`` or whose email
        equals ``email`` (exact, case-sensitive)

        Username matches take precedence when several rows match.
        Login passes the same identifier for both arguments.
        """
        pass

    @abstractmethod
    def insert_account(
        self,
        username: str,
        email: str,
        password_hash: str,
    ) -> AccountRecord:
        """
        Insert a new account row

        Raises:
            UniqueViolationError: username or email already present
            UserStoreError: store failure
        """
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[AccountRecord]:
        """Get account by id"""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored accounts"""
        pass

    def close(self) -> None:
        """Release resources (no-op by default)"""
        pass


def match_account(
    records: List[AccountRecord],
    username: str,
    email: str,
) -> Optional[AccountRecord]:
    """Shared lookup for list-backed stores: username match first, then email"""
    for record in records:
        if record.username == username:
            return record
    for record in records:
        if record.email == email:
            return record
    return None


def conflicting_field(
    records: List[AccountRecord],
    username: str,
    email: str,
) -> Optional[str]:
    """Name the first unique field an insert would violate"""
    for record in records:
        if record.username == username:
            return FIELD_USERNAME
    for record in records:
        if record.email == email:
            return FIELD_EMAIL
    return None


class InMemoryUserStore(UserStore):
    """
    Process-local store backed by a dict

    Used by tests and by the "memory" backend.
    """

    def __init__(self):
        self.logger = logging.getLogger("persistence.memory_user_store")
        self._accounts: Dict[str, AccountRecord] = {}
        self._lock = threading.Lock()

    def find_by_username_or_email(self, username, email):
        with self._lock:
            return match_account(list(self._accounts.values()), username, email)

    def insert_account(self, username, email, password_hash):
        with self._lock:
            field = conflicting_field(list(self._accounts.values()), username, email)
            if field is not None:
                raise UniqueViolationError(field)

            record = AccountRecord.new(username, email, password_hash)
            self._accounts[record.account_id] = record

        self.logger.debug(f"Account inserted: {username} ({record.account_id})")
        return record

    def get_account(self, account_id):
        with self._lock:
            return self._accounts.get(account_id)

    def count(self):
        with self._lock:
            return len(self._accounts)
