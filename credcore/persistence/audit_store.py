"""
Audit Logger - Append-only trail of registration and authentication events

Module: persistence.audit_store
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Append-only audit logging in audit.json
  - Event types for registration, login and token checks
  - Query by event type and username

SECURITY NOTES:
- Entries carry usernames and error kinds only; passwords, hashes and
  tokens are never recorded
- Failed logins record the matched account's username, never the
  submitted identifier
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.constants import AUDIT_FILE
from .json_store import JSONStore, JSONStoreError


class EventType(Enum):
    """Audit event types"""
    ACCOUNT_CREATED = "account_created"
    REGISTRATION_REJECTED = "registration_rejected"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    TOKEN_REJECTED = "token_rejected"
    CONFIGURATION_ERROR = "configuration_error"


class AuditEntry:
    """Represents an audit log entry"""

    def __init__(
        self,
        timestamp: datetime,
        event_type: str,
        account_id: Optional[str] = None,
        username: Optional[str] = None,
        status: str = "success",
        error: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.timestamp = timestamp
        self.event_type = event_type
        self.account_id = account_id
        self.username = username
        self.status = status
        self.error = error
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type,
            "account_id": self.account_id,
            "username": self.username,
            "status": self.status,
            "error": self.error,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditEntry":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            event_type=data["event_type"],
            account_id=data.get("account_id"),
            username=data.get("username"),
            status=data.get("status", "success"),
            error=data.get("error"),
            details=data.get("details", {}),
        )


class AuditLogger:
    """
    Append-only audit trail logger.

    Logs registration and authentication outcomes to audit.json.
    """

    def __init__(self, data_dir: str = "./data"):
        """
        Initialize audit logger

        Args:
            data_dir: Directory for audit file
        """
        self.logger = logging.getLogger("persistence.audit_logger")
        self.data_dir = Path(data_dir)
        self.audit_file = self.data_dir / AUDIT_FILE

        self.store = JSONStore(str(self.audit_file), {"entries": []})
        self.logger.info(f"AuditLogger initialized (file={self.audit_file})")

    def log_event(
        self,
        event_type: EventType,
        account_id: Optional[str] = None,
        username: Optional[str] = None,
        status: str = "success",
        error: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> AuditEntry:
        """
        Log an audit event (append-only)

        Args:
            event_type: Type of event
            account_id: Account identifier
            username: Username of a stored account, or None
            status: "success" or "failure"
            error: Error kind value if applicable
            details: Extra non-secret details

        Returns:
            AuditEntry that was logged
        """
        entry = AuditEntry(
            timestamp=datetime.now(timezone.utc),
            event_type=event_type.value,
            account_id=account_id,
            username=username,
            status=status,
            error=error,
            details=details,
        )

        with self.store.update() as data:
            data.setdefault("entries", []).append(entry.to_dict())

        return entry

    def log_account_created(self, account_id: str, username: str) -> AuditEntry:
        return self.log_event(EventType.ACCOUNT_CREATED, account_id=account_id, username=username)

    def log_registration_rejected(self, username: Optional[str], error: str) -> AuditEntry:
        return self.log_event(
            EventType.REGISTRATION_REJECTED,
            username=username,
            status="failure",
            error=error,
        )

    def log_login_success(self, account_id: str, username: str) -> AuditEntry:
        return self.log_event(EventType.LOGIN_SUCCESS, account_id=account_id, username=username)

    def log_login_failed(self, username: Optional[str], error: str) -> AuditEntry:
        return self.log_event(
            EventType.LOGIN_FAILED,
            username=username,
            status="failure",
            error=error,
        )

    def log_token_rejected(self, error: str) -> AuditEntry:
        return self.log_event(EventType.TOKEN_REJECTED, status="failure", error=error)

    def log_configuration_error(self, component: str) -> AuditEntry:
        return self.log_event(
            EventType.CONFIGURATION_ERROR,
            status="failure",
            error="configuration_error",
            details={"component": component},
        )

    def query_by_event_type(
        self,
        event_type: EventType,
        limit: Optional[int] = None,
    ) -> List[AuditEntry]:
        """
        Query audit entries by event type

        Args:
            event_type: Event type
            limit: Max results (most recent)

        Returns:
            List of matching AuditEntry objects
        """
        entries = [
            AuditEntry.from_dict(e)
            for e in self.store.load().get("entries", [])
            if e.get("event_type") == event_type.value
        ]
        return entries[-limit:] if limit else entries

    def query_by_username(
        self,
        username: str,
        limit: Optional[int] = None,
    ) -> List[AuditEntry]:
        """Query audit entries recorded for a username"""
        entries = [
            AuditEntry.from_dict(e)
            for e in self.store.load().get("entries", [])
            if e.get("username") == username
        ]
        return entries[-limit:] if limit else entries


def record_event(audit: Optional[AuditLogger], method: str, *args, **kwargs) -> Optional[AuditEntry]:
    """
    Call ``audit.<method>(*args, **kwargs)`` if an audit trail is configured

    A failed audit write is logged at ERROR and not raised: the operation
    being audited has already been committed.

    Returns:
        The logged AuditEntry, or None
    """
    if audit is None:
        return None
    try:
        return getattr(audit, method)(*args, **kwargs)
    except JSONStoreError as e:
        logging.getLogger("persistence.audit_logger").error(
            f"Audit write failed ({method}): {e}"
        )
        return None
