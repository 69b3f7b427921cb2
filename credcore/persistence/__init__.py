"""
Persistence module - account storage and audit trail

Provides:
- UserStore: Abstract account store (lookup + atomic insert)
- InMemoryUserStore, JSONUserStore, SQLiteUserStore: implementations
- JSONStore: Base class for JSON file handling
- AuditLogger: Audit trail logging with event types
"""

from .models import Account, AccountRecord
from .user_store import (
    UserStore,
    UserStoreError,
    UniqueViolationError,
    InMemoryUserStore,
)
from .json_store import JSONStore, JSONStoreError
from .json_user_store import JSONUserStore
from .sqlite_user_store import SQLiteUserStore
from .audit_store import AuditLogger, AuditEntry, EventType, record_event
from .factory import create_user_store

__all__ = [
    "Account",
    "AccountRecord",
    "UserStore",
    "UserStoreError",
    "UniqueViolationError",
    "InMemoryUserStore",
    "JSONStore",
    "JSONStoreError",
    "JSONUserStore",
    "SQLiteUserStore",
    "AuditLogger",
    "AuditEntry",
    "EventType",
    "record_event",
    "create_user_store",
]
