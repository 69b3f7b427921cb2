"""
Account models

Module: persistence.models
Date: 2026-10-18
Version: 0.1.0

AccountRecord is the stored row (includes the password hash).
Account is the public view handed to callers; it has no hash field at all,
so a response built from it cannot leak one.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import uuid


@dataclass(frozen=True)
class Account:
    """Public account fields"""
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class AccountRecord:
    """Represents a stored account row"""

    def __init__(
        self,
        account_id: str,
        username: str,
        email: str,
        password_hash: str,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.account_id = account_id
        self.username = username
        self.email = email
        self.password_hash = password_hash
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or self.created_at

    @classmethod
    def new(cls, username: str, email: str, password_hash: str) -> "AccountRecord":
        """Create a record with a fresh id and timestamps"""
        now = datetime.now(timezone.utc)
        return cls(
            account_id=str(uuid.uuid4()),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    def to_account(self) -> Account:
        """Public view without the password hash"""
        return Account(
            id=self.account_id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON storage"""
        return {
            "id": self.account_id,
            "username": self.username,
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountRecord":
        """Create from dictionary (from JSON or a database row)"""
        return cls(
            account_id=data["id"],
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )

    def __repr__(self) -> str:
        return f"AccountRecord(id={self.account_id!r}, username={self.username!r})"
