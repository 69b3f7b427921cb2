"""
JSON User Store - File-backed account registry

Module: persistence.json_user_store
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Accounts stored in accounts.json
  - Uniqueness enforced inside a locked update() transaction

SECURITY NOTES:
- File written with 0600 permissions (see JSONStore)
- Only bcrypt hashes are stored, never plaintext
- Inserts are serialized by JSONStore's file lock, so uniqueness holds
  across instances and processes sharing the data dir
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..core.constants import ACCOUNTS_FILE
from .json_store import JSONStore
from .models import AccountRecord
from .user_store import (
    UniqueViolationError,
    UserStore,
    conflicting_field,
    match_account,
)


class JSONUserStore(UserStore):
    """
    Account store persisted to a JSON document

    Layout: {"accounts": [<AccountRecord.to_dict()>, ...]}
    """

    def __init__(self, data_dir: str = "./data"):
        """
        Initialize JSON user store

        Args:
            data_dir: Directory for data files
        """
        self.logger = logging.getLogger("persistence.json_user_store")
        self.data_dir = Path(data_dir)
        self.accounts_file = self.data_dir / ACCOUNTS_FILE

        self.store = JSONStore(str(self.accounts_file), {"accounts": []})
        self.logger.info(f"JSONUserStore initialized (file={self.accounts_file})")

    def _records(self, data) -> List[AccountRecord]:
        return [AccountRecord.from_dict(d) for d in data.get("accounts", [])]

    def find_by_username_or_email(self, username: str, email: str) -> Optional[AccountRecord]:
        return match_account(self._records(self.store.load()), username, email)

    def insert_account(self, username: str, email: str, password_hash: str) -> AccountRecord:
        """
        Insert account atomically

        Raises:
            UniqueViolationError: username or email already stored
            JSONStoreError: file could not be read or written
        """
        with self.store.update() as data:
            field = conflicting_field(self._records(data), username, email)
            if field is not None:
                raise UniqueViolationError(field)

            record = AccountRecord.new(username, email, password_hash)
            data.setdefault("accounts", []).append(record.to_dict())

        self.logger.info(f"Account stored: {username} ({record.account_id})")
        return record

    def get_account(self, account_id: str) -> Optional[AccountRecord]:
        for record in self._records(self.store.load()):
            if record.account_id == account_id:
                return record
        return None

    def count(self) -> int:
        return len(self.store.load().get("accounts", []))
