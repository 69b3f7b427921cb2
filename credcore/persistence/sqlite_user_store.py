"""
SQLite User Store - Account registry with database-level uniqueness

Module: persistence.sqlite_user_store
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - accounts table with UNIQUE username and email
  - IntegrityError classified into UniqueViolationError(field)
  - Connectivity probe for startup checks

ARCHITECTURE:
Uniqueness is left entirely to the UNIQUE constraints, so concurrent
registrations from several processes sharing the database file still
produce exactly one row. The violated column is read from SQLite's
"UNIQUE constraint failed: accounts.<column>" message.
"""

import logging
import sqlite3
import threading
from contextlib import closing
from pathlib import Path
from typing import Optional

from .models import AccountRecord
from .user_store import (
    FIELD_EMAIL,
    FIELD_USERNAME,
    UniqueViolationError,
    UserStore,
    UserStoreError,
)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    id TEXT PRIMARY KEY,
    username TEXT NOT NULL UNIQUE,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_COLUMNS = "id, username, email, password_hash, created_at, updated_at"


class SQLiteUserStore(UserStore):
    """
    Account store backed by an SQLite database file

    One connection is shared and guarded by a lock; pass ":memory:" for a
    throwaway database.
    """

    def __init__(self, db_path: str, timeout: float = 5.0):
        self.logger = logging.getLogger("persistence.sqlite_user_store")
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(db_path, timeout=timeout, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.execute(_SCHEMA)
        except sqlite3.Error as e:
            raise UserStoreError(f"Cannot open account database {db_path}: {e}")

        self.logger.info(f"SQLiteUserStore initialized (db={db_path})")

    def check_connection(self) -> str:
        """
        Run a trivial query to prove the database is reachable

        Returns:
            Current database time (UTC, text)
        """
        row = self._fetchone("SELECT datetime('now') AS now", ())
        self.logger.info(f"Account database reachable, current time: {row['now']}")
        return row["now"]

    def find_by_username_or_email(self, username: str, email: str) -> Optional[AccountRecord]:
        row = self._fetchone(
            f"SELECT {_COLUMNS} FROM accounts WHERE username = ? OR email = ? "
            f"ORDER BY username = ? DESC LIMIT 1",
            (username, email, username),
        )
        return AccountRecord.from_dict(dict(row)) if row else None

    def insert_account(self, username: str, email: str, password_hash: str) -> AccountRecord:
        """
        Insert account; the UNIQUE constraints decide conflicts

        Raises:
            UniqueViolationError: username or email already stored
            UserStoreError: any other database failure
        """
        record = AccountRecord.new(username, email, password_hash)
        row = record.to_dict()
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    f"INSERT INTO accounts ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        row["id"],
                        row["username"],
                        row["email"],
                        row["password_hash"],
                        row["created_at"],
                        row["updated_at"],
                    ),
                )
        except sqlite3.IntegrityError as e:
            if "UNIQUE" not in str(e).upper():
                raise UserStoreError(f"Insert failed: {e}") from e
            raise UniqueViolationError(self._violated_field(str(e)), str(e)) from e
        except sqlite3.Error as e:
            raise UserStoreError(f"Insert failed: {e}") from e

        self.logger.info(f"Account stored: {username} ({record.account_id})")
        return record

    def get_account(self, account_id: str) -> Optional[AccountRecord]:
        row = self._fetchone(
            f"SELECT {_COLUMNS} FROM accounts WHERE id = ?",
            (account_id,),
        )
        return AccountRecord.from_dict(dict(row)) if row else None

    def count(self) -> int:
        return self._fetchone("SELECT COUNT(*) AS n FROM accounts", ())["n"]

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def _fetchone(self, sql: str, params: tuple):
        try:
            with self._lock, closing(self._conn.cursor()) as cursor:
                cursor.execute(sql, params)
                return cursor.fetchone()
        except sqlite3.Error as e:
            raise UserStoreError(f"Query failed: {e}") from e

    @staticmethod
    def _violated_field(message: str) -> Optional[str]:
        if "accounts.username" in message:
            return FIELD_USERNAME
        if "accounts.email" in message:
            return FIELD_EMAIL
        return None
