"""
JSON Store - Base class for JSON file handling

Module: persistence.json_store
Date: 2026-10-18
Version: 0.1.1

CHANGELOG:
[2026-10-18 v0.1.1] Cross-process safety
  - update() holds an OS file lock (<file>.lock) for the whole transaction
  - Each write goes through its own uniquely named temp file
  - save() removed; all writes go through update()

[2026-10-18 v0.1.0] Initial implementation
  - Atomic writes (temp file + rename)
  - Automatic directory creation
  - In-process lock and update() transactions

ARCHITECTURE:
JSONStore provides:
  - JSON serialization/deserialization of a single document
  - Atomic writes so readers never see a half-written file
  - update() transactions serialized across threads, JSONStore instances
    and processes sharing the same file
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from filelock import FileLock, Timeout

from ..core.constants import FILE_LOCK_SUFFIX, FILE_LOCK_TIMEOUT_SECONDS
from .user_store import UserStoreError


class JSONStoreError(UserStoreError):
    """Base JSON store error"""
    pass


class JSONStoreIOError(JSONStoreError):
    """File I/O error"""
    pass


class JSONStoreFormatError(JSONStoreError):
    """JSON format error"""
    pass


class JSONStore:
    """
    JSON-file persistence for one document.

    Handles:
    - File creation and permissions (0600)
    - Atomic writes (unique temp file + rename)
    - Serialized read-modify-write via update()
    """

    def __init__(
        self,
        file_path: str,
        default_data: Optional[Dict[str, Any]] = None,
        lock_timeout: float = FILE_LOCK_TIMEOUT_SECONDS,
    ):
        """
        Initialize JSON store

        Args:
            file_path: Path to JSON file
            default_data: Default data structure if file doesn't exist
            lock_timeout: Seconds to wait for the file lock
        """
        self.logger = logging.getLogger(f"persistence.{self.__class__.__name__}")
        self.file_path = Path(file_path)
        self.default_data = default_data or {}
        self._lock = threading.RLock()

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.lock_path = self.file_path.with_name(self.file_path.name + FILE_LOCK_SUFFIX)
        self._file_lock = FileLock(str(self.lock_path), timeout=lock_timeout)

        with self._transaction():
            if not self.file_path.exists():
                self._write_atomic(self.default_data)
                self.logger.info(f"Created new store: {self.file_path}")

    def load(self) -> Dict[str, Any]:
        """
        Load data from JSON file

        Returns:
            Parsed JSON data

        Raises:
            JSONStoreIOError: If file cannot be read
            JSONStoreFormatError: If JSON is invalid
        """
        with self._lock:
            return self._read()

    @contextmanager
    def update(self) -> Iterator[Dict[str, Any]]:
        """
        Load, yield for modification, then save, holding the thread lock
        and the file lock throughout

        Nothing is written if the block raises.

        Raises:
            JSONStoreIOError: If the file lock cannot be acquired or the
                write fails
        """
        with self._transaction():
            data = self._read()
            yield data
            self._write_atomic(data)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        with self._lock:
            try:
                self._file_lock.acquire()
            except Timeout:
                raise JSONStoreIOError(f"Timed out waiting for lock on {self.file_path}")
            try:
                yield
            finally:
                self._file_lock.release()

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            self.logger.warning(f"{self.file_path} not found, returning default data")
            return deepcopy(self.default_data)
        except json.JSONDecodeError as e:
            raise JSONStoreFormatError(f"Invalid JSON in {self.file_path}: {e}")
        except OSError as e:
            raise JSONStoreIOError(f"Failed to read {self.file_path}: {e}")

    def _write_atomic(self, data: Dict[str, Any]) -> None:
        temp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=str(self.file_path.parent),
                prefix=f".{self.file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_name = f.name
                json.dump(data, f, indent=2, default=str)

            os.replace(temp_name, self.file_path)
            temp_name = None
            self.file_path.chmod(0o600)
        except (OSError, TypeError, ValueError) as e:
            raise JSONStoreIOError(f"Failed to write {self.file_path}: {e}")
        finally:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
