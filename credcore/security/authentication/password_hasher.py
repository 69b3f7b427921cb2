"""
Password Hasher - bcrypt hashing with embedded salt

Module: security.authentication.password_hasher
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - bcrypt hashing with per-password salt
  - Constant-time verification
  - Dummy verification for unknown accounts

SECURITY NOTES:
- Salt is embedded in the "$2b$<cost>$..." output, nothing else is stored
- Cost factor 10 by default (tens of milliseconds per hash)
- bcrypt reads at most 72 bytes; longer passwords are truncated the
  same way on hash and verify
"""

import logging

import bcrypt

from ...core.constants import BCRYPT_MAX_PASSWORD_BYTES, DEFAULT_BCRYPT_ROUNDS


class PasswordHasher:
    """
    Hashes and verifies passwords with bcrypt
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        """
        Args:
            rounds: bcrypt cost factor (10-12 recommended, 4 for tests)
        """
        self.logger = logging.getLogger("security.password_hasher")
        self.rounds = rounds
        self._dummy_hash = None

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]

    def hash(self, password: str) -> str:
        """
        Hash password using bcrypt

        Args:
            password: Plaintext password

        Returns:
            bcrypt hash (salt embedded)
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Verify password against hash

        Returns:
            True if password matches, False otherwise (including a
            malformed stored hash)
        """
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode())
        except (ValueError, TypeError):
            self.logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    def dummy_verify(self, password: str) -> bool:
        """
        Spend the same work as verify() against a throwaway hash

        Used when no account matched so the response time does not reveal
        whether the identifier exists. Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("credcore-dummy-password")
        bcrypt.checkpw(self._encode(password), self._dummy_hash.encode())
        return False
