"""
JWT Handler - Issue and verify signed access tokens

Module: security.authentication.jwt_handler
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Token generation with HS256
  - Token validation and claim extraction
  - Expired / invalid / claim errors kept distinct

ARCHITECTURE:
JWTHandler provides:
  - Stateless tokens carrying {userId, username, iat, exp}
  - HS256 (HMAC-SHA256) signature with one process-wide secret
  - Configurable lifetime (default 60 minutes)
  - Injectable clock for issuing tokens at a chosen instant

SECURITY NOTES:
- Secret key must be 32+ characters
- Expiration enforced strictly (no leeway)
- All times in UTC
- No refresh tokens and no revocation: expiry is the only way out
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ...core.constants import (
    CLAIM_USER_ID,
    CLAIM_USERNAME,
    DEFAULT_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    JWT_MIN_SECRET_LENGTH,
    REQUIRED_CLAIMS,
    TOKEN_TYPE,
)


class JWTError(Exception):
    """Base JWT error"""
    pass


class JWTInvalidError(JWTError):
    """JWT is invalid (malformed, bad signature)"""
    pass


class JWTExpiredError(JWTError):
    """JWT has expired"""
    pass


class JWTClaimError(JWTError):
    """JWT claim validation failed"""
    pass


class JWTConfigurationError(JWTError):
    """Signing secret missing or unusable"""
    pass


@dataclass(frozen=True)
class IssuedToken:
    """Freshly minted access token"""
    token: str
    issued_at: datetime
    expires_at: datetime
    token_type: str = TOKEN_TYPE

    @property
    def expires_in(self) -> int:
        return int((self.expires_at - self.issued_at).total_seconds())


@dataclass(frozen=True)
class TokenClaims:
    """Extracted JWT claims"""
    user_id: str
    username: str
    iat: datetime
    exp: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JWTHandler:
    """
    Handles JWT generation and validation

    Uses HS256 (HMAC-SHA256) for signing.
    """

    def __init__(
        self,
        secret_key: Optional[str],
        algorithm: str = JWT_ALGORITHM,
        token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize JWT handler

        Args:
            secret_key: Secret key for signing (32+ characters)
            algorithm: JWT algorithm (default HS256)
            token_expire_minutes: Token TTL in minutes
            clock: Returns the issuing instant (defaults to now, UTC)

        Raises:
            JWTConfigurationError: If secret_key missing or too short
        """
        if not secret_key:
            raise JWTConfigurationError("JWT secret is not configured")
        if len(secret_key) < JWT_MIN_SECRET_LENGTH:
            raise JWTConfigurationError(
                f"JWT secret must be at least {JWT_MIN_SECRET_LENGTH} characters"
            )

        self.logger = logging.getLogger("security.jwt_handler")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_expire = timedelta(minutes=token_expire_minutes)
        self._clock = clock or _utcnow

        self.logger.info(
            f"JWT Handler initialized (algo={algorithm}, "
            f"expires={token_expire_minutes}min)"
        )

    def generate_token(self, user_id: str, username: str) -> IssuedToken:
        """
        Generate an access token

        Args:
            user_id: Account identifier
            username: Username

        Returns:
            IssuedToken with the encoded JWT and its expiration
        """
        if not user_id or not username:
            raise ValueError("user_id and username required")

        now = self._clock()
        exp = now + self.token_expire
        claims = {
            CLAIM_USER_ID: user_id,
            CLAIM_USERNAME: username,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }

        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

        self.logger.debug(f"Token generated for {username} (user_id={user_id[:8]}...)")
        return IssuedToken(token=token, issued_at=now, expires_at=exp)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify JWT signature and extract claims

        Args:
            token: JWT token string

        Returns:
            TokenClaims with extracted data

        Raises:
            JWTInvalidError: If token invalid or bad signature
            JWTExpiredError: If token expired
            JWTClaimError: If required claims missing or mistyped
        """
        if not token or not isinstance(token, str):
            raise JWTInvalidError("Token must be non-empty string")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise JWTExpiredError(f"Token expired: {e}")
        except jwt.MissingRequiredClaimError as e:
            raise JWTClaimError(f"Missing claim: {e.claim}")
        except jwt.InvalidSignatureError as e:
            raise JWTInvalidError(f"Invalid signature: {e}")
        except jwt.DecodeError as e:
            raise JWTInvalidError(f"Decode error: {e}")
        except jwt.InvalidTokenError as e:
            raise JWTInvalidError(f"Invalid token: {e}")

        for claim in REQUIRED_CLAIMS:
            if claim not in payload:
                raise JWTClaimError(f"Missing claim: {claim}")

        user_id = payload[CLAIM_USER_ID]
        username = payload[CLAIM_USERNAME]
        if not isinstance(user_id, str) or not isinstance(username, str):
            raise JWTClaimError("Identity claims must be strings")

        try:
            iat = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (ValueError, TypeError, OverflowError) as e:
            raise JWTClaimError(f"Invalid timestamp: {e}")

        return TokenClaims(user_id=user_id, username=username, iat=iat, exp=exp)


# ============================================================================
# Unit Tests
# ============================================================================

if __name__ == "__main__":
    import unittest

    class TestJWTHandler(unittest.TestCase):
        """Self-test for JWTHandler"""

        def setUp(self):
            self.secret_key = "test-secret-key-at-least-32-characters-long!!!!"
            self.handler = JWTHandler(self.secret_key)

        def test_short_secret_key_raises(self):
            """Test short secret key rejected"""
            with self.assertRaises(JWTConfigurationError):
                JWTHandler("short")

        def test_verify_valid_token(self):
            """Test round trip keeps identity claims"""
            issued = self.handler.generate_token("user-123", "bob")
            claims = self.handler.verify(issued.token)
            self.assertEqual(claims.user_id, "user-123")
            self.assertEqual(claims.username, "bob")

        def test_verify_expired_token(self):
            """Test token issued two hours ago is expired"""
            past = JWTHandler(
                self.secret_key,
                clock=lambda: datetime.now(timezone.utc) - timedelta(hours=2),
            )
            issued = past.generate_token("user-123", "bob")
            with self.assertRaises(JWTExpiredError):
                self.handler.verify(issued.token)

    unittest.main()
