"""
Authentication module - JWT and password primitives

Provides:
- JWTHandler: JWT generation and validation (HS256)
- PasswordHasher: bcrypt password hashing
"""

from .jwt_handler import (
    JWTHandler,
    JWTError,
    JWTInvalidError,
    JWTExpiredError,
    JWTClaimError,
    JWTConfigurationError,
    IssuedToken,
    TokenClaims,
)
from .password_hasher import PasswordHasher

__all__ = [
    "JWTHandler",
    "JWTError",
    "JWTInvalidError",
    "JWTExpiredError",
    "JWTClaimError",
    "JWTConfigurationError",
    "IssuedToken",
    "TokenClaims",
    "PasswordHasher",
]
