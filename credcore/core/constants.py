"""
Constants for the credential core

Module: core.constants
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial constants definition
  - Registration validation limits
  - Password hashing and token lifetime defaults
  - Environment variable names
  - Error messages and transport status mapping

SECURITY NOTES:
- No default signing secret is provided; a missing secret is a
  configuration error, never silently replaced
- bcrypt cost factor 10 (tens of milliseconds per hash)
- Access tokens live one hour, no refresh path
"""

from typing import Final

# ============================================================================
# Package Identity
# ============================================================================

PACKAGE_NAME: Final[str] = "credcore"
PACKAGE_VERSION: Final[str] = "0.1.0"

# ============================================================================
# Validation Rules
# ============================================================================

USERNAME_MIN_LENGTH: Final[int] = 3
USERNAME_MAX_LENGTH: Final[int] = 20
USERNAME_PATTERN: Final[str] = r"[A-Za-z0-9_]+"

# one-or-more non-space/non-@, "@", same, ".", same
EMAIL_PATTERN: Final[str] = r"[^\s@]+@[^\s@]+\.[^\s@]+"

PASSWORD_MIN_LENGTH: Final[int] = 8

# ============================================================================
# Password Hashing
# ============================================================================

DEFAULT_BCRYPT_ROUNDS: Final[int] = 10
MIN_BCRYPT_ROUNDS: Final[int] = 4
MAX_BCRYPT_ROUNDS: Final[int] = 31

# bcrypt only consumes the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES: Final[int] = 72

# ============================================================================
# Token Configuration
# ============================================================================

JWT_ALGORITHM: Final[str] = "HS256"
JWT_MIN_SECRET_LENGTH: Final[int] = 32
DEFAULT_TOKEN_EXPIRE_MINUTES: Final[int] = 60
TOKEN_TYPE: Final[str] = "Bearer"

CLAIM_USER_ID: Final[str] = "userId"
CLAIM_USERNAME: Final[str] = "username"
REQUIRED_CLAIMS: Final[tuple] = (CLAIM_USER_ID, CLAIM_USERNAME, "iat", "exp")

# ============================================================================
# Persistence
# ============================================================================

STORE_MEMORY: Final[str] = "memory"
STORE_JSON: Final[str] = "json"
STORE_SQLITE: Final[str] = "sqlite"
SUPPORTED_STORES: Final[tuple] = (STORE_MEMORY, STORE_JSON, STORE_SQLITE)

DEFAULT_STORE: Final[str] = STORE_JSON
DEFAULT_DATA_DIR: Final[str] = "./data"

ACCOUNTS_FILE: Final[str] = "accounts.json"
ACCOUNTS_DB_FILE: Final[str] = "accounts.db"
AUDIT_FILE: Final[str] = "audit.json"

FILE_LOCK_SUFFIX: Final[str] = ".lock"
FILE_LOCK_TIMEOUT_SECONDS: Final[float] = 10.0

# ============================================================================
# Environment Variables
# ============================================================================

ENV_JWT_SECRET: Final[str] = "JWT_SECRET"
ENV_TOKEN_EXPIRE_MINUTES: Final[str] = "CREDCORE_TOKEN_EXPIRE_MINUTES"
ENV_BCRYPT_ROUNDS: Final[str] = "CREDCORE_BCRYPT_ROUNDS"
ENV_STORE: Final[str] = "CREDCORE_STORE"
ENV_DATA_DIR: Final[str] = "CREDCORE_DATA_DIR"
ENV_AUDIT: Final[str] = "CREDCORE_AUDIT"

# ============================================================================
# Error Messages
# ============================================================================

# Keyed by the ``value`` of the error kind enums in security.results
ERROR_MESSAGES = {
    # Validation
    "missing_field": "Username, email, and password are required.",
    "username_length": (
        f"Username must be between {USERNAME_MIN_LENGTH} and "
        f"{USERNAME_MAX_LENGTH} characters."
    ),
    "username_charset": "Username may only contain letters, digits and underscores.",
    "email_format": "Email address is not valid.",
    "password_length": (
        f"Password must be at least {PASSWORD_MIN_LENGTH} characters long."
    ),
    # Registration
    "username_taken": "Username is already taken.",
    "email_taken": "Email is already registered.",
    "account_exists": "An account with these details already exists.",
    # Authentication
    "auth_missing_field": "Identifier and password are required.",
    "invalid_credentials": "Invalid username/email or password.",
    "no_token": "Access denied. No token provided.",
    "token_expired": "Access denied. Token has expired.",
    "token_invalid": "Access denied. Token is invalid.",
    "configuration_error": (
        "Internal server error - Authentication configuration issue."
    ),
}

# ============================================================================
# Transport Status Mapping
# ============================================================================

STATUS_OK: Final[int] = 200
STATUS_CREATED: Final[int] = 201

HTTP_STATUS = {
    "missing_field": 400,
    "username_length": 400,
    "username_charset": 400,
    "email_format": 400,
    "password_length": 400,
    "username_taken": 409,
    "email_taken": 409,
    "account_exists": 409,
    "auth_missing_field": 400,
    "invalid_credentials": 401,
    "no_token": 401,
    "token_expired": 401,
    "token_invalid": 403,
    "configuration_error": 500,
}

# ============================================================================
# CLI Exit Codes
# ============================================================================

EXIT_OK: Final[int] = 0
EXIT_REJECTED: Final[int] = 1
EXIT_CONFIG_ERROR: Final[int] = 2


def get_default_config() -> dict:
    """
    Get default credential core configuration

    Returns:
        dict: Default configuration (no signing secret)
    """
    return {
        "package": {
            "name": PACKAGE_NAME,
            "version": PACKAGE_VERSION,
        },
        "validation": {
            "username_min_length": USERNAME_MIN_LENGTH,
            "username_max_length": USERNAME_MAX_LENGTH,
            "password_min_length": PASSWORD_MIN_LENGTH,
        },
        "hashing": {
            "algorithm": "bcrypt",
            "rounds": DEFAULT_BCRYPT_ROUNDS,
        },
        "tokens": {
            "algorithm": JWT_ALGORITHM,
            "expire_minutes": DEFAULT_TOKEN_EXPIRE_MINUTES,
            "token_type": TOKEN_TYPE,
        },
        "store": {
            "backend": DEFAULT_STORE,
            "data_dir": DEFAULT_DATA_DIR,
        },
        "audit": {
            "enabled": False,
        },
    }
