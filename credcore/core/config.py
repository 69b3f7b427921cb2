"""
Auth Configuration - Explicit configuration object for the credential core

Module: core.config
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - AuthConfig dataclass passed to every component at construction
  - Environment loading isolated in AuthConfig.from_env()

ARCHITECTURE:
Components never read the environment themselves. A request layer builds
one AuthConfig at startup (usually from_env()) and hands it to
CredentialService, or tests build one directly with a fake secret.
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Dict, Any, Mapping

from .constants import (
    DEFAULT_BCRYPT_ROUNDS,
    DEFAULT_DATA_DIR,
    DEFAULT_STORE,
    DEFAULT_TOKEN_EXPIRE_MINUTES,
    ENV_AUDIT,
    ENV_BCRYPT_ROUNDS,
    ENV_DATA_DIR,
    ENV_JWT_SECRET,
    ENV_STORE,
    ENV_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    MAX_BCRYPT_ROUNDS,
    MIN_BCRYPT_ROUNDS,
    SUPPORTED_STORES,
)


class ConfigError(ValueError):
    """Configuration value is malformed"""
    pass


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AuthConfig:
    """
    Immutable configuration shared by all components

    Attributes:
        jwt_secret: HMAC signing secret (None when unconfigured)
        jwt_algorithm: JWT signing algorithm
        token_expire_minutes: Access token lifetime
        bcrypt_rounds: bcrypt cost factor
        store_backend: "memory", "json" or "sqlite"
        data_dir: Directory for file-backed stores and audit trail
        audit_enabled: Record auth events to the audit trail
    """
    jwt_secret: Optional[str] = field(default=None, repr=False)
    jwt_algorithm: str = JWT_ALGORITHM
    token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    store_backend: str = DEFAULT_STORE
    data_dir: str = DEFAULT_DATA_DIR
    audit_enabled: bool = False

    def __post_init__(self):
        if self.token_expire_minutes <= 0:
            raise ConfigError("token_expire_minutes must be positive")
        if not MIN_BCRYPT_ROUNDS <= self.bcrypt_rounds <= MAX_BCRYPT_ROUNDS:
            raise ConfigError(
                f"bcrypt_rounds must be between {MIN_BCRYPT_ROUNDS} "
                f"and {MAX_BCRYPT_ROUNDS}"
            )
        if self.store_backend not in SUPPORTED_STORES:
            raise ConfigError(
                f"Unknown store backend '{self.store_backend}' "
                f"(expected one of {', '.join(SUPPORTED_STORES)})"
            )

    @property
    def has_secret(self) -> bool:
        """True if a signing secret is configured"""
        return bool(self.jwt_secret)

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    def with_overrides(self, **changes) -> "AuthConfig":
        """Return a copy with some fields replaced"""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Describe configuration for logging (secret redacted)"""
        return {
            "jwt_secret": "***" if self.has_secret else None,
            "jwt_algorithm": self.jwt_algorithm,
            "token_expire_minutes": self.token_expire_minutes,
            "bcrypt_rounds": self.bcrypt_rounds,
            "store_backend": self.store_backend,
            "data_dir": self.data_dir,
            "audit_enabled": self.audit_enabled,
        }

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AuthConfig":
        """
        Build configuration from environment variables

        Args:
            environ: Mapping to read (defaults to os.environ)

        Returns:
            AuthConfig

        Raises:
            ConfigError: If a numeric variable is not an integer
        """
        env = os.environ if environ is None else environ
        logger = logging.getLogger("core.config")

        secret = env.get(ENV_JWT_SECRET) or None
        if secret is None:
            logger.warning(
                f"{ENV_JWT_SECRET} is not set; token issuance and "
                f"verification will fail"
            )

        config = cls(
            jwt_secret=secret,
            token_expire_minutes=_int_from_env(
                env, ENV_TOKEN_EXPIRE_MINUTES, DEFAULT_TOKEN_EXPIRE_MINUTES
            ),
            bcrypt_rounds=_int_from_env(
                env, ENV_BCRYPT_ROUNDS, DEFAULT_BCRYPT_ROUNDS
            ),
            store_backend=env.get(ENV_STORE, DEFAULT_STORE),
            data_dir=env.get(ENV_DATA_DIR, DEFAULT_DATA_DIR),
            audit_enabled=env.get(ENV_AUDIT, "").lower() in _TRUE_VALUES,
        )
        logger.debug(f"Configuration loaded: {config.to_dict()}")
        return config


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'")
