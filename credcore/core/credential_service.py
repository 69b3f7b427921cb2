"""
Credential Service - Composition root for the credential core

Module: core.credential_service
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Builds store, hasher, registrar, issuer and guard from one AuthConfig
  - Maps results to transport status codes

ARCHITECTURE:
A request layer constructs one CredentialService at startup and calls
register(), login() and authenticate() per request. The service holds no
mutable state of its own; all of it lives in the injected store.

Typical usage:
    service = CredentialService(AuthConfig.from_env())
    result = service.login("alice", "correct-password")
    status = service.status_for(result)
"""

import logging
from typing import Optional

from ..persistence.audit_store import AuditLogger
from ..persistence.factory import create_user_store
from ..persistence.models import Account
from ..persistence.user_store import UserStore
from ..security.authentication.password_hasher import PasswordHasher
from ..security.registrar import AccountRegistrar
from ..security.results import Identity, LoginSession, Result
from ..security.session_issuer import SessionIssuer
from ..security.token_guard import TokenGuard
from .config import AuthConfig
from .constants import HTTP_STATUS, PACKAGE_VERSION, STATUS_CREATED, STATUS_OK


class CredentialService:
    """
    Facade over the registrar, issuer and guard
    """

    def __init__(
        self,
        config: AuthConfig,
        store: Optional[UserStore] = None,
        audit: Optional[AuditLogger] = None,
    ):
        """
        Initialize credential service

        Args:
            config: Auth configuration
            store: Account store (defaults to config.store_backend)
            audit: Audit trail (defaults to one in config.data_dir when
                config.audit_enabled)
        """
        self.logger = logging.getLogger("core.credential_service")
        self.config = config

        self.store = store if store is not None else create_user_store(config)
        if audit is None and config.audit_enabled:
            audit = AuditLogger(config.data_dir)
        self.audit = audit

        self.hasher = PasswordHasher(config.bcrypt_rounds)
        self.registrar = AccountRegistrar(self.store, self.hasher, self.audit)
        self.issuer = SessionIssuer(self.store, config, self.hasher, self.audit)
        self.guard = TokenGuard(config, self.audit)

        self.logger.info(f"Credential service initialized (v{PACKAGE_VERSION})")
        self.logger.info(f"Configuration: {config.to_dict()}")

    def register(self, username: str, email: str, password: str) -> Result[Account]:
        return self.registrar.register(username, email, password)

    def login(self, identifier: str, password: str) -> Result[LoginSession]:
        return self.issuer.login(identifier, password)

    def authenticate(self, raw_header_value: Optional[str]) -> Result[Identity]:
        return self.guard.authenticate(raw_header_value)

    def get_account(self, account_id: str) -> Optional[Account]:
        return self.registrar.get_account(account_id)

    @staticmethod
    def status_for(result: Result, created: bool = False) -> int:
        """
        Transport status code for a result

        Args:
            result: Any component result
            created: True for a successful resource creation (register)

        Returns:
            HTTP status code
        """
        if result.ok:
            return STATUS_CREATED if created else STATUS_OK
        return HTTP_STATUS.get(result.error.value, 500)

    def close(self) -> None:
        self.store.close()

