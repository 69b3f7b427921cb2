"""
credcore Entry Point

Allows running the credential core directly via `python -m credcore`.
Configures logging to stderr (stdout carries the JSON results) and runs one
operation against the configured store.

    python -m credcore register bob01 bob@x.com --password longenough1
    python -m credcore login bob01 --password longenough1
    python -m credcore verify "Bearer eyJhbGciOi..."
    python -m credcore check
"""

import argparse
import getpass
import json
import logging
import sys
from typing import List, Optional

from .core.config import AuthConfig, ConfigError
from .core.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_OK,
    EXIT_REJECTED,
    PACKAGE_VERSION,
)
from .core.credential_service import CredentialService
from .persistence.sqlite_user_store import SQLiteUserStore
from .persistence.user_store import UserStoreError
from .security.results import AuthErrorKind, Result


def setup_logging(verbose: bool = False):
    """Configure logging to stderr"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # stdout is for results only
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="credcore",
        description="Register accounts, log in and verify bearer tokens",
    )
    parser.add_argument("--version", action="version", version=f"credcore {PACKAGE_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--store", help="store backend (memory, json, sqlite)")
    parser.add_argument("--data-dir", help="directory for account and audit files")

    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="create an account")
    register.add_argument("username")
    register.add_argument("email")
    register.add_argument("--password", help="prompted for when omitted")

    login = sub.add_parser("login", help="authenticate and print a token")
    login.add_argument("identifier", help="username or email")
    login.add_argument("--password", help="prompted for when omitted")

    verify = sub.add_parser("verify", help="check an Authorization header value")
    verify.add_argument("header", help='e.g. "Bearer <token>"')

    sub.add_parser("check", help="show configuration and account count")
    return parser


def _emit(result: Result, status: int) -> int:
    payload = result.to_dict()
    payload["status"] = status
    print(json.dumps(payload, indent=2))
    if result.ok:
        return EXIT_OK
    if result.error is AuthErrorKind.CONFIGURATION_ERROR:
        return EXIT_CONFIG_ERROR
    return EXIT_REJECTED


def main(argv: Optional[List[str]] = None, config: Optional[AuthConfig] = None) -> int:
    """
    Run one CLI command

    Args:
        argv: Arguments (defaults to sys.argv[1:])
        config: Configuration (defaults to AuthConfig.from_env())

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger("main")

    try:
        config = config or AuthConfig.from_env()
        overrides = {}
        if args.store:
            overrides["store_backend"] = args.store
        if args.data_dir:
            overrides["data_dir"] = args.data_dir
        if overrides:
            config = config.with_overrides(**overrides)
    except ConfigError as e:
        logger.critical(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    try:
        service = CredentialService(config)
    except UserStoreError as e:
        logger.critical(f"Cannot open account store: {e}", exc_info=True)
        return EXIT_CONFIG_ERROR

    try:
        if args.command == "register":
            password = args.password or getpass.getpass("Password: ")
            result = service.register(args.username, args.email, password)
            return _emit(result, service.status_for(result, created=True))

        if args.command == "login":
            password = args.password or getpass.getpass("Password: ")
            result = service.login(args.identifier, password)
            return _emit(result, service.status_for(result))

        if args.command == "verify":
            result = service.authenticate(args.header)
            return _emit(result, service.status_for(result))

        report = {
            "version": PACKAGE_VERSION,
            "config": config.to_dict(),
            "accounts": service.store.count(),
        }
        if isinstance(service.store, SQLiteUserStore):
            report["database_time"] = service.store.check_connection()
        print(json.dumps(report, indent=2))
        return EXIT_OK if config.has_secret else EXIT_CONFIG_ERROR

    except UserStoreError as e:
        logger.critical(f"Account store failure: {e}", exc_info=True)
        return EXIT_CONFIG_ERROR
    finally:
        service.close()


def run():
    """Console script entry point"""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
