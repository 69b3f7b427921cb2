"""
Store factory - build the configured UserStore backend
"""

import logging

from ..core.config import AuthConfig
from ..core.constants import ACCOUNTS_DB_FILE, STORE_JSON, STORE_MEMORY, STORE_SQLITE
from .json_user_store import JSONUserStore
from .sqlite_user_store import SQLiteUserStore
from .user_store import InMemoryUserStore, UserStore


def create_user_store(config: AuthConfig) -> UserStore:
    """
    Instantiate the store named by ``config.store_backend``

    Args:
        config: Auth configuration

    Returns:
        UserStore implementation
    """
    logger = logging.getLogger("persistence.factory")
    backend = config.store_backend

    if backend == STORE_MEMORY:
        store = InMemoryUserStore()
    elif backend == STORE_JSON:
        store = JSONUserStore(config.data_dir)
    elif backend == STORE_SQLITE:
        store = SQLiteUserStore(str(config.data_path / ACCOUNTS_DB_FILE))
    else:
        # AuthConfig already rejects unknown names
        raise ValueError(f"Unknown store backend: {backend}")

    logger.info(f"Using {backend} user store")
    return store
