"""
Security Service
Manager (administrative caller) authentication
"""

import hmac
import logging
from typing import Optional

import asyncpg

from customer_crud.db.database import DATABASE_ERRORS

logger = logging.getLogger(__name__)


class SecurityService:
    """Checks manager credentials against the managers table"""

    def __init__(self, pool: asyncpg.Pool, query_timeout: Optional[float] = None):
        self.pool = pool
        self.query_timeout = query_timeout

    async def authenticate_manager(self, login: str, password: str) -> bool:
        """
        Authenticate a manager by login and password

        Manager passwords are stored and compared in plaintext.

        Returns:
            True only for an exact login + password match
        """
        try:
            async with self.pool.acquire() as conn:
                manager_password = await conn.fetchval(
                    "SELECT password FROM managers WHERE login = $1",
                    login,
                    timeout=self.query_timeout
                )
        except DATABASE_ERRORS as e:
            logger.error(f"Manager lookup failed: {e!r}")
            return False

        if manager_password is None:
            logger.warning(f"Unknown manager login: {login}")
            return False

        if not hmac.compare_digest(password.encode('utf-8'), manager_password.encode('utf-8')):
            logger.warning(f"Invalid password for manager: {login}")
            return False

        return True
