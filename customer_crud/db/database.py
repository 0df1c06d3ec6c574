"""
Database Connection Utilities
Connection pool for the customers database
"""

import asyncio
import asyncpg
import logging
from typing import Optional

from customer_crud.config import Settings

logger = logging.getLogger(__name__)


class CustomerDatabase:
    """Async PostgreSQL connection pool for the customers database"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pool: Optional[asyncpg.Pool] = None

    async def initialize(self):
        """Create and test connection pool"""
        try:
            self.pool = await asyncpg.create_pool(
                dsn=self.settings.dsn,
                min_size=self.settings.db_pool_min_size,
                max_size=self.settings.db_pool_max_size,
                command_timeout=self.settings.db_command_timeout,
            )

            # Test connection
            async with self.pool.acquire() as conn:
                result = await conn.fetchval('SELECT 1')
                if result != 1:
                    raise RuntimeError("Database health check failed")

            logger.info(f"Database connection pool initialized "
                        f"(db={self.settings.postgres_db}, "
                        f"size={self.settings.db_pool_min_size}-{self.settings.db_pool_max_size})")
        except DATABASE_ERRORS + (RuntimeError,) as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    async def close(self):
        """Close connection pool gracefully"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database connection pool closed")

    def get_pool(self) -> asyncpg.Pool:
        """Get connection pool"""
        if not self.pool:
            raise RuntimeError("Database pool not initialized. Call initialize() first.")
        return self.pool


# Failures raised by the driver or the network; anything else is a bug
DATABASE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)
