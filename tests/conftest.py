"""
Pytest fixtures for customer service tests
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from typing import Dict, Any

from customer_crud.utils.security import PasswordHasher


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


@pytest.fixture
def mock_db_pool():
    """Mock asyncpg database pool"""
    pool = MagicMock()
    conn = AsyncMock()

    # Configure connection context manager
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    return pool, conn


@pytest.fixture
def hasher() -> PasswordHasher:
    """Cheapest bcrypt work factor"""
    return PasswordHasher(rounds=4)


@pytest.fixture
def sample_customer_row() -> Dict[str, Any]:
    """Sample customers row"""
    return {
        "id": 1,
        "name": "Ann",
        "phone": "+1000",
        "active": True,
        "created": datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
    }
