"""
Service Context
Process-wide services, constructed once at startup and handed to the app
"""

from dataclasses import dataclass
from datetime import timedelta

import asyncpg

from customer_crud.config import Settings
from customer_crud.services.customer_service import CustomerService
from customer_crud.services.security_service import SecurityService
from customer_crud.services.token_service import TokenService
from customer_crud.utils.security import PasswordHasher


@dataclass
class ServiceContext:
    customers: CustomerService
    tokens: TokenService
    security: SecurityService


def build_context(pool: asyncpg.Pool, settings: Settings) -> ServiceContext:
    """Wire the stores around one connection pool"""
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    timeout = settings.db_command_timeout

    return ServiceContext(
        customers=CustomerService(pool, hasher, query_timeout=timeout),
        tokens=TokenService(
            pool,
            hasher,
            token_ttl=timedelta(seconds=settings.token_ttl_seconds),
            token_bytes=settings.token_bytes,
            query_timeout=timeout,
        ),
        security=SecurityService(pool, query_timeout=timeout),
    )
