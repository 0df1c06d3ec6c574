"""
Token Service
Issues and validates customer session tokens
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import asyncpg

from customer_crud.db.database import DATABASE_ERRORS
from customer_crud.models.customer import CustomerToken, TokenValidation
from customer_crud.utils.exceptions import InternalError, InvalidPasswordError, NoSuchUserError
from customer_crud.utils.security import DEFAULT_TOKEN_BYTES, PasswordHasher, generate_token

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_FAIL = "fail"
REASON_NOT_FOUND = "notFound"
REASON_EXPIRED = "expired"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Session token store backed by the customers_tokens table"""

    def __init__(
        self,
        pool: asyncpg.Pool,
        hasher: PasswordHasher,
        token_ttl: timedelta = timedelta(hours=1),
        token_bytes: int = DEFAULT_TOKEN_BYTES,
        query_timeout: Optional[float] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.pool = pool
        self.hasher = hasher
        self.token_ttl = token_ttl
        self.token_bytes = token_bytes
        self.query_timeout = query_timeout
        self.clock = clock

    async def issue_token(self, phone: str, password: str) -> str:
        """
        Issue a session token for a customer

        Args:
            phone: Customer phone (login)
            password: Plain text password

        Returns:
            str: Hex-encoded token

        Raises:
            NoSuchUserError: If no customer has this phone
            InvalidPasswordError: If the password does not match
            InternalError: On database or entropy failure
        """
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    "SELECT id, password FROM customers WHERE phone = $1",
                    phone,
                    timeout=self.query_timeout
                )
        except DATABASE_ERRORS as e:
            logger.error(f"Customer lookup for token failed: {e!r}")
            raise InternalError() from e

        if row is None:
            raise NoSuchUserError()

        if not await self.hasher.verify_password(password, row['password']):
            logger.warning(f"Invalid password for customer {row['id']}")
            raise InvalidPasswordError()

        token = generate_token(self.token_bytes)
        expires_at = self.clock() + self.token_ttl
        # customers_tokens.expire is TIMESTAMP without time zone, holding UTC
        expire_utc = expires_at.astimezone(timezone.utc).replace(tzinfo=None)

        # Not atomic with the lookup above: a customer deleted in between
        # surfaces as a foreign key violation, i.e. InternalError.
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(
                    "INSERT INTO customers_tokens (token, customer_id, expire) VALUES ($1, $2, $3)",
                    token, row['id'], expire_utc,
                    timeout=self.query_timeout
                )
        except DATABASE_ERRORS as e:
            logger.error(f"Token insert failed for customer {row['id']}: {e!r}")
            raise InternalError() from e

        logger.info(f"Token issued for customer {row['id']}, expires at {expires_at.isoformat()}")
        return token

    async def validate_token(self, token: str) -> TokenValidation:
        """
        Validate a session token

        Never raises: a failed lookup is reported as notFound.
        """
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    "SELECT token, customer_id, expire FROM customers_tokens WHERE token = $1",
                    token,
                    timeout=self.query_timeout
                )
        except DATABASE_ERRORS as e:
            logger.error(f"Token lookup failed (engine error, answering notFound): {e!r}")
            row = None

        if row is None:
            return TokenValidation(
                status_code="Not Found",
                status=STATUS_FAIL,
                reason=REASON_NOT_FOUND,
            )

        session = CustomerToken(
            token=row['token'],
            customer_id=row['customer_id'],
            expires_at=row['expire'],
        )
        if session.is_expired(self.clock()):
            return TokenValidation(
                status_code="Bad Request",
                status=STATUS_FAIL,
                reason=REASON_EXPIRED,
            )

        return TokenValidation(
            status_code="OK",
            status=STATUS_OK,
            customer_id=session.customer_id,
        )
