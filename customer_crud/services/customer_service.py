"""
Customer Service
All SQL access for customer records
"""

import logging
from typing import List, Optional

import asyncpg

from customer_crud.db.database import DATABASE_ERRORS
from customer_crud.models.customer import Customer
from customer_crud.utils.exceptions import InternalError, InvalidInputError, NotFoundError
from customer_crud.utils.security import PasswordHasher

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = "id, name, phone, active, created"


class CustomerService:
    """Customer store backed by the customers table"""

    def __init__(self, pool: asyncpg.Pool, hasher: PasswordHasher, query_timeout: Optional[float] = None):
        self.pool = pool
        self.hasher = hasher
        self.query_timeout = query_timeout

    async def _fetchrow(self, operation: str, query: str, *args) -> Optional[asyncpg.Record]:
        try:
            async with self.pool.acquire() as conn:
                return await conn.fetchrow(query, *args, timeout=self.query_timeout)
        except DATABASE_ERRORS as e:
            logger.error(f"{operation} failed: {e!r}")
            raise InternalError() from e

    async def _fetch(self, operation: str, query: str, *args) -> List[asyncpg.Record]:
        try:
            async with self.pool.acquire() as conn:
                return await conn.fetch(query, *args, timeout=self.query_timeout)
        except DATABASE_ERRORS as e:
            logger.error(f"{operation} failed: {e!r}")
            raise InternalError() from e

    async def _fetch_one(self, operation: str, query: str, *args) -> Customer:
        row = await self._fetchrow(operation, query, *args)
        if row is None:
            raise NotFoundError()
        return Customer.from_record(row)

    async def get_by_id(self, customer_id: int) -> Customer:
        """
        Get customer by ID

        Raises:
            NotFoundError: If no customer has this ID
            InternalError: On database failure
        """
        return await self._fetch_one(
            "get_by_id",
            f"SELECT {CUSTOMER_COLUMNS} FROM customers WHERE id = $1",
            customer_id
        )

    async def get_all(self) -> List[Customer]:
        """Get every customer"""
        rows = await self._fetch(
            "get_all",
            f"SELECT {CUSTOMER_COLUMNS} FROM customers ORDER BY id"
        )
        return [Customer.from_record(row) for row in rows]

    async def get_all_active(self) -> List[Customer]:
        """Get customers that are not blocked"""
        rows = await self._fetch(
            "get_all_active",
            f"SELECT {CUSTOMER_COLUMNS} FROM customers WHERE active ORDER BY id"
        )
        return [Customer.from_record(row) for row in rows]

    async def save(self, item: Customer) -> Customer:
        """
        Create (id == 0) or fully update a customer

        The password is re-hashed on every save, so updates must always
        carry the plaintext password.

        Args:
            item: Customer with plaintext password

        Returns:
            Customer: Stored row including its hash, id and created timestamp

        Raises:
            InvalidInputError: If the phone is already registered (create)
            NotFoundError: If no customer has the given ID (update)
            InternalError: On hashing or database failure
        """
        password_hash = await self.hasher.hash_password(item.password or "")

        if item.id == 0:
            row = await self._fetchrow(
                "save (insert)",
                f"""
                INSERT INTO customers (name, phone, password)
                VALUES ($1, $2, $3)
                ON CONFLICT DO NOTHING
                RETURNING {CUSTOMER_COLUMNS}, password
                """,
                item.name, item.phone, password_hash
            )
            if row is None:
                logger.warning(f"Customer with phone {item.phone} already exists")
                raise InvalidInputError("phone already registered")
            customer = Customer.from_record(row)
            logger.info(f"Customer created with ID: {customer.id}")
            return customer

        customer = await self._fetch_one(
            "save (update)",
            f"""
            UPDATE customers SET name = $2, phone = $3, password = $4
            WHERE id = $1
            RETURNING {CUSTOMER_COLUMNS}, password
            """,
            item.id, item.name, item.phone, password_hash
        )
        logger.info(f"Customer updated: {customer.id}")
        return customer

    async def remove_by_id(self, customer_id: int) -> Customer:
        """Delete a customer and return its prior state"""
        customer = await self._fetch_one(
            "remove_by_id",
            f"DELETE FROM customers WHERE id = $1 RETURNING {CUSTOMER_COLUMNS}",
            customer_id
        )
        logger.info(f"Customer removed: {customer_id}")
        return customer

    async def block_by_id(self, customer_id: int) -> Customer:
        """Mark a customer inactive"""
        return await self._set_active(customer_id, False)

    async def unblock_by_id(self, customer_id: int) -> Customer:
        """Mark a customer active"""
        return await self._set_active(customer_id, True)

    async def _set_active(self, customer_id: int, active: bool) -> Customer:
        customer = await self._fetch_one(
            "block_by_id" if not active else "unblock_by_id",
            f"UPDATE customers SET active = $2 WHERE id = $1 RETURNING {CUSTOMER_COLUMNS}",
            customer_id, active
        )
        logger.info(f"Customer {customer_id} {'unblocked' if active else 'blocked'}")
        return customer
