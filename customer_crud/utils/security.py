"""
Security utilities for the customer service

Provides bcrypt password hashing and random session token generation.
"""

import asyncio
import logging
import secrets

import bcrypt

from customer_crud.utils.exceptions import InternalError, TokenGenerationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_BYTES = 256


class PasswordHasher:
    """bcrypt password hasher with a tunable work factor"""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash password using bcrypt

        Args:
            password: Plain text password

        Returns:
            Hashed password (salt embedded)

        Raises:
            InternalError: If bcrypt cannot produce a hash
        """
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
            return hashed.decode('utf-8')
        except (ValueError, TypeError) as e:
            logger.error(f"Failed to hash password: {e}")
            raise InternalError() from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify password against hash

        Args:
            password: Plain text password
            hashed_password: Hashed password

        Returns:
            True if password matches, False on mismatch or malformed hash
        """
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to verify password: {e}")
            return False

    async def hash_password(self, password: str) -> str:
        """Hash password in thread pool to avoid blocking"""
        return await asyncio.to_thread(self.hash, password)

    async def verify_password(self, password: str, hashed_password: str) -> bool:
        """Verify password in thread pool to avoid blocking"""
        return await asyncio.to_thread(self.verify, password, hashed_password)


def generate_token(length: int = DEFAULT_TOKEN_BYTES) -> str:
    """
    Generate an opaque session token

    Args:
        length: Number of random bytes to draw

    Returns:
        Hex-encoded token, 2 * length characters

    Raises:
        TokenGenerationError: If the random source returns fewer bytes
    """
    try:
        buffer = secrets.token_bytes(length)
    except OSError as e:
        logger.critical(f"Random source unavailable: {e}")
        raise TokenGenerationError("random source unavailable") from e

    if len(buffer) != length:
        logger.critical(f"Short read from random source: {len(buffer)}/{length} bytes")
        raise TokenGenerationError("short read from random source")

    return buffer.hex()
