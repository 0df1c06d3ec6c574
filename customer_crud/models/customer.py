"""
Customer Models
Database model definitions for customer entities
"""

from typing import Optional, Dict, Any, Mapping
from datetime import datetime, timezone
from dataclasses import dataclass


@dataclass
class Customer:
    """Customer database model"""
    id: int = 0
    name: str = ""
    phone: str = ""
    password: Optional[str] = None
    active: bool = True
    created: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Customer":
        """Build from an asyncpg record; the password column is optional"""
        return cls(
            id=record['id'],
            name=record['name'],
            phone=record['phone'],
            password=record.get('password'),
            active=record['active'],
            created=record['created'],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (password hash excluded)"""
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'active': self.active,
            'created': self.created,
        }


@dataclass
class CustomerToken:
    """Customer session token model"""
    token: str
    customer_id: int
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """A token expires at its expiry instant, not after it"""
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now


@dataclass
class TokenValidation:
    """Outcome of a token validation; never an error"""
    status_code: str
    status: str
    customer_id: Optional[int] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"
