"""
Session Entity

Stores the digest of an opaque bearer token and the session's lifetime.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import SmallInteger
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import SessionType


class Session(SQLModel, table=True):
    """
    Session entity - one issued bearer token.

    Business Rules:
    - Only the SHA-256 hex digest of the token is stored (unique)
    - Live iff revoked_at is NULL, expires_at > now and the owner is active
    - expires_at only moves forward; revoked_at is terminal
    - Impersonation sessions carry impersonator/impersonated user ids
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    token_hash: str = Field(unique=True, max_length=64)

    session_type: int = Field(
        default=SessionType.undefined.value,
        sa_column=Column(SmallInteger, nullable=False),
    )
    device_name: Optional[str] = Field(default=None, max_length=255)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_seen_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Impersonation audit trail
    impersonator_user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")
    impersonated_user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked_at", "revoked_at"),
        Index("idx_session_last_seen_at", "last_seen_at"),
        Index("idx_session_impersonator", "impersonator_user_id"),
    )

    def is_live(self, now: datetime) -> bool:
        """Row-level part of the live predicate (owner status checked by the store)."""
        return self.revoked_at is None and self.expires_at > now

    @property
    def is_impersonation(self) -> bool:
        return self.impersonator_user_id is not None
