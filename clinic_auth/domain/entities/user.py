"""
User Entity

An account that can authenticate: clinic staff or a portal patient.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import SmallInteger
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now


class User(SQLModel, table=True):
    """
    User entity - credential, role and enabled flag of one account.

    Business Rules:
    - Username is unique and matched case-sensitively
    - Password stored as an Argon2id PHC string, never returned by the API
    - role is one of Role (0 patient .. 4 receptionist)
    - is_active=False blocks login and every session of the account
    - Accounts are never deleted, only disabled
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=150)
    display_name: str = Field(max_length=255)
    password_hash: str = Field(max_length=255)

    role: int = Field(sa_column=Column(SmallInteger, nullable=False))
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_role", "role"),
        Index("idx_user_is_active", "is_active"),
    )
