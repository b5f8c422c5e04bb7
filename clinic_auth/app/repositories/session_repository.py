from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from clinic_auth.domain.entities import Principal, Session


@dataclass(frozen=True)
class SessionFilter:
    """Optional criteria for session lookups; unset fields are ignored"""

    session_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    live_at: Optional[datetime] = None  # not revoked and not expired at this instant
    session_type: Optional[int] = None
    impersonator_user_id: Optional[UUID] = None
    limit: Optional[int] = None


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Insert a new session. Raises TokenHashCollisionError on duplicate digest."""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def find(self, criteria: SessionFilter) -> List[Session]:
        """Sessions matching criteria, most recently seen first"""
        pass

    @abstractmethod
    async def find_live_principal(
        self, token_hash: str, now: datetime
    ) -> Optional[Principal]:
        """Single joined lookup: live session for this digest, owned by an active user"""
        pass

    @abstractmethod
    async def rotate_token(
        self, session_id: UUID, user_id: UUID, new_token_hash: str, now: datetime
    ) -> Optional[datetime]:
        """Swap token_hash on a live owned session. Returns expires_at, or None."""
        pass

    @abstractmethod
    async def extend(
        self,
        session_id: UUID,
        hours: int,
        max_hours: int,
        now: datetime,
        owner_id: Optional[UUID] = None,
    ) -> Optional[datetime]:
        """
        Set expires_at = max(expires_at, min(max(expires_at, now) + hours, now + max_hours))
        in one statement on a live session. Returns the new expiry or None.
        """
        pass

    @abstractmethod
    async def touch(self, session_id: UUID, now: datetime) -> None:
        """Set last_seen_at"""
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID, user_id: UUID, now: datetime) -> bool:
        """Revoke an owned, not yet revoked session. Returns True if a row changed."""
        pass

    @abstractmethod
    async def revoke_all_except_session(
        self, user_id: UUID, session_id: UUID, now: datetime
    ) -> int:
        """Revoke every live session of the user except one. Returns count."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke every non-revoked session of the user. Returns count."""
        pass
