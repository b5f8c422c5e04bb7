"""
Session Use Case DTOs (Data Transfer Objects)

Views over session rows. Token digests are never exposed.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from clinic_auth.domain.entities import Session


def _opt_str(value) -> Optional[str]:
    return str(value) if value is not None else None


class SessionView(BaseModel):
    """One live session in the caller's device list"""

    session_id: str
    session_type: int
    device_name: Optional[str] = None
    created_at: datetime
    last_seen_at: Optional[datetime] = None
    expires_at: datetime
    is_current: bool
    is_impersonation: bool

    @classmethod
    def from_session(cls, session: Session, current_session_id=None) -> "SessionView":
        return cls(
            session_id=str(session.id),
            session_type=session.session_type,
            device_name=session.device_name,
            created_at=session.created_at,
            last_seen_at=session.last_seen_at,
            expires_at=session.expires_at,
            is_current=session.id == current_session_id,
            is_impersonation=session.is_impersonation,
        )


class SessionListResponse(BaseModel):
    """Response for list sessions use case"""

    current_session_id: str
    sessions: List[SessionView]


class SessionDetail(BaseModel):
    """Full session record, including terminal state"""

    session_id: str
    user_id: str
    session_type: int
    device_name: Optional[str] = None
    created_at: datetime
    last_seen_at: Optional[datetime] = None
    expires_at: datetime
    revoked_at: Optional[datetime] = None
    is_live: bool
    impersonator_user_id: Optional[str] = None
    impersonated_user_id: Optional[str] = None

    @classmethod
    def from_session(cls, session: Session, now: datetime) -> "SessionDetail":
        return cls(
            session_id=str(session.id),
            user_id=str(session.user_id),
            session_type=session.session_type,
            device_name=session.device_name,
            created_at=session.created_at,
            last_seen_at=session.last_seen_at,
            expires_at=session.expires_at,
            revoked_at=session.revoked_at,
            is_live=session.is_live(now),
            impersonator_user_id=_opt_str(session.impersonator_user_id),
            impersonated_user_id=_opt_str(session.impersonated_user_id),
        )


class ExtendSessionResponse(BaseModel):
    """Response for extend session use case"""

    session_id: str
    expires_at: datetime


class RevokeSessionResponse(BaseModel):
    """Response for single-session revocation"""

    session_id: str
    revoked: bool


class RevokeCountResponse(BaseModel):
    """Response for bulk revocation"""

    revoked_count: int
