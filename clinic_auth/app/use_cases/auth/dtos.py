"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Plaintext tokens and passwords appear here only in the response that
issued them.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from clinic_auth.domain.entities import SessionType, User
from clinic_auth.domain.roles import role_name


# ============================================================================
# Commands
# ============================================================================


class LoginCommand(BaseModel):
    """Login intent as accepted by the staff and patient login surfaces"""

    username: str
    password: str
    session_type: int = SessionType.staff_portal.value
    device_name: Optional[str] = None
    remember_me: bool = False
    required_role: Optional[int] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserProfile(BaseModel):
    """Public account fields (never the password hash)"""

    user_id: str
    username: str
    display_name: str
    role: int
    role_name: str

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            user_id=str(user.id),
            username=user.username,
            display_name=user.display_name,
            role=user.role,
            role_name=role_name(user.role),
        )


class LoginResponse(BaseModel):
    """Response for login use case"""

    token: str
    session_id: str
    expires_at: datetime
    user: UserProfile


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    token: str
    session_id: str
    expires_at: datetime


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    revoked_count: int


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    user_id: str
    username: str
    revoked_count: int
    temporary_password: Optional[str] = None


class ImpersonateResponse(BaseModel):
    """Response for impersonation use case"""

    token: str
    session_id: str
    expires_at: datetime
    impersonator_user_id: str
    user: UserProfile


class CurrentSessionInfo(BaseModel):
    """The session the current request was authenticated with"""

    session_id: str
    session_type: int
    device_name: Optional[str] = None
    expires_at: datetime
    is_impersonation: bool
    impersonator_user_id: Optional[str] = None


class ContextResponse(BaseModel):
    """Response for load context use case (/auth/me)"""

    user: UserProfile
    session: CurrentSessionInfo
