"""
User Provisioning DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from clinic_auth.domain.entities import User
from clinic_auth.domain.roles import role_name


class CreateUserCommand(BaseModel):
    """New account as requested by an admin or manager"""

    username: str
    display_name: str
    password: str
    role: int
    is_active: bool = True


class UpdateUserCommand(BaseModel):
    """Partial account update; unset fields are left alone"""

    display_name: Optional[str] = None
    role: Optional[int] = None
    is_active: Optional[bool] = None


class UserView(BaseModel):
    """Account as shown to administrators (no password hash)"""

    user_id: str
    username: str
    display_name: str
    role: int
    role_name: str
    is_active: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            user_id=str(user.id),
            username=user.username,
            display_name=user.display_name,
            role=user.role,
            role_name=role_name(user.role),
            is_active=user.is_active,
            created_at=user.created_at,
        )


class UserListResponse(BaseModel):
    """Response for list users use case"""

    users: List[UserView]
