from typing import Optional
from uuid import UUID

from clinic_auth.app.repositories.user_repository import UserFilter
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.domain.roles import can_manage_users
from clinic_auth.libs.result import Error, Result, Return

from .dtos import UserListResponse, UserView

FORBIDDEN = Error("FORBIDDEN", "Only admins and managers can manage users")


class ListUsersUseCase:
    """Newest accounts first, at most 200, optionally filtered"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        caller: Principal,
        role: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> Result[UserListResponse]:
        if not can_manage_users(caller):
            return Return.err(FORBIDDEN)

        async with self.uow:
            users = await self.uow.users.find(UserFilter(role=role, is_active=is_active))
            return Return.ok(UserListResponse(users=[UserView.from_user(u) for u in users]))


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal, user_id: UUID) -> Result[UserView]:
        if not can_manage_users(caller):
            return Return.err(FORBIDDEN)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))
            return Return.ok(UserView.from_user(user))
