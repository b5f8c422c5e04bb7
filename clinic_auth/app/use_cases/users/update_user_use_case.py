"""
Update User Use Case

Changes display name, role and/or enabled flag of an account.
"""

import logging
from uuid import UUID

from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.domain.roles import can_manage_users, validate_role
from clinic_auth.libs.result import Error, Result, Return

from .dtos import UpdateUserCommand, UserView

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """
    Use case for account updates.

    Business Rules:
    - Caller must be admin or manager
    - Display name, when given, must not be blank
    - Role, when given, must be one of 0..4
    - Disabling takes effect immediately: the owner's sessions stop resolving
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Principal, user_id: UUID, command: UpdateUserCommand
    ) -> Result[UserView]:
        if not can_manage_users(caller):
            return Return.err(Error("FORBIDDEN", "Only admins and managers can manage users"))

        display_name = None
        if command.display_name is not None:
            display_name = command.display_name.strip()
            if not display_name:
                return Return.err(Error("VALIDATION_ERROR", "display_name must not be blank"))

        role = None
        if command.role is not None:
            checked = validate_role(command.role)
            if checked.is_err():
                return checked
            role = checked.value

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            if display_name is not None:
                user.display_name = display_name
            if role is not None:
                user.role = role.value
            if command.is_active is not None:
                user.is_active = command.is_active

            user = await self.uow.users.update(user)
            view = UserView.from_user(user)

            await self.uow.commit()

        logger.info(f"User {user_id} updated by {caller.user_id}")
        return Return.ok(view)
