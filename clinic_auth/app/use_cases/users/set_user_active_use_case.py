import logging
from uuid import UUID

from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.domain.roles import can_manage_users
from clinic_auth.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class SetUserActiveUseCase:
    """
    Enable or disable an account.

    Business Rules:
    - Caller must be admin or manager
    - A disabled account cannot log in and its sessions stop resolving
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal, user_id: UUID, active: bool) -> Result[dict]:
        if not can_manage_users(caller):
            return Return.err(Error("FORBIDDEN", "Only admins and managers can manage users"))

        async with self.uow:
            found = await self.uow.users.set_active(user_id, active)
            if not found:
                return Return.err(Error("NOT_FOUND", "User not found"))
            await self.uow.commit()

        logger.warning(
            f"User {user_id} {'enabled' if active else 'disabled'} by {caller.user_id}"
        )
        return Return.ok({"user_id": str(user_id), "is_active": active})
