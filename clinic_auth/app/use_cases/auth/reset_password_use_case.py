"""
Reset Password Use Case

Administrative password reset, optionally issuing a temporary password.
"""

import logging
from typing import Optional

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.secret_generator import new_temporary_password
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.domain.roles import can_reset_passwords
from clinic_auth.libs.result import Error, Result, Return

from .dtos import ResetPasswordResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting another account's password.

    Business Rules:
    - Caller must be admin or manager
    - Explicit password must satisfy the length policy
    - No password given -> a temporary one is generated and returned once
    - Hash update and revocation of ALL the target's sessions share one transaction
    - The temporary password is never logged
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: CredentialHasher,
        policy: SessionPolicy,
        clock: Clock,
    ):
        self.uow = uow
        self.hasher = hasher
        self.policy = policy
        self.clock = clock

    async def execute(
        self, caller: Principal, username: str, new_password: Optional[str] = None
    ) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            caller: Authenticated admin or manager
            username: Account to reset
            new_password: Explicit password, or None/blank for a temporary one

        Returns:
            Result with ResetPasswordResponse, or Error
        """
        if not can_reset_passwords(caller):
            return Return.err(
                Error("FORBIDDEN", "Only admins and managers can reset passwords")
            )

        username = (username or "").strip()
        if not username:
            return Return.err(Error("VALIDATION_ERROR", "username is required"))

        temporary_password = None
        if new_password is not None and new_password.strip():
            validation = self.policy.validate_password(new_password, field="new_password")
            if validation.is_err():
                return validation
            password = new_password.strip()
        else:
            temporary_password = new_temporary_password(self.policy.temp_password_length)
            password = temporary_password

        async with self.uow:
            user = await self.uow.users.get_by_username(username)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            hashed = await self.hasher.hash_password_async(password)
            if hashed.is_err():
                return hashed

            await self.uow.users.update_password_hash(user.id, hashed.value)
            revoked_count = await self.uow.sessions.revoke_all_by_user_id(
                user.id, self.clock.now()
            )

            response = ResetPasswordResponse(
                user_id=str(user.id),
                username=user.username,
                revoked_count=revoked_count,
                temporary_password=temporary_password,
            )
            await self.uow.commit()

        logger.warning(
            f"Password reset for user {response.user_id} by {caller.user_id}; "
            f"revoked {revoked_count} session(s), "
            f"temporary={'yes' if temporary_password else 'no'}"
        )
        return Return.ok(response)
