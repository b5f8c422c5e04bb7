"""
Change Password Use Case

Self-service password change that signs out every other device.
"""

import logging

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.libs.result import Error, Result, Return

from .dtos import ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing the caller's own password.

    Business Rules:
    - Both passwords required; new password must satisfy the length policy
    - Old password must verify (INVALID_CREDENTIALS otherwise)
    - Hash update and revocation of all other live sessions share one transaction
    - The session making the request stays valid
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
        self, principal: Principal, old_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        """
        Execute change password use case.

        Args:
            principal: Authenticated caller
            old_password: Current plaintext password
            new_password: Desired plaintext password

        Returns:
            Result with number of other sessions revoked, or Error
        """
        if not old_password.strip() or not new_password.strip():
            return Return.err(
                Error("VALIDATION_ERROR", "old_password and new_password are required")
            )

        validation = self.policy.validate_password(new_password, field="new_password")
        if validation.is_err():
            return validation

        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None or not user.is_active:
                return Return.err(
                    Error("SESSION_EXPIRED", "Session is invalid or has expired")
                )

            if not await self.hasher.verify_password_async(old_password, user.password_hash):
                logger.info(f"Password change rejected for user {user.id}: wrong old password")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Current password is incorrect")
                )

            hashed = await self.hasher.hash_password_async(new_password)
            if hashed.is_err():
                return hashed

            await self.uow.users.update_password_hash(user.id, hashed.value)
            revoked_count = await self.uow.sessions.revoke_all_except_session(
                user.id, principal.session_id, self.clock.now()
            )

            await self.uow.commit()

        logger.info(
            f"Password changed for user {principal.user_id}; "
            f"revoked {revoked_count} other session(s)"
        )
        return Return.ok(ChangePasswordResponse(revoked_count=revoked_count))
