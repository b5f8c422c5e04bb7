"""
Impersonate Use Case

Lets an admin act as another account through a short-lived session.
"""

import logging
from datetime import timedelta
from uuid import UUID

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.secret_generator import new_opaque_token
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal, Session, SessionType
from clinic_auth.domain.roles import can_impersonate
from clinic_auth.libs.result import Error, Result, Return

from .dtos import ImpersonateResponse, UserProfile

logger = logging.getLogger(__name__)


class ImpersonateUseCase:
    """
    Use case for admin impersonation.

    Business Rules:
    - Only admins may impersonate
    - Target must exist and be active (NOT_FOUND otherwise)
    - The new session belongs to the TARGET; resolution yields the target's identity
    - Fixed short TTL, independent of the target's usual policy
    - impersonator/impersonated ids are stored on the session and logged
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
        self, caller: Principal, target_user_id: UUID
    ) -> Result[ImpersonateResponse]:
        """
        Execute impersonation use case.

        Args:
            caller: Authenticated admin
            target_user_id: Account to impersonate

        Returns:
            Result with a token bound to the target account, or Error
        """
        if not can_impersonate(caller):
            return Return.err(Error("FORBIDDEN", "Only admins can impersonate users"))

        async with self.uow:
            target = await self.uow.users.get_by_id(target_user_id)
            if target is None or not target.is_active:
                return Return.err(Error("NOT_FOUND", "User not found or disabled"))

            now = self.clock.now()
            token = new_opaque_token()

            session = Session(
                user_id=target.id,
                token_hash=self.hasher.hash_token(token),
                session_type=SessionType.staff_portal.value,
                device_name=f"Impersonated by {caller.user_id}",
                created_at=now,
                last_seen_at=now,
                expires_at=now + timedelta(hours=self.policy.impersonation_ttl_hours),
                impersonator_user_id=caller.user_id,
                impersonated_user_id=target.id,
            )
            await self.uow.sessions.create(session)

            profile = UserProfile.from_user(target)
            await self.uow.commit()

        logger.warning(
            f"Impersonation: admin {caller.user_id} -> user {target_user_id}, "
            f"session {session.id}"
        )

        return Return.ok(
            ImpersonateResponse(
                token=token,
                session_id=str(session.id),
                expires_at=session.expires_at,
                impersonator_user_id=str(caller.user_id),
                user=profile,
            )
        )
