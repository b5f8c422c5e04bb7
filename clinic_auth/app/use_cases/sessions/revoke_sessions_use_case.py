"""
Revoke Sessions Use Case

Handles session revocation for logout and session management.
"""

import logging
from uuid import UUID

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.domain.roles import is_privileged
from clinic_auth.libs.result import Error, Result, Return

from .dtos import RevokeCountResponse, RevokeSessionResponse

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for revoking sessions.

    Business Rules:
    - Single-session revocation requires ownership, even for admins
    - Revocation is terminal and takes effect on the next request
    - "Others" revokes every live session except the caller's current one
    - "All" revokes every unrevoked session of a user, current one included;
      admins and managers may target any user, everyone else only themselves
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def revoke_one(
        self, session_id: UUID, caller_user_id: UUID
    ) -> Result[RevokeSessionResponse]:
        """
        Revoke a specific session owned by the caller.

        Args:
            session_id: Session to revoke
            caller_user_id: Caller, who must own the session

        Returns:
            Result with revocation flag, or NOT_FOUND
        """
        async with self.uow:
            revoked = await self.uow.sessions.revoke_by_id(
                session_id, caller_user_id, self.clock.now()
            )
            if not revoked:
                return Return.err(Error("NOT_FOUND", "Session not found"))

            await self.uow.commit()

        logger.info(f"Session {session_id} revoked by user {caller_user_id}")
        return Return.ok(RevokeSessionResponse(session_id=str(session_id), revoked=True))

    async def logout(self, principal: Principal) -> Result[RevokeSessionResponse]:
        """Revoke the session the request was authenticated with"""
        return await self.revoke_one(principal.session_id, principal.user_id)

    async def revoke_all_except_current(
        self, caller_user_id: UUID, current_session_id: UUID
    ) -> Result[RevokeCountResponse]:
        """
        Revoke all live sessions for the user except the current session.

        Args:
            caller_user_id: Owner of the sessions
            current_session_id: Session to keep

        Returns:
            Result with count of revoked sessions
        """
        async with self.uow:
            count = await self.uow.sessions.revoke_all_except_session(
                caller_user_id, current_session_id, self.clock.now()
            )
            await self.uow.commit()

        logger.info(f"Revoked {count} other session(s) for user {caller_user_id}")
        return Return.ok(RevokeCountResponse(revoked_count=count))

    async def revoke_all(
        self, caller: Principal, target_user_id: UUID
    ) -> Result[RevokeCountResponse]:
        """
        Revoke every session of a user.

        Args:
            caller: Authenticated principal
            target_user_id: User whose sessions will be revoked

        Returns:
            Result with count of revoked sessions, or Error
        """
        is_self = target_user_id == caller.user_id
        if not is_self and not is_privileged(caller):
            return Return.err(
                Error("FORBIDDEN", "Only admins and managers can revoke other users' sessions")
            )

        async with self.uow:
            target = await self.uow.users.get_by_id(target_user_id)
            if target is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            count = await self.uow.sessions.revoke_all_by_user_id(
                target_user_id, self.clock.now()
            )
            await self.uow.commit()

        logger.warning(
            f"Revoked all {count} session(s) of user {target_user_id} "
            f"(requested by {caller.user_id})"
        )
        return Return.ok(RevokeCountResponse(revoked_count=count))
