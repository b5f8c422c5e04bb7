"""
Load Context Use Case

Loads the current user and session for the authenticated principal.
"""

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.libs.result import Error, Result, Return

from .dtos import ContextResponse, CurrentSessionInfo, UserProfile


class LoadContextUseCase:
    """
    Use case for loading current user and session context.

    Business Rules:
    - User must exist and be active
    - Current session must still be live
    - Returns the public profile and current session details
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, principal: Principal) -> Result[ContextResponse]:
        """
        Execute load context use case.

        Args:
            principal: Resolved caller

        Returns:
            Result with user and session context, or SESSION_EXPIRED
        """
        expired = Error("SESSION_EXPIRED", "Session is invalid or has expired")

        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None or not user.is_active:
                return Return.err(expired)

            session = await self.uow.sessions.get_by_id(principal.session_id)
            if session is None or not session.is_live(self.clock.now()):
                return Return.err(expired)

            return Return.ok(
                ContextResponse(
                    user=UserProfile.from_user(user),
                    session=CurrentSessionInfo(
                        session_id=str(session.id),
                        session_type=session.session_type,
                        device_name=session.device_name,
                        expires_at=session.expires_at,
                        is_impersonation=session.is_impersonation,
                        impersonator_user_id=(
                            str(session.impersonator_user_id)
                            if session.impersonator_user_id
                            else None
                        ),
                    ),
                )
            )
