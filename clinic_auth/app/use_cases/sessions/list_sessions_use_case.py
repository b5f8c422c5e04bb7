"""
List Sessions Use Case

Read access to session records.
"""

from uuid import UUID

from clinic_auth.app.repositories.session_repository import SessionFilter
from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.domain.roles import is_privileged
from clinic_auth.libs.result import Error, Result, Return

from .dtos import SessionDetail, SessionListResponse, SessionView


class ListSessionsUseCase:
    """
    Use case for listing the caller's live sessions.

    Business Rules:
    - Only live sessions are listed
    - Ordered by last activity (never-seen last), then newest first
    - The current session is flagged
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, principal: Principal) -> Result[SessionListResponse]:
        async with self.uow:
            sessions = await self.uow.sessions.find(
                SessionFilter(user_id=principal.user_id, live_at=self.clock.now())
            )
            return Return.ok(
                SessionListResponse(
                    current_session_id=str(principal.session_id),
                    sessions=[
                        SessionView.from_session(s, principal.session_id) for s in sessions
                    ],
                )
            )


class GetSessionUseCase:
    """
    Use case for fetching one session.

    Business Rules:
    - Admins and managers may fetch any session, in any state
    - Everyone else only their own
    - Anything not visible is NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, caller: Principal, session_id: UUID) -> Result[SessionDetail]:
        """
        Execute get session use case.

        Args:
            caller: Authenticated principal
            session_id: Session to fetch

        Returns:
            Result with SessionDetail, or NOT_FOUND
        """
        if is_privileged(caller):
            criteria = SessionFilter(session_id=session_id)
        else:
            criteria = SessionFilter(session_id=session_id, user_id=caller.user_id)

        async with self.uow:
            found = await self.uow.sessions.find(criteria)
            if not found:
                return Return.err(Error("NOT_FOUND", "Session not found"))
            return Return.ok(SessionDetail.from_session(found[0], self.clock.now()))
