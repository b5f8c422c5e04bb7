"""
Extend Session Use Case

Pushes a session's expiry forward, bounded by the extension horizon.
"""

import logging
from typing import Optional
from uuid import UUID

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.domain.roles import is_privileged
from clinic_auth.libs.result import Error, Result, Return

from .dtos import ExtendSessionResponse

logger = logging.getLogger(__name__)


class ExtendSessionUseCase:
    """
    Use case for extending a session.

    Business Rules:
    - Hours default to the caller's login TTL (patients 72h, others 24h)
    - 0 < hours <= max_extend_hours
    - new expiry = min(max(expires_at, now) + hours, now + max_extend_hours),
      computed by the store in one statement
    - Admins and managers may extend any session; others only their own
    - Revoked, expired, missing or foreign sessions -> NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork, policy: SessionPolicy, clock: Clock):
        self.uow = uow
        self.policy = policy
        self.clock = clock

    async def execute(
        self, caller: Principal, session_id: UUID, hours: Optional[int] = None
    ) -> Result[ExtendSessionResponse]:
        """
        Execute extend session use case.

        Args:
            caller: Authenticated principal
            session_id: Session to extend
            hours: Requested extension, or None for the default

        Returns:
            Result with the new expiry, or Error
        """
        if hours is None:
            hours = self.policy.default_extend_hours(caller.role)

        if hours <= 0 or hours > self.policy.max_extend_hours:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"extend_hours must be between 1 and {self.policy.max_extend_hours}",
                )
            )

        owner_id = None if is_privileged(caller) else caller.user_id

        async with self.uow:
            expires_at = await self.uow.sessions.extend(
                session_id,
                hours,
                self.policy.max_extend_hours,
                self.clock.now(),
                owner_id=owner_id,
            )
            if expires_at is None:
                return Return.err(Error("NOT_FOUND", "Session not found"))

            await self.uow.commit()

        logger.info(f"Session {session_id} extended by {hours}h by user {caller.user_id}")
        return Return.ok(
            ExtendSessionResponse(session_id=str(session_id), expires_at=expires_at)
        )
