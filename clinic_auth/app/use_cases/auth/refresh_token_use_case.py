"""
Refresh Token Use Case

Rotates the bearer token of the caller's current session.
"""

import logging
from uuid import UUID

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.secret_generator import new_opaque_token
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.libs.result import Error, Result, Return

from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for token rotation.

    Business Rules:
    - Session must be live and owned by the caller
    - The digest swap is a single guarded UPDATE (no read-then-write window)
    - The old token stops resolving as soon as the swap commits
    - Session id and expiry are unchanged
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher, clock: Clock):
        self.uow = uow
        self.hasher = hasher
        self.clock = clock

    async def execute(self, session_id: UUID, user_id: UUID) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            session_id: Session to rotate
            user_id: Caller, who must own the session

        Returns:
            Result with the new token and expiry, or SESSION_EXPIRED
        """
        token = new_opaque_token()

        async with self.uow:
            expires_at = await self.uow.sessions.rotate_token(
                session_id, user_id, self.hasher.hash_token(token), self.clock.now()
            )
            if expires_at is None:
                return Return.err(
                    Error("SESSION_EXPIRED", "Session is invalid or has expired")
                )

            await self.uow.commit()

        logger.info(f"Token rotated for session {session_id}")
        return Return.ok(
            RefreshTokenResponse(
                token=token, session_id=str(session_id), expires_at=expires_at
            )
        )
