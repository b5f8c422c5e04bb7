import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class TouchSessionUseCase:
    """
    Record activity on a session.

    Best effort: a store failure is logged and dropped, never raised.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, session_id: UUID) -> None:
        try:
            async with self.uow:
                await self.uow.sessions.touch(session_id, self.clock.now())
                await self.uow.commit()
        except SQLAlchemyError as exc:
            logger.warning(f"Could not touch session {session_id}: {type(exc).__name__}")
