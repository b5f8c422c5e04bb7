"""
Session Toucher

Fire-and-forget ``last_seen_at`` updates, run outside the request's own
transaction so a slow or failing write never delays or fails the request.
"""

import asyncio
import logging
from typing import Callable, Set
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from clinic_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from clinic_auth.app.services.clock import Clock
from clinic_auth.app.use_cases.sessions import TouchSessionUseCase

logger = logging.getLogger(__name__)


class SessionToucher:
    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        clock: Clock,
        timeout_seconds: float = 5.0,
    ):
        self._session_factory = session_factory
        self._clock = clock
        self._timeout_seconds = timeout_seconds
        self._tasks: Set[asyncio.Task] = set()

    def schedule(self, session_id: UUID) -> None:
        """Start a background touch; the caller never awaits it"""
        task = asyncio.create_task(self._touch(session_id))
        # Keep a strong reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _touch(self, session_id: UUID) -> None:
        try:
            async with self._session_factory() as session:
                use_case = TouchSessionUseCase(SqlAlchemyUnitOfWork(session), self._clock)
                await asyncio.wait_for(
                    use_case.execute(session_id), timeout=self._timeout_seconds
                )
        except asyncio.TimeoutError:
            logger.warning(f"Touch timed out for session {session_id}")
        except SQLAlchemyError as exc:
            logger.warning(f"Touch failed for session {session_id}: {type(exc).__name__}")

    async def drain(self) -> None:
        """Wait for in-flight touches (used on shutdown)"""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
