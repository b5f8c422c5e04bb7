import logging
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from sqlalchemy import DateTime, case, func, literal, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from clinic_auth.app.repositories.session_repository import ISessionRepository, SessionFilter
from clinic_auth.domain.entities import Principal, Session, User
from clinic_auth.domain.exceptions import TokenHashCollisionError

logger = logging.getLogger(__name__)


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if "token_hash" in str(exc.orig):
                logger.critical("Session token digest collision on insert")
                raise TokenHashCollisionError("token_hash already present") from exc
            raise
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find(self, criteria: SessionFilter) -> List[Session]:
        """Sessions matching criteria, most recently seen first"""
        stmt = _apply_filter(select(Session), criteria).order_by(
            Session.last_seen_at.desc().nulls_last(),
            Session.created_at.desc(),
        )
        if criteria.limit is not None:
            stmt = stmt.limit(criteria.limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def find_live_principal(
        self, token_hash: str, now: datetime
    ) -> Optional[Principal]:
        """Join session and owner in one round trip; all liveness rules in SQL"""
        stmt = (
            select(Session.id, Session.user_id, User.role)
            .join(User, User.id == Session.user_id)
            .where(
                Session.token_hash == token_hash,
                Session.revoked_at.is_(None),
                Session.expires_at > now,
                User.is_active == True,  # noqa: E712
            )
        )
        result = await self.session.exec(stmt)
        row = result.first()
        if row is None:
            return None
        session_id, user_id, role = row
        return Principal(user_id=user_id, role=role, session_id=session_id)

    async def rotate_token(
        self, session_id: UUID, user_id: UUID, new_token_hash: str, now: datetime
    ) -> Optional[datetime]:
        """Compare-and-swap of token_hash guarded by the live predicate"""
        stmt = (
            update(Session)
            .where(
                Session.id == session_id,
                Session.user_id == user_id,
                Session.revoked_at.is_(None),
                Session.expires_at > now,
            )
            .values(token_hash=new_token_hash, last_seen_at=now)
            .returning(Session.expires_at)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        await self.session.flush()
        return row[0] if row is not None else None

    async def extend(
        self,
        session_id: UUID,
        hours: int,
        max_hours: int,
        now: datetime,
        owner_id: Optional[UUID] = None,
    ) -> Optional[datetime]:
        """
        Expiry is computed by the database from the current row.

        Expired rows stay expired, and a row already past the cap keeps its
        expiry: the result is never earlier than the stored value.
        """
        cap_at = now + timedelta(hours=max_hours)
        from_now = now + timedelta(hours=hours)

        base = case(
            (Session.expires_at > now, self._add_hours(Session.expires_at, hours)),
            else_=literal(from_now, DateTime),
        )
        capped = case(
            (base < cap_at, base),
            else_=literal(cap_at, DateTime),
        )
        new_expiry = case(
            (capped > Session.expires_at, capped),
            else_=Session.expires_at,
        )

        stmt = update(Session).where(
            Session.id == session_id,
            Session.revoked_at.is_(None),
            Session.expires_at > now,
        )
        if owner_id is not None:
            stmt = stmt.where(Session.user_id == owner_id)
        stmt = stmt.values(expires_at=new_expiry).returning(Session.expires_at)

        result = await self.session.execute(stmt)
        row = result.first()
        await self.session.flush()
        return row[0] if row is not None else None

    async def touch(self, session_id: UUID, now: datetime) -> None:
        stmt = update(Session).where(Session.id == session_id).values(last_seen_at=now)
        await self.session.execute(stmt)
        await self.session.flush()

    async def revoke_by_id(self, session_id: UUID, user_id: UUID, now: datetime) -> bool:
        """Revoke a specific owned session"""
        stmt = (
            update(Session)
            .where(
                Session.id == session_id,
                Session.user_id == user_id,
                Session.revoked_at.is_(None),
            )
            .values(revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_except_session(
        self, user_id: UUID, session_id: UUID, now: datetime
    ) -> int:
        """Revoke all live sessions for a user except the specified session"""
        stmt = (
            update(Session)
            .where(
                Session.user_id == user_id,
                Session.id != session_id,
                Session.revoked_at.is_(None),
                Session.expires_at > now,
            )
            .values(revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke every session of a user that is not already revoked"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.revoked_at.is_(None))
            .values(revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    def _add_hours(self, column, hours: int):
        # SQLite keeps DateTime as "YYYY-MM-DD HH:MM:SS.ffffff" text
        if self.session.get_bind().dialect.name == "sqlite":
            return func.strftime(
                "%Y-%m-%d %H:%M:%f000", column, f"+{int(hours)} hours", type_=DateTime
            )
        return column + timedelta(hours=hours)


def _apply_filter(stmt, criteria: SessionFilter):
    """Translate a SessionFilter into bound WHERE criteria"""
    if criteria.session_id is not None:
        stmt = stmt.where(Session.id == criteria.session_id)
    if criteria.user_id is not None:
        stmt = stmt.where(Session.user_id == criteria.user_id)
    if criteria.live_at is not None:
        stmt = stmt.where(
            Session.revoked_at.is_(None),
            Session.expires_at > criteria.live_at,
        )
    if criteria.session_type is not None:
        stmt = stmt.where(Session.session_type == criteria.session_type)
    if criteria.impersonator_user_id is not None:
        stmt = stmt.where(Session.impersonator_user_id == criteria.impersonator_user_id)
    return stmt
