from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from clinic_auth.app.repositories.user_repository import IUserRepository, UserFilter
from clinic_auth.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username"""
        stmt = select(User).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find(self, criteria: UserFilter) -> List[User]:
        """Users matching criteria, newest first"""
        stmt = select(User)
        if criteria.role is not None:
            stmt = stmt.where(User.role == criteria.role)
        if criteria.is_active is not None:
            stmt = stmt.where(User.is_active == criteria.is_active)
        stmt = stmt.order_by(User.created_at.desc()).limit(criteria.limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_password_hash(self, user_id: UUID, password_hash: str) -> bool:
        stmt = update(User).where(User.id == user_id).values(password_hash=password_hash)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def set_active(self, user_id: UUID, is_active: bool) -> bool:
        stmt = update(User).where(User.id == user_id).values(is_active=is_active)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
