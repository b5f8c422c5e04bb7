from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from clinic_auth.domain.entities import User


@dataclass(frozen=True)
class UserFilter:
    """Optional criteria for account listings; unset fields are ignored"""

    role: Optional[int] = None
    is_active: Optional[bool] = None
    limit: int = 200


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact (case-sensitive) username"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def find(self, criteria: UserFilter) -> List[User]:
        """Users matching criteria, newest first"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def update_password_hash(self, user_id: UUID, password_hash: str) -> bool:
        """Replace the stored hash. Returns True if the user exists."""
        pass

    @abstractmethod
    async def set_active(self, user_id: UUID, is_active: bool) -> bool:
        """Enable or disable. Returns True if the user exists."""
        pass
