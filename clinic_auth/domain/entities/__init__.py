"""
Clinic Auth Domain Entities

All domain entities organized by model.
"""

from .enums import Role, SessionType
from .user import User
from .session import Session
from .principal import Principal

__all__ = [
    # Enums
    "Role",
    "SessionType",
    # Entities
    "User",
    "Session",
    # Request-scoped
    "Principal",
]
