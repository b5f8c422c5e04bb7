"""
Session Use Cases

Session listing, extension, revocation and activity tracking.
"""

from .extend_session_use_case import ExtendSessionUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase
from .list_sessions_use_case import ListSessionsUseCase, GetSessionUseCase
from .touch_session_use_case import TouchSessionUseCase
from .dtos import (
    SessionView,
    SessionListResponse,
    SessionDetail,
    ExtendSessionResponse,
    RevokeSessionResponse,
    RevokeCountResponse,
)

__all__ = [
    # Use Cases
    "ExtendSessionUseCase",
    "RevokeSessionsUseCase",
    "ListSessionsUseCase",
    "GetSessionUseCase",
    "TouchSessionUseCase",
    # DTOs
    "SessionView",
    "SessionListResponse",
    "SessionDetail",
    "ExtendSessionResponse",
    "RevokeSessionResponse",
    "RevokeCountResponse",
]
