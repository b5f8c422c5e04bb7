"""
Authentication Use Cases

Login, token rotation, password management and impersonation.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .change_password_use_case import ChangePasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .impersonate_use_case import ImpersonateUseCase
from .load_context_use_case import LoadContextUseCase
from .dtos import (
    LoginCommand,
    UserProfile,
    LoginResponse,
    RefreshTokenResponse,
    ChangePasswordResponse,
    ResetPasswordResponse,
    ImpersonateResponse,
    CurrentSessionInfo,
    ContextResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "ChangePasswordUseCase",
    "ResetPasswordUseCase",
    "ImpersonateUseCase",
    "LoadContextUseCase",
    # DTOs - Commands
    "LoginCommand",
    # DTOs - Responses
    "LoginResponse",
    "RefreshTokenResponse",
    "ChangePasswordResponse",
    "ResetPasswordResponse",
    "ImpersonateResponse",
    "ContextResponse",
    # DTOs - Nested Models
    "UserProfile",
    "CurrentSessionInfo",
]
