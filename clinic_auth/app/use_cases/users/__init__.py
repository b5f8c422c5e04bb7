"""
User Management Use Cases

Account provisioning for admins and managers.
"""

from .create_user_use_case import BootstrapAdminUseCase, CreateUserUseCase
from .update_user_use_case import UpdateUserUseCase
from .set_user_active_use_case import SetUserActiveUseCase
from .list_users_use_case import ListUsersUseCase, GetUserUseCase
from .dtos import CreateUserCommand, UpdateUserCommand, UserView, UserListResponse

__all__ = [
    "BootstrapAdminUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "SetUserActiveUseCase",
    "ListUsersUseCase",
    "GetUserUseCase",
    "CreateUserCommand",
    "UpdateUserCommand",
    "UserView",
    "UserListResponse",
]
