"""
Create User Use Case

Provisions a new account.
"""

import logging

from clinic_auth.app.repositories.user_repository import UserFilter
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal, Role, User
from clinic_auth.domain.roles import can_manage_users, validate_role
from clinic_auth.libs.result import Error, Result, Return

from .dtos import CreateUserCommand, UserView

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3


class CreateUserUseCase:
    """
    Use case for account provisioning.

    Business Rules:
    - Caller must be admin or manager
    - Username: at least 3 characters after trimming, unique (USERNAME_TAKEN)
    - Display name must not be blank
    - Password must satisfy the length policy; only its Argon2id hash is stored
    - Role must be one of 0..4
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher, policy: SessionPolicy):
        self.uow = uow
        self.hasher = hasher
        self.policy = policy

    async def execute(self, caller: Principal, command: CreateUserCommand) -> Result[UserView]:
        """
        Execute create user use case.

        Args:
            caller: Authenticated admin or manager
            command: Account fields

        Returns:
            Result with the created UserView, or Error
        """
        if not can_manage_users(caller):
            return Return.err(Error("FORBIDDEN", "Only admins and managers can manage users"))

        return await self._provision(command, created_by=str(caller.user_id))

    async def _provision(
        self, command: CreateUserCommand, created_by: str, first_admin: bool = False
    ) -> Result[UserView]:
        username = command.username.strip()
        display_name = command.display_name.strip()

        if len(username) < MIN_USERNAME_LENGTH:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"username must be at least {MIN_USERNAME_LENGTH} characters",
                )
            )
        if not display_name:
            return Return.err(Error("VALIDATION_ERROR", "display_name is required"))

        validation = self.policy.validate_password(command.password)
        if validation.is_err():
            return validation

        role = validate_role(command.role)
        if role.is_err():
            return role

        async with self.uow:
            if first_admin and await self.uow.users.find(
                UserFilter(role=Role.admin.value, limit=1)
            ):
                return Return.err(Error("ADMIN_EXISTS", "An admin account already exists"))

            if await self.uow.users.get_by_username(username) is not None:
                return Return.err(Error("USERNAME_TAKEN", "Username is already taken"))

            hashed = await self.hasher.hash_password_async(command.password.strip())
            if hashed.is_err():
                return hashed

            user = User(
                username=username,
                display_name=display_name,
                password_hash=hashed.value,
                role=role.value.value,
                is_active=command.is_active,
            )
            user = await self.uow.users.create(user)
            view = UserView.from_user(user)

            await self.uow.commit()

        logger.info(f"User {view.user_id} ({view.role_name}) created by {created_by}")
        return Return.ok(view)


class BootstrapAdminUseCase(CreateUserUseCase):
    """
    Creates the first admin of an empty installation.

    Business Rules:
    - No caller: runs from the command line, not over HTTP
    - Refused with ADMIN_EXISTS once any admin account exists
    - Same username, display name and password rules as CreateUserUseCase
    """

    async def execute(self, username: str, display_name: str, password: str) -> Result[UserView]:
        command = CreateUserCommand(
            username=username,
            display_name=display_name,
            password=password,
            role=Role.admin.value,
        )
        return await self._provision(command, created_by="bootstrap", first_admin=True)
