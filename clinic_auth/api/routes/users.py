from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from clinic_auth.api.error import raise_for_error
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    SetUserActiveUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
    UserListResponse,
    UserView,
)
from clinic_auth.depends import (
    get_credential_hasher,
    get_principal,
    get_session_policy,
    get_unit_of_work,
)
from clinic_auth.domain.entities import Principal

router = APIRouter(prefix="/users", tags=["Users"])


class CreateUserRequest(BaseModel):
    """Account provisioning HTTP request payload"""

    username: str = Field(..., max_length=150)
    display_name: str = Field(..., max_length=255)
    password: str
    role: int = Field(..., description="0 patient, 1 admin, 2 manager, 3 doctor, 4 receptionist")
    is_active: bool = True


class UpdateUserRequest(BaseModel):
    display_name: Optional[str] = Field(None, max_length=255)
    role: Optional[int] = None
    is_active: Optional[bool] = None


class UserActiveResponse(BaseModel):
    user_id: str
    is_active: bool


@router.get("", status_code=status.HTTP_200_OK, response_model=UserListResponse)
async def list_users(
    role: Optional[int] = Query(None),
    is_active: Optional[bool] = Query(None),
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Newest 200 accounts, optionally filtered by role and enabled flag"""
    result = await ListUsersUseCase(uow).execute(principal, role=role, is_active=is_active)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserView)
async def create_user(
    request: CreateUserRequest,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    policy: SessionPolicy = Depends(get_session_policy),
):
    """
    Create User

    Raises:
        - 400 Bad Request: Invalid username, display name, password or role
        - 403 Forbidden: Caller is not admin or manager
        - 409 Conflict: Username already taken
    """
    command = CreateUserCommand(
        username=request.username,
        display_name=request.display_name,
        password=request.password,
        role=request.role,
        is_active=request.is_active,
    )

    result = await CreateUserUseCase(uow, hasher, policy).execute(principal, command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserView)
async def get_user(
    user_id: UUID,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetUserUseCase(uow).execute(principal, user_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserView)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update User

    Disabling an account immediately invalidates all of its sessions.
    """
    command = UpdateUserCommand(
        display_name=request.display_name,
        role=request.role,
        is_active=request.is_active,
    )

    result = await UpdateUserUseCase(uow).execute(principal, user_id, command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/{user_id}/enable", status_code=status.HTTP_200_OK, response_model=UserActiveResponse)
async def enable_user(
    user_id: UUID,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SetUserActiveUseCase(uow).execute(principal, user_id, True)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/{user_id}/disable", status_code=status.HTTP_200_OK, response_model=UserActiveResponse)
async def disable_user(
    user_id: UUID,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SetUserActiveUseCase(uow).execute(principal, user_id, False)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
