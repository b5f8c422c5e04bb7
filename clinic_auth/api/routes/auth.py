from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from clinic_auth.api.error import raise_for_error
from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.app.use_cases.auth import (
    ChangePasswordResponse,
    ChangePasswordUseCase,
    ContextResponse,
    ImpersonateResponse,
    ImpersonateUseCase,
    LoadContextUseCase,
    LoginCommand,
    LoginResponse,
    LoginUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
)
from clinic_auth.app.use_cases.sessions import (
    RevokeSessionResponse,
    RevokeSessionsUseCase,
)
from clinic_auth.depends import (
    get_clock,
    get_credential_hasher,
    get_principal,
    get_session_policy,
    get_unit_of_work,
)
from clinic_auth.domain.entities import Principal, Role, SessionType

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """Staff login HTTP request payload"""

    username: str = Field(..., description="Account username (exact match)")
    password: str = Field(..., description="Account password")
    device_name: Optional[str] = Field(None, max_length=255)
    remember_me: bool = Field(False, description="Use the long staff session TTL")


class PatientLoginRequest(BaseModel):
    """Patient-portal login HTTP request payload"""

    username: str
    password: str
    device_name: Optional[str] = Field(None, max_length=255)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    policy: SessionPolicy = Depends(get_session_policy),
    clock: Clock = Depends(get_clock),
):
    """
    Staff Login

    Verifies credentials and returns an opaque bearer token (shown once).

    Raises:
        - 400 Bad Request: Blank username or password
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account disabled
    """
    command = LoginCommand(
        username=request.username,
        password=request.password,
        session_type=SessionType.staff_portal.value,
        device_name=request.device_name,
        remember_me=request.remember_me,
    )

    result = await LoginUseCase(uow, hasher, policy, clock).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/patient/login", status_code=status.HTTP_200_OK, response_model=LoginResponse
)
async def patient_login(
    request: PatientLoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    policy: SessionPolicy = Depends(get_session_policy),
    clock: Clock = Depends(get_clock),
):
    """
    Patient Portal Login

    Same as staff login, restricted to patient accounts, with the patient TTL.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account disabled or not a patient account
    """
    command = LoginCommand(
        username=request.username,
        password=request.password,
        session_type=SessionType.patient_portal.value,
        device_name=request.device_name,
        required_role=Role.patient.value,
    )

    result = await LoginUseCase(uow, hasher, policy, clock).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ContextResponse)
async def get_me(
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Current user profile and session"""
    result = await LoadContextUseCase(uow, clock).execute(principal)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=RevokeSessionResponse)
async def logout(
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Revoke the session this request was made with"""
    result = await RevokeSessionsUseCase(uow, clock).logout(principal)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    clock: Clock = Depends(get_clock),
):
    """
    Rotate Token

    Issues a new token for the current session. The token used for this
    request stops working immediately.

    Raises:
        - 401 Unauthorized: Session no longer live
    """
    result = await RefreshTokenUseCase(uow, hasher, clock).execute(
        principal.session_id, principal.user_id
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str


@router.post(
    "/change-password",
    status_code=status.HTTP_200_OK,
    response_model=ChangePasswordResponse,
)
async def change_password(
    request: ChangePasswordRequest,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    policy: SessionPolicy = Depends(get_session_policy),
    clock: Clock = Depends(get_clock),
):
    """
    Change Password

    Verifies the current password, stores the new one and revokes all other
    sessions. The current session stays valid.

    Raises:
        - 400 Bad Request: Blank or too short password
        - 401 Unauthorized: Wrong current password
    """
    result = await ChangePasswordUseCase(uow, hasher, policy, clock).execute(
        principal, request.old_password, request.new_password
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    username: str
    new_password: Optional[str] = Field(
        None, description="Omit to generate a temporary password"
    )


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    policy: SessionPolicy = Depends(get_session_policy),
    clock: Clock = Depends(get_clock),
):
    """
    Reset Password (admin/manager)

    Sets a new password for another account and revokes all of its sessions.

    Raises:
        - 403 Forbidden: Caller is not admin or manager
        - 404 Not Found: Unknown username
    """
    result = await ResetPasswordUseCase(uow, hasher, policy, clock).execute(
        principal, request.username, request.new_password
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/impersonate/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=ImpersonateResponse,
)
async def impersonate(
    user_id: UUID,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    policy: SessionPolicy = Depends(get_session_policy),
    clock: Clock = Depends(get_clock),
):
    """
    Impersonate (admin)

    Returns a short-lived token bound to the target account.

    Raises:
        - 403 Forbidden: Caller is not an admin
        - 404 Not Found: Target missing or disabled
    """
    result = await ImpersonateUseCase(uow, hasher, policy, clock).execute(principal, user_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
