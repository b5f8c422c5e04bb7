from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from clinic_auth.api.error import raise_for_error
from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.app.use_cases.sessions import (
    ExtendSessionResponse,
    ExtendSessionUseCase,
    GetSessionUseCase,
    ListSessionsUseCase,
    RevokeCountResponse,
    RevokeSessionResponse,
    RevokeSessionsUseCase,
    SessionDetail,
    SessionListResponse,
)
from clinic_auth.depends import get_clock, get_principal, get_session_policy, get_unit_of_work
from clinic_auth.domain.entities import Principal

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class ExtendSessionRequest(BaseModel):
    """Extension request; omit extend_hours for the caller's default TTL"""

    extend_hours: Optional[int] = Field(None, description="Hours to add")


class RevokeAllSessionsRequest(BaseModel):
    """Request to revoke all sessions for a user"""

    user_id: Optional[UUID] = Field(
        None, description="User whose sessions will be revoked (defaults to caller)"
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=SessionListResponse)
async def list_sessions(
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Live sessions of the caller, most recently active first"""
    result = await ListSessionsUseCase(uow, clock).execute(principal)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/revoke-others",
    status_code=status.HTTP_200_OK,
    response_model=RevokeCountResponse,
)
async def revoke_all_except_current(
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Revoke All Other Sessions

    Revokes every live session of the caller except the one making this request.
    """
    result = await RevokeSessionsUseCase(uow, clock).revoke_all_except_current(
        principal.user_id, principal.session_id
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeCountResponse,
)
async def revoke_all_sessions(
    request: RevokeAllSessionsRequest,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Revoke All Sessions

    Revokes every session of a user, including the current one.

    Authorization:
    - Users can revoke their own sessions
    - Admins/managers can revoke any user's sessions

    Raises:
        - 403 Forbidden: Insufficient permissions
        - 404 Not Found: User not found
    """
    target_user_id = request.user_id or principal.user_id

    result = await RevokeSessionsUseCase(uow, clock).revoke_all(principal, target_user_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{session_id}", status_code=status.HTTP_200_OK, response_model=SessionDetail)
async def get_session(
    session_id: UUID,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Get Session

    Admins and managers see any session; others only their own.

    Raises:
        - 404 Not Found: Session missing or not visible to the caller
    """
    result = await GetSessionUseCase(uow, clock).execute(principal, session_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{session_id}/extend",
    status_code=status.HTTP_200_OK,
    response_model=ExtendSessionResponse,
)
async def extend_session(
    session_id: UUID,
    request: Optional[ExtendSessionRequest] = None,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    policy: SessionPolicy = Depends(get_session_policy),
    clock: Clock = Depends(get_clock),
):
    """
    Extend Session

    Raises:
        - 400 Bad Request: extend_hours out of range
        - 404 Not Found: Session revoked, expired, missing or not visible
    """
    hours = request.extend_hours if request is not None else None

    result = await ExtendSessionUseCase(uow, policy, clock).execute(
        principal, session_id, hours
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{session_id}/revoke",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionResponse,
)
async def revoke_session(
    session_id: UUID,
    principal: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Revoke Specific Session

    Only the owner can revoke a session through this route.

    Raises:
        - 404 Not Found: Session missing, already revoked or not owned
    """
    result = await RevokeSessionsUseCase(uow, clock).revoke_one(session_id, principal.user_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
