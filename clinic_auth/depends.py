from typing import Optional

from fastapi import Depends, Header, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from clinic_auth.adapter.services.session_toucher import SessionToucher
from clinic_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from clinic_auth.api.error import ClientError
from clinic_auth.app.services.authorization_context import AuthorizationContextResolver
from clinic_auth.app.services.clock import Clock, SystemClock
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

clock = SystemClock()
session_policy = SessionPolicy.from_config(ApplicationConfig)
credential_hasher = CredentialHasher.from_config(ApplicationConfig)
session_toucher = SessionToucher(
    AsyncSessionLocal, clock, timeout_seconds=ApplicationConfig.TOUCH_TIMEOUT_SECONDS
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return clock


def get_session_policy() -> SessionPolicy:
    return session_policy


def get_credential_hasher() -> CredentialHasher:
    return credential_hasher


def get_session_toucher() -> SessionToucher:
    return session_toucher


async def get_principal(
    authorization: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    clock: Clock = Depends(get_clock),
    toucher: SessionToucher = Depends(get_session_toucher),
) -> Principal:
    """
    Dependency resolving the bearer token to a Principal.

    Args:
        authorization: Raw Authorization header ("Bearer <token>"), None if absent

    Returns:
        Principal of the live session

    Raises:
        ClientError: 401 SESSION_EXPIRED if the token does not resolve
    """
    resolver = AuthorizationContextResolver(uow, hasher, clock)
    result = await resolver.resolve(authorization)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    principal = result.value
    toucher.schedule(principal.session_id)
    return principal
