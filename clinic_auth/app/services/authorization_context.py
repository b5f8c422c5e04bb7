"""
Authorization Context Resolver

Turns an Authorization header into a Principal or fails closed. Every
protected request goes through here; there is no cache, each call is one
joined lookup against the session store.
"""

import logging
from typing import Optional

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Principal
from clinic_auth.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

UNAUTHENTICATED = Error("SESSION_EXPIRED", "Session is invalid or has expired")


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from "Bearer <token>" (scheme is case-insensitive)"""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


class AuthorizationContextResolver:
    """
    Resolve bearer tokens to principals.

    Business Rules:
    - Missing or malformed header -> SESSION_EXPIRED
    - Token is looked up by its SHA-256 digest only
    - Session must be unrevoked, unexpired and owned by an active user
    - The check happens on every request (revocation takes effect immediately)
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher, clock: Clock):
        self.uow = uow
        self.hasher = hasher
        self.clock = clock

    async def resolve(self, authorization: Optional[str]) -> Result[Principal]:
        """
        Resolve a raw Authorization header value.

        Args:
            authorization: Header value, e.g. "Bearer abc..."

        Returns:
            Result with Principal, or SESSION_EXPIRED
        """
        token = parse_bearer(authorization)
        if token is None:
            return Return.err(UNAUTHENTICATED)
        return await self.resolve_token(token)

    async def resolve_token(self, token: str) -> Result[Principal]:
        if not token:
            return Return.err(UNAUTHENTICATED)

        token_hash = self.hasher.hash_token(token)
        async with self.uow:
            principal = await self.uow.sessions.find_live_principal(
                token_hash, self.clock.now()
            )

        if principal is None:
            logger.info("Bearer token did not resolve to a live session")
            return Return.err(UNAUTHENTICATED)
        return Return.ok(principal)
