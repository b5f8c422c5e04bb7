"""
Login Use Case

Verifies credentials and issues an opaque session token.
"""

import logging
from datetime import timedelta

from clinic_auth.app.services.clock import Clock
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.secret_generator import new_opaque_token
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.services.unit_of_work import UnitOfWork
from clinic_auth.domain.entities import Session, SessionType
from clinic_auth.libs.result import Error, Result, Return

from .dtos import LoginCommand, LoginResponse, UserProfile

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid username or password")


class LoginUseCase:
    """
    Use case for user login and session issuance.

    Business Rules:
    - Unknown username and wrong password return the identical error
    - Unknown username still costs one hash verification (uniform timing)
    - Disabled accounts are rejected with FORBIDDEN
    - A login surface may require a role (patient portal requires patient)
    - TTL: patient portal -> patient TTL, remember_me -> long TTL, else default
    - Only the SHA-256 digest of the token is stored; the plaintext is returned once
    - No lockout state: repeated failures are all INVALID_CREDENTIALS
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: CredentialHasher,
        policy: SessionPolicy,
        clock: Clock,
    ):
        self.uow = uow
        self.hasher = hasher
        self.policy = policy
        self.clock = clock

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            command: Username, plaintext password and session options

        Returns:
            Result with LoginResponse containing the token, or Error
        """
        username = command.username.strip()
        if not username or not command.password:
            return Return.err(
                Error("VALIDATION_ERROR", "username and password are required")
            )

        try:
            session_type = SessionType(command.session_type)
        except ValueError:
            return Return.err(Error("VALIDATION_ERROR", "Unknown session_type"))

        async with self.uow:
            user = await self.uow.users.get_by_username(username)

            if user is None:
                await self.hasher.dummy_verify_async()
                logger.info("Login failed: unknown username")
                return Return.err(INVALID_CREDENTIALS)

            if not user.is_active:
                logger.info(f"Login rejected for disabled user {user.id}")
                return Return.err(Error("FORBIDDEN", "Account is disabled"))

            if command.required_role is not None and user.role != command.required_role:
                logger.info(f"Login rejected for user {user.id}: role not allowed here")
                return Return.err(
                    Error("FORBIDDEN", "Account type not allowed for this login")
                )

            password_valid = await self.hasher.verify_password_async(
                command.password, user.password_hash
            )
            if not password_valid:
                logger.info(f"Login failed for user {user.id}: wrong password")
                return Return.err(INVALID_CREDENTIALS)

            now = self.clock.now()
            ttl_hours = self.policy.login_ttl_hours(session_type, command.remember_me)

            token = new_opaque_token()
            device_name = (command.device_name or "").strip() or None

            session = Session(
                user_id=user.id,
                token_hash=self.hasher.hash_token(token),
                session_type=session_type.value,
                device_name=device_name,
                created_at=now,
                last_seen_at=now,
                expires_at=now + timedelta(hours=ttl_hours),
            )
            await self.uow.sessions.create(session)

            profile = UserProfile.from_user(user)
            await self.uow.commit()

            logger.info(
                f"Login succeeded for user {user.id}, session {session.id} "
                f"(type={session_type.name}, ttl={ttl_hours}h)"
            )

            return Return.ok(
                LoginResponse(
                    token=token,
                    session_id=str(session.id),
                    expires_at=session.expires_at,
                    user=profile,
                )
            )
