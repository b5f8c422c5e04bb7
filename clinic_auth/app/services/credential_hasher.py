"""
Credential Hasher

Argon2id for passwords, SHA-256 for bearer tokens.

Password hashing is deliberately slow, so the async entry points run it on
a small dedicated thread pool instead of the event loop.
"""

import asyncio
import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from argon2 import PasswordHasher, Type
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

from clinic_auth.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

_DUMMY_PASSWORD = "not-a-real-password"


class CredentialHasher:
    """
    Stateless apart from its cost parameters and executor.

    Business Rules:
    - Every password hash gets a fresh random salt (PHC string is self-describing)
    - verify_password never raises: malformed hashes simply do not verify
    - Hashing failures surface as INTERNAL, never as "wrong password"
    - Token digests are unsalted SHA-256 hex (the token already has 256 bits)
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
        max_workers: int = 4,
    ):
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="argon2"
        )
        self._dummy_hash: Optional[str] = None

    @classmethod
    def from_config(cls, config) -> "CredentialHasher":
        return cls(
            time_cost=config.ARGON2_TIME_COST,
            memory_cost=config.ARGON2_MEMORY_COST,
            parallelism=config.ARGON2_PARALLELISM,
            max_workers=config.HASH_WORKERS,
        )

    def hash_password(self, plaintext: str) -> Result[str]:
        try:
            return Return.ok(self._hasher.hash(plaintext))
        except (HashingError, MemoryError) as exc:
            logger.error(f"Password hashing failed: {type(exc).__name__}")
            return Return.err(Error("INTERNAL", "Password hashing failed"))

    def verify_password(self, plaintext: str, hash_string: str) -> bool:
        try:
            return self._hasher.verify(hash_string, plaintext)
        except (VerificationError, InvalidHashError, TypeError, ValueError):
            return False

    def dummy_verify(self) -> None:
        """Spend one verification on a throwaway hash (unknown-username path)"""
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash(_DUMMY_PASSWORD)
        self.verify_password("dummy_password", self._dummy_hash)

    async def hash_password_async(self, plaintext: str) -> Result[str]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.hash_password, plaintext)

    async def verify_password_async(self, plaintext: str, hash_string: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, self.verify_password, plaintext, hash_string
        )

    async def dummy_verify_async(self) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self._executor, self.dummy_verify)

    @staticmethod
    def hash_token(secret: str) -> str:
        return hashlib.sha256(secret.encode()).hexdigest()

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
