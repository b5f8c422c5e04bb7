"""
Create the first admin account of an empty database, or print a password hash.

Usage:
    python create_admin.py admin --display-name "Clinic Admin"
    python create_admin.py --hash-only
"""

import argparse
import asyncio
import getpass
import sys

from sqlmodel import SQLModel

from config import ApplicationConfig
from clinic_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.app.use_cases.users import BootstrapAdminUseCase, UserView
from clinic_auth.libs.result import Result


async def bootstrap_admin(
    session_factory,
    hasher: CredentialHasher,
    policy: SessionPolicy,
    username: str,
    display_name: str,
    password: str,
) -> Result[UserView]:
    async with session_factory() as session:
        use_case = BootstrapAdminUseCase(SqlAlchemyUnitOfWork(session), hasher, policy)
        return await use_case.execute(username, display_name, password)


async def _run(username: str, display_name: str, password: str) -> Result[UserView]:
    from clinic_auth.depends import AsyncSessionLocal, credential_hasher, engine, session_policy

    try:
        if ApplicationConfig.AUTO_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        return await bootstrap_admin(
            AsyncSessionLocal, credential_hasher, session_policy, username, display_name, password
        )
    finally:
        credential_hasher.shutdown()
        await engine.dispose()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Bootstrap the first clinic admin")
    parser.add_argument("username", nargs="?", help="Username of the new admin")
    parser.add_argument("--display-name", help="Defaults to the username")
    parser.add_argument("--password", help="Prompted for when omitted")
    parser.add_argument(
        "--hash-only",
        action="store_true",
        help="Print the Argon2id PHC string for a password and exit",
    )
    args = parser.parse_args(argv)

    if not args.hash_only and not args.username:
        parser.error("username is required unless --hash-only is given")

    password = args.password or getpass.getpass("Password: ")

    if args.hash_only:
        hasher = CredentialHasher.from_config(ApplicationConfig)
        try:
            hashed = hasher.hash_password(password)
        finally:
            hasher.shutdown()
        if hashed.is_err():
            print(f"error: {hashed.error.message}", file=sys.stderr)
            return 1
        print(hashed.value)
        return 0

    result = asyncio.run(_run(args.username, args.display_name or args.username, password))
    if result.is_err():
        print(f"error: {result.error.code}: {result.error.message}", file=sys.stderr)
        return 1

    print(f"Created admin {result.value.username} ({result.value.user_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
