from unittest.mock import AsyncMock, MagicMock

import pytest

from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.app.services.session_policy import SessionPolicy
from tests.utils.clock import NOW, FrozenClock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.find = AsyncMock(return_value=[])
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.update_password_hash = AsyncMock(return_value=True)
    uow.users.set_active = AsyncMock(return_value=True)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.find = AsyncMock(return_value=[])
    uow.sessions.find_live_principal = AsyncMock(return_value=None)
    uow.sessions.rotate_token = AsyncMock(return_value=None)
    uow.sessions.extend = AsyncMock(return_value=None)
    uow.sessions.touch = AsyncMock()
    uow.sessions.revoke_by_id = AsyncMock(return_value=False)
    uow.sessions.revoke_all_except_session = AsyncMock(return_value=0)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    return uow


@pytest.fixture(scope="session")
def hasher():
    """Real Argon2id with the cheapest parameters argon2 accepts"""
    h = CredentialHasher(time_cost=1, memory_cost=8, parallelism=1, max_workers=2)
    yield h
    h.shutdown()


@pytest.fixture
def policy():
    return SessionPolicy()


@pytest.fixture
def clock():
    return FrozenClock(NOW)
