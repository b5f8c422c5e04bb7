from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from clinic_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from clinic_auth.app.services.credential_hasher import CredentialHasher
from clinic_auth.depends import (
    get_clock,
    get_credential_hasher,
    get_session_toucher,
    get_unit_of_work,
)
from clinic_auth.domain.entities import User
from tests.fixtures.json_loader import TestDataLoader
from tests.utils.clock import FrozenClock


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture(scope="session")
def hasher():
    h = CredentialHasher(time_cost=1, memory_cost=8, parallelism=1, max_workers=2)
    yield h
    h.shutdown()


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def toucher():
    return MagicMock()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def users(db_session, hasher, clock, test_data):
    """Seed accounts; returns username -> plain values (id, password, role)"""
    seeded = {}
    for data in test_data.users():
        user = User(
            username=data["username"],
            display_name=data["display_name"],
            password_hash=hasher.hash_password(data["password"]).value,
            role=data["role"],
            is_active=data["is_active"],
            created_at=clock.now(),
        )
        db_session.add(user)
        seeded[data["username"]] = SimpleNamespace(
            id=user.id, password=data["password"], role=data["role"]
        )
    await db_session.commit()
    return seeded


@pytest_asyncio.fixture
async def client(db_session, hasher, clock, toucher):
    from clinic_auth.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_credential_hasher] = lambda: hasher
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_session_toucher] = lambda: toucher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def login(client, users):
    """Log a seeded account in through the staff (or patient) surface"""

    async def _login(username: str, path: str = "/auth/login", **extra) -> dict:
        response = await client.post(
            path,
            json={"username": username, "password": users[username].password, **extra},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login
