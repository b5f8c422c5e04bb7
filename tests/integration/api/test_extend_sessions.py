from datetime import datetime, timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient

from tests.utils.db import bearer, fetch_session


def _expires(data) -> datetime:
    return datetime.fromisoformat(data["expires_at"])


@pytest.mark.asyncio
async def test_extend_adds_hours_to_current_expiry(client: AsyncClient, login, clock):
    data = await login("drsmith")

    response = await client.post(
        f"/sessions/{data['session_id']}/extend",
        json={"extend_hours": 5},
        headers=bearer(data["token"]),
    )

    assert response.status_code == 200
    new_expiry = _expires(response.json())
    expected = _expires(data) + timedelta(hours=5)
    assert abs((new_expiry - expected).total_seconds()) < 1
    assert new_expiry > _expires(data)


@pytest.mark.asyncio
async def test_extend_without_hours_uses_role_default(client: AsyncClient, login, clock):
    data = await login("drsmith")

    response = await client.post(
        f"/sessions/{data['session_id']}/extend", headers=bearer(data["token"])
    )

    assert response.status_code == 200
    expected = clock.now() + timedelta(hours=48)
    assert abs((_expires(response.json()) - expected).total_seconds()) < 1


@pytest.mark.asyncio
async def test_repeated_extension_is_capped(client: AsyncClient, db_session, login, clock):
    data = await login("drsmith")
    cap = clock.now() + timedelta(hours=720)

    expiries = []
    for _ in range(3):
        response = await client.post(
            f"/sessions/{data['session_id']}/extend",
            json={"extend_hours": 700},
            headers=bearer(data["token"]),
        )
        assert response.status_code == 200
        expiries.append(_expires(response.json()))

    assert expiries == sorted(expiries)
    assert expiries[-1] == cap
    stored = await fetch_session(db_session, UUID(data["session_id"]))
    assert stored.expires_at == cap


@pytest.mark.asyncio
@pytest.mark.parametrize("hours", [0, -3, 721])
async def test_extend_hours_out_of_range(client: AsyncClient, login, hours):
    data = await login("drsmith")

    response = await client.post(
        f"/sessions/{data['session_id']}/extend",
        json={"extend_hours": hours},
        headers=bearer(data["token"]),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_only_owner_or_privileged_may_extend(client: AsyncClient, login):
    target = await login("frontdesk")
    doctor = await login("drsmith")
    manager = await login("manager")
    path = f"/sessions/{target['session_id']}/extend"

    foreign = await client.post(path, json={"extend_hours": 1}, headers=bearer(doctor["token"]))
    privileged = await client.post(
        path, json={"extend_hours": 1}, headers=bearer(manager["token"])
    )

    assert foreign.status_code == 404
    assert privileged.status_code == 200


@pytest.mark.asyncio
async def test_revoked_session_cannot_be_extended(client: AsyncClient, login):
    target = await login("drsmith")
    other = await login("drsmith")
    await client.post(
        f"/sessions/{target['session_id']}/revoke", headers=bearer(other["token"])
    )

    response = await client.post(
        f"/sessions/{target['session_id']}/extend",
        json={"extend_hours": 1},
        headers=bearer(other["token"]),
    )

    assert response.status_code == 404
