import pytest
from httpx import AsyncClient

from tests.utils.db import bearer


@pytest.mark.asyncio
async def test_create_and_login_new_account(client: AsyncClient, login):
    admin = await login("admin")

    response = await client.post(
        "/users",
        json={
            "username": "nurse.joy",
            "display_name": "Nurse Joy",
            "password": "joy-password",
            "role": 4,
        },
        headers=bearer(admin["token"]),
    )

    assert response.status_code == 201
    assert response.json()["role_name"] == "receptionist"
    assert "password_hash" not in response.json()

    relogin = await client.post(
        "/auth/login", json={"username": "nurse.joy", "password": "joy-password"}
    )
    assert relogin.status_code == 200


@pytest.mark.asyncio
async def test_create_duplicate_and_invalid(client: AsyncClient, login):
    manager = await login("manager")
    body = {"username": "drsmith", "display_name": "Dup", "password": "long-enough", "role": 3}

    duplicate = await client.post("/users", json=body, headers=bearer(manager["token"]))
    bad_role = await client.post(
        "/users", json={**body, "username": "newdoc", "role": 9}, headers=bearer(manager["token"])
    )

    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "USERNAME_TAKEN"
    assert bad_role.status_code == 400


@pytest.mark.asyncio
async def test_non_privileged_cannot_provision(client: AsyncClient, login, users):
    doctor = await login("drsmith")

    listing = await client.get("/users", headers=bearer(doctor["token"]))
    fetch = await client.get(f"/users/{users['jdoe'].id}", headers=bearer(doctor["token"]))

    assert listing.status_code == 403
    assert fetch.status_code == 403


@pytest.mark.asyncio
async def test_list_users_with_filters(client: AsyncClient, login):
    admin = await login("admin")

    everyone = await client.get("/users", headers=bearer(admin["token"]))
    doctors = await client.get("/users", params={"role": 3}, headers=bearer(admin["token"]))
    disabled = await client.get(
        "/users", params={"is_active": "false"}, headers=bearer(admin["token"])
    )

    assert len(everyone.json()["users"]) == 6
    assert {u["username"] for u in doctors.json()["users"]} == {"drsmith", "former"}
    assert [u["username"] for u in disabled.json()["users"]] == ["former"]


@pytest.mark.asyncio
async def test_disable_kills_sessions_immediately(client: AsyncClient, login, users):
    doctor = await login("drsmith")
    admin = await login("admin")

    response = await client.post(
        f"/users/{users['drsmith'].id}/disable", headers=bearer(admin["token"])
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    assert (await client.get("/auth/me", headers=bearer(doctor["token"]))).status_code == 401

    await client.post(f"/users/{users['drsmith'].id}/enable", headers=bearer(admin["token"]))
    assert (await client.get("/auth/me", headers=bearer(doctor["token"]))).status_code == 200


@pytest.mark.asyncio
async def test_update_user(client: AsyncClient, login, users):
    admin = await login("admin")

    response = await client.patch(
        f"/users/{users['frontdesk'].id}",
        json={"display_name": "Reception", "role": 2},
        headers=bearer(admin["token"]),
    )

    assert response.status_code == 200
    assert response.json()["display_name"] == "Reception"
    assert response.json()["role_name"] == "manager"

    missing = await client.patch(
        "/users/00000000-0000-0000-0000-000000000000",
        json={"display_name": "x"},
        headers=bearer(admin["token"]),
    )
    assert missing.status_code == 404
