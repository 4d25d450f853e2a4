"""Tests for registration, login and token-based identity."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import decode_access_token
from app.models.user import User
from app.services import users as users_service
from conftest import API, login_headers, register


@pytest.mark.asyncio
async def test_register_returns_public_view(async_client: AsyncClient):
    """POST /auth/register should create a user and never echo the hash."""
    resp = await register(async_client, "Alice", "alice@x.com", "password-one")
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "Alice"
    assert data["email"] == "alice@x.com"
    assert data["role"] == "user"
    assert data["id"]
    assert not any("password" in key for key in data)


@pytest.mark.asyncio
async def test_register_lowercases_email(async_client: AsyncClient, db_session: AsyncSession):
    resp = await register(async_client, "Mixed Case", "  Mixed.Case@Example.COM ", "password-one")
    assert resp.status_code == 201
    assert resp.json()["email"] == "mixed.case@example.com"

    stored = (await db_session.execute(select(User))).scalar_one()
    assert stored.email == "mixed.case@example.com"
    assert stored.hashed_password != "password-one"


@pytest.mark.asyncio
@pytest.mark.parametrize("second_email", ["dup@x.com", "DUP@X.COM", "Dup@x.Com"])
async def test_register_duplicate_email_any_case(async_client: AsyncClient, second_email: str):
    """The second registration with the same address is a 409."""
    first = await register(async_client, "First", "dup@x.com", "password-one")
    assert first.status_code == 201
    second = await register(async_client, "Second", second_email, "password-two")
    assert second.status_code == 409
    assert second.json()["detail"] == "Email already exists"


@pytest.mark.asyncio
async def test_register_race_on_unique_index_is_duplicate_email(
    async_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
):
    """Both lookups miss; the loser hits the unique index and still gets the 409 text."""
    assert (await register(async_client, "First", "race@x.com", "password-one")).status_code == 201

    async def _missed_lookup(_db, _email):
        return None

    monkeypatch.setattr(users_service, "get_by_email", _missed_lookup)

    second = await register(async_client, "Second", "race@x.com", "password-two")
    assert second.status_code == 409
    assert second.json()["detail"] == "Email already exists"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"name": "Bob", "email": "bob@x.com", "password": "short"},
        {"name": "Bob", "email": "not-an-email", "password": "long-enough"},
        {"name": "B", "email": "bob@x.com", "password": "long-enough"},
        {"name": "Bob", "email": "bob@x.com"},
        {"name": "Bob", "email": "bob@x.com", "password": "long-enough", "role": "admin"},
    ],
    ids=["short-password", "bad-email", "short-name", "missing-password", "role-smuggling"],
)
async def test_register_validation(async_client: AsyncClient, body: dict):
    resp = await async_client.post(f"{API}/auth/register", json=body)
    assert resp.status_code == 422
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_login_returns_token_with_role(async_client: AsyncClient):
    registered = await register(async_client, "Carol", "carol@x.com", "carol-pass")
    resp = await async_client.post(
        f"{API}/auth/login", json={"email": "CAROL@x.com", "password": "carol-pass"}
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"

    payload = decode_access_token(body["access_token"])
    assert str(payload.sub) == registered.json()["id"]
    assert payload.role == "user"


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(async_client: AsyncClient):
    """Wrong password and unknown email produce the identical 401."""
    await register(async_client, "Dave", "dave@x.com", "dave-pass-1")

    wrong_password = await async_client.post(
        f"{API}/auth/login", json={"email": "dave@x.com", "password": "not-daves"}
    )
    unknown_email = await async_client.post(
        f"{API}/auth/login", json={"email": "nobody@x.com", "password": "not-daves"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_me_reports_token_identity(async_client: AsyncClient):
    created = await register(async_client, "Erin", "erin@x.com", "erin-pass-1")
    headers = await login_headers(async_client, "erin@x.com", "erin-pass-1")

    resp = await async_client.get(f"{API}/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"id": created.json()["id"], "role": "user"}


@pytest.mark.asyncio
async def test_missing_or_bad_token_is_401(async_client: AsyncClient):
    no_token = await async_client.get(f"{API}/auth/me")
    assert no_token.status_code == 401
    assert no_token.headers["www-authenticate"] == "Bearer"

    bad_token = await async_client.get(
        f"{API}/auth/me", headers={"Authorization": "Bearer garbage.token.value"}
    )
    assert bad_token.status_code == 401
    assert bad_token.json() == no_token.json()


@pytest.mark.asyncio
async def test_token_role_is_fixed_at_issuance(async_client: AsyncClient, db_session: AsyncSession):
    """Promoting a user does not change tokens that were already issued."""
    await register(async_client, "Frank", "frank@x.com", "frank-pass-1")
    old_headers = await login_headers(async_client, "frank@x.com", "frank-pass-1")

    await db_session.execute(update(User).where(User.email == "frank@x.com").values(role="admin"))
    await db_session.commit()

    assert (await async_client.get(f"{API}/users", headers=old_headers)).status_code == 403

    new_headers = await login_headers(async_client, "frank@x.com", "frank-pass-1")
    assert (await async_client.get(f"{API}/users", headers=new_headers)).status_code == 200
