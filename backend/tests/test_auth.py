"""
Tests for authentication endpoints and the bearer-token guard.
"""

import pytest
from httpx import AsyncClient

from venue_platform.core.security import TokenSigner, get_token_signer

from conftest import create_user, headers_for


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient):
    """Successful registration returns a token and the user."""
    response = await client.post("/api/auth/register", json={
        "email": "New@Example.com",
        "password": "securepassword123",
        "full_name": "New Person",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["email"] == "new@example.com"
    assert data["user"]["role"] == "user"
    assert "hashed_password" not in data["user"]  # Never expose password hash


@pytest.mark.asyncio
async def test_register_cannot_choose_admin_role(client: AsyncClient):
    response = await client.post("/api/auth/register", json={
        "email": "sneaky@example.com",
        "password": "securepassword123",
        "full_name": "Sneaky Person",
        "role": "admin",
    })
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "user"


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, test_user):
    """Duplicate email returns 409."""
    response = await client.post("/api/auth/register", json={
        "email": "test@example.com",
        "password": "securepassword123",
        "full_name": "Somebody Else",
    })
    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient):
    """Password under 6 chars fails validation with field errors."""
    response = await client.post("/api/auth/register", json={
        "email": "weak@example.com",
        "password": "short",
        "full_name": "Weak Password",
    })
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert "password" in body["errors"]


@pytest.mark.asyncio
async def test_login_success_stamps_last_login(client: AsyncClient, test_user):
    """Valid credentials return JWT token."""
    assert test_user.last_login is None

    response = await client.post("/api/auth/login", json={
        "email": "test@example.com",
        "password": "testpassword123",
    })
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["last_login"] is not None


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, test_user):
    """Wrong password returns 401."""
    response = await client.post("/api/auth/login", json={
        "email": "test@example.com",
        "password": "wrongpassword",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_nonexistent_user(client: AsyncClient):
    response = await client.post("/api/auth/login", json={
        "email": "nobody@example.com",
        "password": "whatever123",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_deactivated_user(client: AsyncClient, db_session):
    await create_user(db_session, "gone@example.com", is_active=False)
    response = await client.post("/api/auth/login", json={
        "email": "gone@example.com",
        "password": "testpassword123",
    })
    assert response.status_code == 401
    assert response.json()["detail"] == "Account is deactivated"


@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["detail"] == "Access denied. No token provided"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_me_returns_current_user(client: AsyncClient, test_user, auth_headers):
    response = await client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == test_user.id


@pytest.mark.asyncio
async def test_garbage_token_rejected(client: AsyncClient):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid authentication credentials"


@pytest.mark.asyncio
async def test_token_from_other_signer_rejected(client: AsyncClient, test_user):
    forged = TokenSigner(
        secret_key="some-other-secret",
        issuer="sports-platform",
        audience="sports-platform-users",
    ).create_access_token(subject=str(test_user.id))
    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_rejected(client: AsyncClient, test_user):
    expired = get_token_signer().create_access_token(subject=str(test_user.id), expires_minutes=-5)
    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_for_deactivated_user_rejected(client: AsyncClient, db_session):
    user = await create_user(db_session, "paused@example.com", is_active=False)
    response = await client.get("/api/auth/me", headers=headers_for(user))
    assert response.status_code == 401
    assert response.json()["detail"] == "Account is deactivated"


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, auth_headers):
    response = await client.put("/api/auth/me", json={"full_name": "Renamed User"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["full_name"] == "Renamed User"


@pytest.mark.asyncio
async def test_change_password(client: AsyncClient, test_user, auth_headers):
    response = await client.put("/api/auth/change-password", json={
        "current_password": "testpassword123",
        "new_password": "brandnew456",
    }, headers=auth_headers)
    assert response.status_code == 200

    old_login = await client.post("/api/auth/login", json={
        "email": "test@example.com", "password": "testpassword123",
    })
    assert old_login.status_code == 401

    new_login = await client.post("/api/auth/login", json={
        "email": "test@example.com", "password": "brandnew456",
    })
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_change_password_wrong_current(client: AsyncClient, auth_headers):
    response = await client.put("/api/auth/change-password", json={
        "current_password": "not-my-password",
        "new_password": "brandnew456",
    }, headers=auth_headers)
    assert response.status_code == 401
