"""
Authentication tests: tokens, passwords, login flow and role checks.
"""

from datetime import timedelta

from commission_api.auth.jwt import COOKIE_NAME, create_access_token, verify_token
from commission_api.auth.passwords import hash_password, needs_rehash, verify_password
from commission_api.models import UserRole
from commission_api.models.user import can_manage_rules

from conftest import TEST_PASSWORD, auth_headers


# ── Tokens and passwords ─────────────────────────────────


class TestTokens:
    def test_round_trip(self):
        token = create_access_token(7, "admin")
        assert verify_token(token) == {"user_id": 7, "role": "admin"}

    def test_expired_token_rejected(self):
        token = create_access_token(7, "admin", expires_delta=timedelta(seconds=-1))
        assert verify_token(token) is None

    def test_garbage_rejected(self):
        assert verify_token("not-a-token") is None


def test_password_hashing():
    hashed = hash_password("test_password_123")

    assert hashed != "test_password_123"
    assert verify_password("test_password_123", hashed)
    assert not verify_password("wrong_password", hashed)
    assert not needs_rehash(hashed)
    assert not verify_password("anything", "not-a-hash")


def test_rule_managers():
    assert can_manage_rules(UserRole.SUPER_ADMIN)
    assert can_manage_rules(UserRole.ADMIN)
    assert not can_manage_rules(UserRole.FINANCIAL_AUDITOR)
    assert not can_manage_rules(UserRole.DATA_ENTRY)


# ── Login flow ───────────────────────────────────────────


class TestLogin:
    async def test_login_returns_token_and_cookie(self, client, users):
        response = await client.post(
            "/api/auth/login",
            json={"username": "admin_user", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["role"] == "admin"
        assert verify_token(body["access_token"])["user_id"] == users[UserRole.ADMIN].id
        assert COOKIE_NAME in response.cookies

    async def test_wrong_password(self, client, users):
        response = await client.post(
            "/api/auth/login",
            json={"username": "admin_user", "password": "nope"},
        )

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Invalid username or password"
        assert body["path"] == "/api/auth/login"
        assert body["method"] == "POST"
        assert "timestamp" in body

    async def test_disabled_account(self, client, users, db_session):
        user = users[UserRole.DATA_ENTRY]
        user.is_active = False
        await db_session.commit()

        response = await client.post(
            "/api/auth/login",
            json={"username": user.username, "password": TEST_PASSWORD},
        )
        assert response.status_code == 403

    async def test_me(self, client, users):
        response = await client.get(
            "/api/auth/me", headers=auth_headers(users[UserRole.FINANCIAL_AUDITOR])
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["username"] == "financial_auditor_user"
        assert data["role"] == "financial_auditor"
        assert data["can_manage_rules"] is False

    async def test_cookie_authenticates(self, client, users):
        token = create_access_token(users[UserRole.ADMIN].id, "admin")
        client.cookies.set(COOKIE_NAME, token)

        response = await client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["data"]["can_manage_rules"] is True

    async def test_missing_token(self, client):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_invalid_token(self, client):
        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Bearer broken"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token"

    async def test_logout(self, client, users):
        response = await client.post(
            "/api/auth/logout", headers=auth_headers(users[UserRole.ADMIN])
        )
        assert response.status_code == 200
        assert response.json()["success"] is True
