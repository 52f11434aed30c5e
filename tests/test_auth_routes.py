"""
HTTP tests for /auth/signup, /auth/login and /auth/verify.
"""

import time

import pytest

from auth.jwt import create_token
from auth.models import ErrorKind
from auth.routes import _STATUS_BY_KIND


class TestSignupRoute:
    @pytest.mark.asyncio
    async def test_signup_created(self, client):
        resp = await client.post(
            "/auth/signup",
            json={"email": "grace@example.com", "password": "123456", "name": "Grace"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["user"]["email"] == "grace@example.com"
        assert body["user"]["name"] == "Grace"
        assert "password" not in body["user"]
        assert body["authToken"].count(".") == 2

    @pytest.mark.asyncio
    async def test_missing_field(self, client):
        resp = await client.post("/auth/signup", json={"email": "grace@example.com", "password": "123456"})
        assert resp.status_code == 400
        assert resp.json() == {"message": "All fields are required"}

    @pytest.mark.asyncio
    async def test_invalid_email(self, client):
        resp = await client.post(
            "/auth/signup", json={"email": "grace", "password": "123456", "name": "Grace"}
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid email format"

    @pytest.mark.asyncio
    async def test_short_password(self, client):
        resp = await client.post(
            "/auth/signup", json={"email": "grace@example.com", "password": "12345", "name": "Grace"}
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Password must be at least 6 characters long"

    @pytest.mark.asyncio
    async def test_duplicate_differently_cased(self, client, signed_up):
        resp = await client.post(
            "/auth/signup", json={"email": "ADA@example.com", "password": "secret123", "name": "Ada"}
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "User already exists"

    @pytest.mark.asyncio
    async def test_non_json_body(self, client):
        resp = await client.post(
            "/auth/signup", content="{not json", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 400
        assert "message" in resp.json()


class TestLoginRoute:
    @pytest.mark.asyncio
    async def test_login_ok(self, client, signed_up):
        resp = await client.post("/auth/login", json={"email": "ada@example.com", "password": "secret123"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["user"] == signed_up["user"]
        assert body["authToken"]

    @pytest.mark.asyncio
    async def test_missing_password(self, client):
        resp = await client.post("/auth/login", json={"email": "ada@example.com"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Email and password are required"

    @pytest.mark.asyncio
    async def test_no_user_enumeration(self, client, signed_up):
        wrong_password = await client.post(
            "/auth/login", json={"email": "ada@example.com", "password": "wrong-one"}
        )
        unknown = await client.post(
            "/auth/login", json={"email": "nobody@example.com", "password": "secret123"}
        )
        assert wrong_password.status_code == unknown.status_code == 401
        assert wrong_password.json() == unknown.json() == {"message": "Invalid email or password"}


class TestVerifyRoute:
    @pytest.mark.asyncio
    async def test_signup_then_verify_echoes_identity(self, client, signed_up, auth_headers):
        resp = await client.get("/auth/verify", headers=auth_headers)
        assert resp.status_code == 200
        claims = resp.json()["user"]
        assert claims["_id"] == signed_up["user"]["_id"]
        assert claims["email"] == "ada@example.com"
        assert claims["name"] == "Ada"
        assert claims["exp"] - claims["iat"] == 604800

    @pytest.mark.asyncio
    async def test_no_token(self, client):
        resp = await client.get("/auth/verify")
        assert resp.status_code == 401
        assert resp.json() == {"message": "No token provided"}

    @pytest.mark.asyncio
    async def test_bearer_without_token(self, client):
        resp = await client.get("/auth/verify", headers={"Authorization": "Bearer"})
        assert resp.json() == {"message": "No token provided"}

    @pytest.mark.asyncio
    async def test_foreign_secret(self, client):
        token = create_token({"_id": "x", "email": "a@b.com", "name": "A"}, "someone-else")
        resp = await client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json() == {"message": "Invalid token"}

    @pytest.mark.asyncio
    async def test_expired(self, app, client):
        token = create_token(
            {"_id": "x", "email": "a@b.com", "name": "A"},
            app.state.settings.token_secret,
            ttl_seconds=60,
            now=int(time.time()) - 3600,
        )
        resp = await client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json() == {"message": "Token expired"}
        assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_every_outcome_kind_has_a_status():
    assert set(ErrorKind) == {ErrorKind.VALIDATION, ErrorKind.AUTHENTICATION}
    assert set(_STATUS_BY_KIND) == set(ErrorKind)
    assert _STATUS_BY_KIND[ErrorKind.VALIDATION] == 400
    assert _STATUS_BY_KIND[ErrorKind.AUTHENTICATION] == 401
