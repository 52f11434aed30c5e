"""
Tests for the JSON error boundary.
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError


def _db_down():
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestErrorBoundary:
    @pytest.mark.asyncio
    async def test_signup_store_failure_is_generic_500(self, app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with patch("auth.service.find_user_by_email", new=AsyncMock(side_effect=_db_down())):
                resp = await client.post(
                    "/auth/signup",
                    json={"email": "a@b.com", "password": "secret1", "name": "Ada"},
                )
        assert resp.status_code == 500
        assert resp.json() == {"message": "Internal server error"}
        assert "connection refused" not in resp.text

    @pytest.mark.asyncio
    async def test_login_store_failure_is_generic_500(self, app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with patch("auth.service.find_user_by_email", new=AsyncMock(side_effect=_db_down())):
                resp = await client.post("/auth/login", json={"email": "a@b.com", "password": "secret1"})
        assert resp.status_code == 500
        assert resp.json() == {"message": "Internal server error"}

    @pytest.mark.asyncio
    async def test_resource_store_failure_has_route_message(self, client, auth_headers):
        with patch("database.helpers.list_cohorts", new=AsyncMock(side_effect=_db_down())):
            resp = await client.get("/api/cohorts", headers=auth_headers)
        assert resp.status_code == 500
        assert resp.json() == {"message": "Error fetching cohorts"}

    @pytest.mark.asyncio
    async def test_unknown_route_uses_message_body(self, client):
        resp = await client.get("/nope")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Not Found"}

    @pytest.mark.asyncio
    async def test_process_time_header(self, client):
        resp = await client.get("/auth/verify")
        assert "X-Process-Time" in resp.headers
