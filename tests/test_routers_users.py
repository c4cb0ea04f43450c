"""
Tests for parkwatch.routers.users.
"""
from __future__ import annotations

import inspect

import pytest

from parkwatch.routers.users import list_users, router, user_profile


class TestUsers:

    @pytest.mark.asyncio
    async def test_list(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/users/")
        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == 5
        assert body[0]["joinDate"] == "2024-01-15"
        assert body[0]["sightingsCount"] == 23

    @pytest.mark.asyncio
    async def test_profile(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/users/user2/profile")
        assert resp.status_code == 200
        body = resp.json()
        assert body["user"]["name"] == "Mike Chen"
        assert [s["id"] for s in body["recentSightings"]] == ["2", "5"]
        assert body["sightingsByType"] == {"wolf": 1, "bison": 1}
        assert body["verifiedSightings"] == 2
        assert body["verificationRate"] == "100.0"

    @pytest.mark.asyncio
    async def test_profile_unverified_reporter(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/users/user3/profile")
        assert resp.json()["verificationRate"] == "0.0"

    @pytest.mark.asyncio
    async def test_profile_missing(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/users/ghost/profile")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "User not found"

    def test_handlers_are_plain_functions(self):
        assert not inspect.iscoroutinefunction(list_users)
        assert not inspect.iscoroutinefunction(user_profile)
