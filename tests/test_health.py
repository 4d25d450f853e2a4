"""Tests for the public health probe."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from app.api.v1.deps import get_db
from app.main import app
from conftest import API


class _UnreachableSession:
    async def execute(self, *_args, **_kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))


async def _broken_get_db():
    yield _UnreachableSession()


@pytest.mark.asyncio
async def test_health_ok(async_client: AsyncClient):
    resp = await async_client.get(f"{API}/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "connected"}


@pytest.mark.asyncio
async def test_health_reports_database_outage(async_client: AsyncClient):
    previous = app.dependency_overrides[get_db]
    app.dependency_overrides[get_db] = _broken_get_db
    try:
        resp = await async_client.get(f"{API}/healthz")
    finally:
        app.dependency_overrides[get_db] = previous
    assert resp.status_code == 503
    assert resp.json() == {"status": "error", "database": "disconnected"}
