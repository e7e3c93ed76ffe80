"""Health Probes & Error Handlers — verifies liveness/readiness and error envelopes.

Invariants:
    - /api/health reports database connectivity, always 200
    - /api/health/ready answers 503 without a database
    - Unknown routes answer 404 {"message": "API endpoint not found"}
    - Unhandled exceptions answer 500 with the generic message (plus "error"
      only when detail exposure is on)
"""

import pytest

import portfolio.infrastructure.database as db_module
from portfolio.api.dependencies import get_blog_service
from portfolio.main import app


async def test_health_reports_connected_database(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "OK"
    assert data["database"] == "Connected"
    assert "timestamp" in data
    assert "environment" in data


async def test_health_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["database"] == "Disconnected"


async def test_ready(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["status"] == "ready"


async def test_not_ready_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503


async def test_unknown_route_is_404(client):
    res = await client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json() == {"message": "API endpoint not found"}


async def test_malformed_query_is_400(client):
    res = await client.get("/api/blog", params={"page": "abc"})
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "page"


class _ExplodingService:
    async def list_published(self, page, limit, tag=None):
        raise RuntimeError("kaboom")


@pytest.mark.parametrize("expose, expected", [
    (True, {"message": "Something went wrong!", "error": "kaboom"}),
    (False, {"message": "Something went wrong!"}),
])
async def test_unhandled_error_is_generic_500(client, monkeypatch, expose, expected):
    monkeypatch.setattr(app.state, "expose_error_details", expose)
    app.dependency_overrides[get_blog_service] = lambda: _ExplodingService()
    res = await client.get("/api/blog")
    assert res.status_code == 500
    assert res.json() == expected
