# ============================================================================
# HEALTH ROUTER TESTS
# ============================================================================
# STATUS: Tests - FastAPI endpoints
# PURPOSE: Verify the HTTP report endpoint and liveness probe
# CREATED: 08 MAR 2026
# ============================================================================
"""
Health Router Tests

Uses FastAPI's TestClient; probes are plain functions.

Run with:
    pytest tests/test_router.py -v
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from __version__ import __version__
from core.config import HealthSettings
from health import Handler, create_health_router
import main


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def handler():
    return Handler(hostname="web-1", default_timeout=5)


@pytest.fixture
def client(handler):
    app = FastAPI()
    app.include_router(create_health_router(handler))
    return TestClient(app)


# ============================================================================
# REPORT ENDPOINT
# ============================================================================

class TestReportEndpoint:
    """GET /is_it_working."""

    def test_all_checks_pass(self, handler, client):
        handler.check("cache", block=lambda s: s.ok("warm"))

        response = client.get("/is_it_working")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.headers["cache-control"] == "no-cache"
        lines = response.text.splitlines()
        assert lines[0] == "Host: web-1"
        assert lines[-1].startswith("OK:   cache - warm (")

    def test_failed_check_returns_500(self, handler, client):
        handler.check("cache", block=lambda s: s.ok("warm"))
        handler.check("db", block=lambda s: s.fail("refused"), options={"concurrent": False})

        response = client.get("/is_it_working")

        assert response.status_code == 500
        assert "FAIL: db - refused (" in response.text

    def test_no_checks(self, client):
        response = client.get("/is_it_working")
        assert response.status_code == 200

    def test_custom_route(self):
        h = Handler(route_path="/woot", hostname="")
        app = FastAPI()
        app.include_router(create_health_router(h))
        client = TestClient(app)

        assert client.get("/woot").status_code == 200
        assert client.get("/is_it_working").status_code == 404


class TestLiveness:
    """GET /livez."""

    def test_alive(self, client):
        response = client.get("/livez")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"
        assert response.json()["version"] == __version__


# ============================================================================
# APPLICATION
# ============================================================================

class TestApplication:
    """main.create_app."""

    def test_create_app(self):
        app = main.create_app(HealthSettings(hostname="probe-host", route_path="/health"))

        with TestClient(app) as client:
            root = client.get("/").json()
            assert root["health"] == "/health"

            response = client.get("/health")
            assert response.status_code == 200
            assert response.text.startswith("Host: probe-host")

        assert app.state.health_handler.route_path == "/health"
