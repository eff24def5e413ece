"""
Unit tests for the HealthCheckInterceptor ASGI middleware.
Tests that health checks bypass the middleware stack and the gate.
"""

import pytest
from registry_auth.api.health_interceptor import (
    HEALTH_CHECK_PATHS,
    HealthCheckInterceptor,
)
from registry_auth.main import app
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient


@pytest.mark.unit
class TestHealthCheckInterceptor:
    """Unit tests for HealthCheckInterceptor."""

    def test_health_paths_constant(self):
        """Verify all expected health paths are defined."""
        assert HEALTH_CHECK_PATHS == {"/healthcheck", "/healthz", "/readyz"}

    def test_intercepts_get_health_requests(self):
        """Test that GET requests to health paths are intercepted."""

        def should_not_be_called(request):
            raise AssertionError("Inner app should not be called for health checks")

        inner_app = Starlette(
            routes=[Route(path, should_not_be_called) for path in HEALTH_CHECK_PATHS]
        )
        client = TestClient(HealthCheckInterceptor(inner_app))

        for path in HEALTH_CHECK_PATHS:
            response = client.get(path)
            assert response.status_code == 200
            assert response.content == b""

    def test_rejects_other_methods_on_health_paths(self):
        client = TestClient(HealthCheckInterceptor(Starlette()))

        response = client.post("/healthz")

        assert response.status_code == 405
        assert response.headers["allow"] == "GET"

    def test_passes_through_non_health_requests(self):
        """Test that non-health requests pass through to inner app."""

        def test_endpoint(request):
            return PlainTextResponse("OK")

        inner_app = Starlette(routes=[Route("/test", test_endpoint)])
        client = TestClient(HealthCheckInterceptor(inner_app))

        response = client.get("/test")
        assert response.status_code == 200
        assert response.content == b"OK"

    def test_service_health_needs_no_credentials(self):
        client = TestClient(app)

        assert client.get("/healthcheck").status_code == 200
