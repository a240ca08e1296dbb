"""Tests for the Prometheus metrics endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from mockswift.config import AuthConfig, MockSwiftConfig, ObservabilityConfig
from mockswift.server import create_app


@pytest.fixture
async def metrics_client():
    config = MockSwiftConfig(
        auth=AuthConfig(enabled=False),
        observability=ObservabilityConfig(metrics=True),
    )
    transport = ASGITransport(app=create_app(config))
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


class TestMetricsEndpoint:
    """Tests for GET /metrics."""

    async def test_metrics_returns_200(self, metrics_client):
        resp = await metrics_client.get("/metrics")
        assert resp.status_code == 200

    async def test_operation_counter(self, metrics_client):
        """A Swift request shows up in mockswift_swift_operations_total."""
        await metrics_client.put("/v1/AUTH_test/photos")
        resp = await metrics_client.get("/metrics")
        assert "mockswift_swift_operations_total" in resp.text
        assert 'operation="PUT container"' in resp.text

    async def test_store_gauges_registered(self, metrics_client):
        resp = await metrics_client.get("/metrics")
        assert "mockswift_containers_total" in resp.text
        assert "mockswift_objects_total" in resp.text
        assert "mockswift_bytes_received_total" in resp.text
        assert "mockswift_bytes_sent_total" in resp.text

    async def test_http_metrics_namespace(self, metrics_client):
        await metrics_client.get("/health")
        resp = await metrics_client.get("/metrics")
        assert "mockswift_http_requests_total" in resp.text


class TestMetricsDisabled:
    async def test_metrics_path_not_served(self, client):
        """Without metrics, /metrics is just an unparseable Swift path."""
        resp = await client.get("/metrics")
        assert resp.status_code == 404
        assert "<Code>InvalidURI</Code>" in resp.text
