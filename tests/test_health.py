"""Tests for the health and metrics endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError


class TestHealth:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_healthy(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "healthy"}

    @pytest.mark.asyncio
    async def test_database_unreachable(self, client):
        engine = MagicMock()
        engine.connect.side_effect = OperationalError(
            "SELECT 1", {}, Exception("refused")
        )
        with patch("course_library.api.http.health.engine", engine):
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "unhealthy"


class TestMetrics:
    """Tests for GET /metrics."""

    @pytest.mark.asyncio
    async def test_exposes_request_metrics(self, client):
        await client.get("/health")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text
