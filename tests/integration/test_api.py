"""Integration tests for the host API.

Uses the real FastAPI app over ASGITransport, with storage swapped for an
in-memory mapping through dependency overrides.
"""

from httpx import AsyncClient

from chatdesk.models.schemas import StatsResponse
from chatdesk.storage.backend import MappingStorage
from chatdesk.storage.usage import USAGE_COUNTER_KEY, UsageCounter


class TestHealthEndpoint:
    """Integration tests for GET /health."""

    async def test_health_reports_service(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "chatdesk"}


class TestStatsEndpoint:
    """Integration tests for GET /stats."""

    async def test_fresh_install_reports_zero(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/stats")

        assert response.status_code == 200
        assert StatsResponse.model_validate(response.json()).total_searches == 0

    async def test_reports_global_counter(
        self, async_client: AsyncClient, storage: MappingStorage
    ) -> None:
        """Every counted question shows up, whoever asked it."""
        storage.set(USAGE_COUNTER_KEY, "41")
        UsageCounter(storage).increment()

        response = await async_client.get("/stats")

        assert response.json() == {"total_searches": 42}

    async def test_cors_allows_browser_origins(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/stats", headers={"Origin": "http://example.com"})

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers
