import pytest
from httpx import ASGITransport, AsyncClient


@pytest.mark.asyncio
async def test_metrics_endpoint(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app.app), base_url="http://test") as ac:
        await ac.get("/health")
        resp = await ac.get("/metrics")
        assert resp.status_code == 200
        assert "http_requests_total" in resp.text
        assert "auth_tokens_generated_total" in resp.text
        assert "token_store_size" in resp.text
