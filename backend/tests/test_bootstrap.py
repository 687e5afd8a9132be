"""
Poker Study Backend — Startup and Health Tests
===============================================

What:  The server refuses to start without a reachable database, listens on
       port 5000 by default, and reports database health on /health.
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from pokerstudy import __main__ as bootstrap
from pokerstudy.config import Settings, settings
from pokerstudy.database import dispose_engine


class TestBootstrap:

    def test_default_port_is_5000(self):
        assert Settings.model_fields["port"].default == 5000

    def test_validate_required_rejects_empty_url(self):
        with pytest.raises(ValueError, match="DATABASE_URL is not set"):
            Settings(database_url="").validate_required()

    def test_exits_non_zero_without_database_url(self):
        with patch.object(settings, "database_url", ""), \
             patch.object(bootstrap, "setup_logging"), \
             patch.object(bootstrap, "check_database", new=AsyncMock()) as mock_check, \
             patch.object(bootstrap.uvicorn, "run") as mock_run:
            assert bootstrap.main() == 1
        mock_check.assert_not_awaited()
        mock_run.assert_not_called()

    def test_exits_non_zero_when_database_unreachable(self):
        with patch.object(bootstrap, "setup_logging"), \
             patch.object(bootstrap, "verify_connection", new=AsyncMock(side_effect=OSError("refused"))), \
             patch.object(bootstrap, "dispose_engine", new=AsyncMock()) as mock_dispose, \
             patch.object(bootstrap.uvicorn, "run") as mock_run:
            assert bootstrap.main() == 1
        mock_dispose.assert_awaited_once()
        mock_run.assert_not_called()

    def test_serves_after_database_check(self):
        with patch.object(bootstrap, "setup_logging"), \
             patch.object(bootstrap, "verify_connection", new=AsyncMock()), \
             patch.object(bootstrap, "dispose_engine", new=AsyncMock()), \
             patch.object(bootstrap.uvicorn, "run") as mock_run:
            assert bootstrap.main() == 0
        _, kwargs = mock_run.call_args
        assert kwargs["host"] == settings.host
        assert kwargs["port"] == settings.port


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_when_database_answers(self):
        from pokerstudy.main import create_app

        transport = ASGITransport(app=create_app())
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/health")
        finally:
            await dispose_engine()

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_unhealthy_when_database_down(self):
        from pokerstudy.main import create_app

        transport = ASGITransport(app=create_app())
        with patch("pokerstudy.routes.health.ping_database", new=AsyncMock(side_effect=OSError("down"))):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"
