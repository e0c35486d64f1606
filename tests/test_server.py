"""Tests for server startup."""

import pytest
from unittest.mock import patch

from yt_transcript_resolver.server import mcp, app_lifespan
from yt_transcript_resolver.config import GatewayOptions, Settings
from yt_transcript_resolver.resolver import TranscriptResolver


class TestServerStartup:
    @pytest.mark.asyncio
    async def test_default_lifespan(self):
        with patch("yt_transcript_resolver.server.Settings") as MockSettings:
            MockSettings.return_value = Settings()

            async with app_lifespan(mcp):
                from yt_transcript_resolver import server
                assert isinstance(server._resolver, TranscriptResolver)
                assert server._settings.default_languages == ["en"]

    @pytest.mark.asyncio
    async def test_gateway_lifespan(self):
        with patch("yt_transcript_resolver.server.Settings") as MockSettings:
            MockSettings.return_value = Settings(
                gateway=GatewayOptions(enabled=True, base_urls=["http://localhost:8300"], api_key="test")
            )

            async with app_lifespan(mcp):
                from yt_transcript_resolver import server
                assert server._resolver._gateway_options.enabled
                assert server._resolver._gateway_options.base_urls == ["http://localhost:8300"]

    def test_env_settings(self, monkeypatch):
        monkeypatch.setenv("YT_TRANSCRIPT_CACHE__MAX_AGE", "120")
        monkeypatch.setenv("YT_TRANSCRIPT_GATEWAY__MODE", "before")
        monkeypatch.setenv("YT_TRANSCRIPT_DEFAULT_LANGUAGES", '["de", "en"]')
        settings = Settings()
        assert settings.cache.max_age == 120.0
        assert settings.gateway.mode == "before"
        assert settings.default_languages == ["de", "en"]

    def test_mcp_has_tools(self):
        assert mcp is not None
        assert mcp.name == "YouTube Transcript Resolver"
