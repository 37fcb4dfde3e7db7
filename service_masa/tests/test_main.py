"""
Unit tests for the composition root.
"""

import pytest
from unittest.mock import patch

from shared.errors import ConfigurationError
from shared.test_helpers import MockMasaApi, create_test_settings
from service_masa.app.main import create_app, main


class TestCreateApp:
    """Test cases for create_app."""

    @pytest.mark.asyncio
    async def test_wires_one_instance_of_each_collaborator(self):
        app = create_app(create_test_settings(), transport=MockMasaApi({}).transport)

        assert app.api_client.http_client is app.http_client
        assert app.api_client.cache is app.cache
        assert app.factory.get_api_client() is app.api_client
        assert app.cache.metrics is app.metrics
        assert app.http_client.metrics is app.metrics
        await app.aclose()

    @pytest.mark.asyncio
    async def test_settings_flow_into_components(self):
        settings = create_test_settings(
            max_attempts=2,
            retry_base_delay=0.25,
            cache_max_size=7,
            cache_ttl_seconds=60,
            status_cache_ttl_seconds=2
        )

        app = create_app(settings, transport=MockMasaApi({}).transport)

        assert app.http_client.retry_config.max_attempts == 2
        assert app.http_client.retry_config.base_delay == 0.25
        assert app.cache.default_max_size == 7
        assert app.cache.default_ttl == 60
        assert app.api_client.status_ttl == 2
        await app.aclose()

    @pytest.mark.asyncio
    async def test_registers_tools(self):
        app = create_app(create_test_settings(), transport=MockMasaApi({}).transport)

        tools = await app.mcp.get_tools()

        assert "start_live_twitter_search" in tools
        assert len(tools) == 7
        await app.aclose()

    @pytest.mark.asyncio
    async def test_requests_and_cache_recorded_in_metrics(self):
        api = MockMasaApi({"uuid": "123"})
        app = create_app(create_test_settings(), transport=api.transport)

        await app.api_client.start_live_twitter_search("ai", 10)
        await app.api_client.start_live_twitter_search("ai", 10)

        assert app.metrics.get_sample_value(
            "masa_api_requests_total",
            {"method": "POST", "path": "/api/v1/search/live/twitter", "status": "200"}
        ) == 1.0
        assert app.metrics.get_sample_value(
            "masa_cache_operations_total", {"region": "twitter", "result": "hit"}
        ) == 1.0
        assert app.metrics.get_sample_value(
            "masa_cache_operations_total", {"region": "twitter", "result": "miss"}
        ) == 1.0
        await app.aclose()


class TestMain:
    """Test cases for the process entry point."""

    def test_exits_when_configuration_invalid(self, capsys):
        with patch(
            "service_masa.app.main.load_settings",
            side_effect=ConfigurationError("MASA_API_KEY is required")
        ):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "MASA_API_KEY is required" in captured.err
        assert captured.out == ""

    def test_serves_over_stdio(self):
        settings = create_test_settings()

        with patch("service_masa.app.main.load_settings", return_value=settings), \
                patch("service_masa.app.main.configure_logging") as configure, \
                patch("service_masa.app.main.asyncio.run") as run:
            main()

        configure.assert_called_once_with("masa", "info", json_logs=True)
        run.assert_called_once()
        run.call_args.args[0].close()

