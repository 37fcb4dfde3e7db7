"""
Unit tests for the MCP tool handlers.
"""

import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock
from fastmcp import FastMCP
from structlog.testing import capture_logs

from shared.logging import request_id_var, tool_var
from service_masa.app.adapters.masa_client import MasaApiClient
from service_masa.app.adapters.models import (
    DataAnalysisResult,
    LiveTwitterSearchJob,
    LiveTwitterSearchJobStatus,
    LiveTwitterSearchResultsPage,
    SearchTermExtractionResult,
    SimilaritySearchResult,
    Tweet,
    WebScrapeResult,
)
from service_masa.app.services import ServiceFactory
from service_masa.app.tools import (
    TwitterAnalysisTools,
    TwitterTools,
    WebTools,
    register_tools,
)


@pytest.fixture
def api_client():
    """Mock API client."""
    client = MagicMock(spec=MasaApiClient)
    client.start_live_twitter_search = AsyncMock(return_value=LiveTwitterSearchJob(uuid="123"))
    client.get_live_twitter_search_status = AsyncMock(return_value=LiveTwitterSearchJobStatus(status="done"))
    client.get_live_twitter_search_results = AsyncMock(
        return_value=LiveTwitterSearchResultsPage(results=[Tweet(id="1", text="hello")])
    )
    client.search_with_similarity = AsyncMock(return_value=SimilaritySearchResult(results=[]))
    client.scrape_website = AsyncMock(return_value=WebScrapeResult(url="https://example.com", content="hi"))
    client.extract_search_terms = AsyncMock(
        return_value=SearchTermExtractionResult(search_term="btc", thinking="short")
    )
    client.analyze_data = AsyncMock(return_value=DataAnalysisResult(result="positive"))
    return client


@pytest.fixture
def factory(api_client):
    """Service factory around the mock API client."""
    return ServiceFactory(api_client)


class TestTwitterTools:
    """Test cases for TwitterTools."""

    @pytest.mark.asyncio
    async def test_start_live_twitter_search(self, factory, api_client):
        tools = TwitterTools(factory)

        result = await tools.start_live_twitter_search("ai", 10)

        assert result == {"uuid": "123"}
        api_client.start_live_twitter_search.assert_awaited_once_with("ai", 10)

    @pytest.mark.asyncio
    async def test_status_and_results(self, factory):
        tools = TwitterTools(factory)

        status = await tools.get_live_twitter_search_status("123")
        results = await tools.get_live_twitter_search_results("123")

        assert status == {"status": "done"}
        assert results == {"results": [{"id": "1", "text": "hello"}]}

    @pytest.mark.asyncio
    async def test_search_with_similarity(self, factory, api_client):
        tools = TwitterTools(factory)

        result = await tools.search_with_similarity("ai", ["llm"], 5)

        assert result == {"results": []}
        api_client.search_with_similarity.assert_awaited_once_with("ai", ["llm"], 5)

    @pytest.mark.asyncio
    async def test_error_logged_and_reraised(self, factory, api_client):
        request = httpx.Request("POST", "https://mock.masa.test/api/v1/search/live/twitter")
        response = httpx.Response(404, request=request)
        api_client.start_live_twitter_search.side_effect = httpx.HTTPStatusError(
            "not found", request=request, response=response
        )
        tools = TwitterTools(factory)

        with capture_logs() as logs:
            with pytest.raises(httpx.HTTPStatusError):
                await tools.start_live_twitter_search("ai", 10)

        errors = [entry for entry in logs if entry["event"] == "[start_live_twitter_search][ERR]"]
        assert len(errors) == 1
        assert errors[0]["error_type"] == "HTTPStatusError"

    @pytest.mark.asyncio
    async def test_context_cleared_after_call(self, factory):
        tools = TwitterTools(factory)

        await tools.get_live_twitter_search_status("123")

        assert request_id_var.get() is None
        assert tool_var.get() is None


class TestTwitterAnalysisTools:
    """Test cases for TwitterAnalysisTools."""

    @pytest.mark.asyncio
    async def test_extract_search_terms_uses_alias(self, factory):
        tools = TwitterAnalysisTools(factory)

        result = await tools.extract_search_terms("what is btc doing")

        assert result == {"searchTerm": "btc", "thinking": "short"}

    @pytest.mark.asyncio
    async def test_analyze_data(self, factory, api_client):
        tools = TwitterAnalysisTools(factory)

        result = await tools.analyze_data(["t1"], "sentiment")

        assert result == {"result": "positive"}
        api_client.analyze_data.assert_awaited_once_with(["t1"], "sentiment")


class TestWebTools:
    """Test cases for WebTools."""

    @pytest.mark.asyncio
    async def test_scrape_website_defaults_to_html(self, factory, api_client):
        tools = WebTools(factory)

        result = await tools.scrape_website("https://example.com")

        assert result["content"] == "hi"
        api_client.scrape_website.assert_awaited_once_with("https://example.com", "html")


class TestRegisterTools:
    """Test cases for tool registration."""

    @pytest.mark.asyncio
    async def test_all_tools_registered(self, factory):
        mcp = FastMCP("test")

        register_tools(mcp, factory)

        tools = await mcp.get_tools()
        assert set(tools) == {
            "start_live_twitter_search",
            "get_live_twitter_search_status",
            "get_live_twitter_search_results",
            "search_with_similarity",
            "extract_search_terms",
            "analyze_data",
            "scrape_website",
        }
