"""
Unit tests for the service facade.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from structlog.testing import capture_logs

from service_masa.app.adapters.masa_client import MasaApiClient
from service_masa.app.adapters.models import (
    DataAnalysisResult,
    LiveTwitterSearchJob,
    LiveTwitterSearchJobStatus,
    LiveTwitterSearchResultsPage,
    SearchTermExtractionResult,
    SimilaritySearchResult,
    WebScrapeResult,
)
from service_masa.app.services import (
    AnalyticsService,
    ServiceFactory,
    TwitterService,
    WebService,
)


@pytest.fixture
def api_client():
    """Mock API client."""
    client = MagicMock(spec=MasaApiClient)
    client.start_live_twitter_search = AsyncMock(return_value=LiveTwitterSearchJob(uuid="123"))
    client.get_live_twitter_search_status = AsyncMock(return_value=LiveTwitterSearchJobStatus(status="done"))
    client.get_live_twitter_search_results = AsyncMock(return_value=LiveTwitterSearchResultsPage(results=[]))
    client.search_with_similarity = AsyncMock(return_value=SimilaritySearchResult(results=[]))
    client.scrape_website = AsyncMock(return_value=WebScrapeResult(url="https://example.com"))
    client.extract_search_terms = AsyncMock(return_value=SearchTermExtractionResult(search_term="btc"))
    client.analyze_data = AsyncMock(return_value=DataAnalysisResult(result="positive"))
    return client


class TestTwitterService:
    """Test cases for TwitterService."""

    @pytest.mark.asyncio
    async def test_search_tweets(self, api_client):
        service = TwitterService(api_client)

        job = await service.search_tweets("ai", 10)

        assert job.uuid == "123"
        api_client.start_live_twitter_search.assert_awaited_once_with("ai", 10)

    @pytest.mark.asyncio
    async def test_get_search_status_and_results(self, api_client):
        service = TwitterService(api_client)

        status = await service.get_search_status("123")
        page = await service.get_search_results("123")

        assert status.status == "done"
        assert page.results == []
        api_client.get_live_twitter_search_status.assert_awaited_once_with("123")
        api_client.get_live_twitter_search_results.assert_awaited_once_with("123")

    @pytest.mark.asyncio
    async def test_search_with_similarity(self, api_client):
        service = TwitterService(api_client)

        await service.search_with_similarity("ai", ["llm"], 5)

        api_client.search_with_similarity.assert_awaited_once_with("ai", ["llm"], 5)

    @pytest.mark.asyncio
    async def test_logs_with_service_name(self, api_client):
        service = TwitterService(api_client)

        with capture_logs() as logs:
            await service.search_tweets("ai", 10)

        assert logs[0]["event"] == '[TwitterService] Starting Twitter search for query: "ai"'
        assert logs[0]["service_name"] == "TwitterService"
        assert logs[0]["max_results"] == 10

    def test_service_name(self, api_client):
        assert TwitterService(api_client).get_service_name() == "TwitterService"


class TestWebService:
    """Test cases for WebService."""

    @pytest.mark.asyncio
    async def test_scrape_website(self, api_client):
        service = WebService(api_client)

        result = await service.scrape_website("https://example.com", "text")

        assert result.url == "https://example.com"
        api_client.scrape_website.assert_awaited_once_with("https://example.com", "text")

    @pytest.mark.asyncio
    async def test_extract_search_terms(self, api_client):
        service = WebService(api_client)

        result = await service.extract_search_terms("what is btc doing")

        assert result.search_term == "btc"
        api_client.extract_search_terms.assert_awaited_once_with("what is btc doing")


class TestAnalyticsService:
    """Test cases for AnalyticsService."""

    @pytest.mark.asyncio
    async def test_analyze_data(self, api_client):
        service = AnalyticsService(api_client)

        result = await service.analyze_data(["t1", "t2"], "sentiment")

        assert result.result == "positive"
        api_client.analyze_data.assert_awaited_once_with(["t1", "t2"], "sentiment")

    @pytest.mark.asyncio
    async def test_long_prompt_truncated_in_log(self, api_client):
        service = AnalyticsService(api_client)

        with capture_logs() as logs:
            await service.analyze_data(["t"], "x" * 80)

        assert logs[0]["event"].endswith('"' + "x" * 50 + '..."')


class TestServiceFactory:
    """Test cases for ServiceFactory."""

    def test_services_are_created_once(self, api_client):
        factory = ServiceFactory(api_client)

        assert factory.get_twitter_service() is factory.get_twitter_service()
        assert factory.get_web_service() is factory.get_web_service()
        assert factory.get_analytics_service() is factory.get_analytics_service()

    def test_services_share_api_client(self, api_client):
        factory = ServiceFactory(api_client)

        assert factory.get_api_client() is api_client
        assert factory.get_twitter_service().api_client is api_client
        assert factory.get_web_service().api_client is api_client
        assert factory.get_analytics_service().api_client is api_client

    def test_set_api_client_resets_services(self, api_client):
        factory = ServiceFactory(api_client)
        old_service = factory.get_twitter_service()
        replacement = MagicMock(spec=MasaApiClient)

        factory.set_api_client(replacement)

        new_service = factory.get_twitter_service()
        assert new_service is not old_service
        assert new_service.api_client is replacement
