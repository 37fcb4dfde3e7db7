"""
Twitter service.
"""

from typing import Sequence

from ..adapters.masa_client import MasaApiClient
from ..adapters.models import (
    LiveTwitterSearchJob,
    LiveTwitterSearchJobStatus,
    LiveTwitterSearchResultsPage,
    SimilaritySearchResult,
)
from .base import BaseService


class TwitterService(BaseService):
    """Live Twitter search and similarity search."""

    def __init__(self, api_client: MasaApiClient):
        super().__init__("TwitterService")
        self.api_client = api_client

    async def search_tweets(self, query: str, max_results: int) -> LiveTwitterSearchJob:
        self.log_with_context(
            "info",
            f'Starting Twitter search for query: "{query}"',
            max_results=max_results
        )
        return await self.api_client.start_live_twitter_search(query, max_results)

    async def get_search_status(self, job_id: str) -> LiveTwitterSearchJobStatus:
        self.log_with_context("debug", "Getting status for search job", job_id=job_id)
        return await self.api_client.get_live_twitter_search_status(job_id)

    async def get_search_results(self, job_id: str) -> LiveTwitterSearchResultsPage:
        self.log_with_context("debug", "Getting results for search job", job_id=job_id)
        return await self.api_client.get_live_twitter_search_results(job_id)

    async def search_with_similarity(self,
                                     query: str,
                                     keywords: Sequence[str],
                                     max_results: int) -> SimilaritySearchResult:
        self.log_with_context(
            "info",
            f'Starting similarity search with query: "{query}"',
            keywords=len(keywords),
            max_results=max_results
        )
        return await self.api_client.search_with_similarity(query, keywords, max_results)
