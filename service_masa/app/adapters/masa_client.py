"""
Masa API domain client.

One method per remote operation. Each method probes its cache region
first and only calls the API on a miss; validated responses are cached
before they are returned. Client errors propagate unchanged.
"""

from typing import Any, Dict, Optional, Sequence, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from shared.logging import get_logger
from ..caching.cache_manager import CacheOptions, NamespacedCache, TypedRegion, make_cache_key
from . import api_paths
from .http_client import RequestDescriptor, ResilientHttpClient
from .models import (
    DataAnalysisResult,
    LiveTwitterSearchJob,
    LiveTwitterSearchJobStatus,
    LiveTwitterSearchResultsPage,
    ScrapeFormat,
    SearchTermExtractionResult,
    SimilaritySearchResult,
    WebScrapeResult,
)

M = TypeVar("M", bound=BaseModel)

TWITTER_REGION = "twitter"
SCRAPE_REGION = "scrape"
EXTRACT_REGION = "extract"
ANALYSIS_REGION = "analysis"
SIMILARITY_REGION = "similarity"

DEFAULT_STATUS_TTL = 5.0


class MasaApiClient:
    """Cached access to the Masa search, scrape and analysis endpoints."""

    def __init__(self,
                 http_client: ResilientHttpClient,
                 cache: NamespacedCache,
                 *,
                 region_options: Optional[Dict[str, CacheOptions]] = None,
                 status_ttl: float = DEFAULT_STATUS_TTL):
        self.http_client = http_client
        self.cache = cache
        self.status_ttl = status_ttl
        self.logger = get_logger("masa.api_client")

        options = region_options or {}
        self._jobs = cache.typed(TWITTER_REGION, LiveTwitterSearchJob, options.get(TWITTER_REGION))
        self._statuses = cache.typed(TWITTER_REGION, LiveTwitterSearchJobStatus, options.get(TWITTER_REGION))
        self._results = cache.typed(TWITTER_REGION, LiveTwitterSearchResultsPage, options.get(TWITTER_REGION))
        self._scrapes = cache.typed(SCRAPE_REGION, WebScrapeResult, options.get(SCRAPE_REGION))
        self._extractions = cache.typed(EXTRACT_REGION, SearchTermExtractionResult, options.get(EXTRACT_REGION))
        self._analyses = cache.typed(ANALYSIS_REGION, DataAnalysisResult, options.get(ANALYSIS_REGION))
        self._similarities = cache.typed(SIMILARITY_REGION, SimilaritySearchResult, options.get(SIMILARITY_REGION))

    async def _cached(self,
                      region: TypedRegion[M],
                      key: str,
                      descriptor: RequestDescriptor,
                      model: Type[M],
                      ttl: Optional[float] = None) -> M:
        cached = region.get(key)
        if cached is not None:
            self.logger.debug("Serving cached response", region=region.region, route=descriptor.route)
            return cached

        body = await self.http_client.request(descriptor)
        result = model.model_validate(body)
        region.set(key, result, ttl=ttl)
        return result

    async def start_live_twitter_search(self, query: str, max_results: int) -> LiveTwitterSearchJob:
        """Start a live Twitter search and return its job handle."""
        key = make_cache_key("start_live_twitter_search", query, max_results)
        descriptor = RequestDescriptor(
            path=api_paths.SEARCH_LIVE_TWITTER,
            method="POST",
            body={"query": query, "max_results": max_results},
            route=api_paths.SEARCH_LIVE_TWITTER,
        )
        return await self._cached(self._jobs, key, descriptor, LiveTwitterSearchJob)

    async def get_live_twitter_search_status(self, job_id: str) -> LiveTwitterSearchJobStatus:
        """Fetch the status of a live Twitter search job.

        Statuses change while a job runs, so they are cached for
        `status_ttl` seconds only.
        """
        key = make_cache_key("get_live_twitter_search_status", job_id)
        descriptor = RequestDescriptor(
            path=_job_path(api_paths.SEARCH_LIVE_TWITTER_STATUS, job_id),
            method="GET",
            route=api_paths.SEARCH_LIVE_TWITTER_STATUS,
        )
        return await self._cached(self._statuses, key, descriptor, LiveTwitterSearchJobStatus, ttl=self.status_ttl)

    async def get_live_twitter_search_results(self, job_id: str) -> LiveTwitterSearchResultsPage:
        """Fetch the tweets collected by a live Twitter search job."""
        key = make_cache_key("get_live_twitter_search_results", job_id)
        descriptor = RequestDescriptor(
            path=_job_path(api_paths.SEARCH_LIVE_TWITTER_RESULT, job_id),
            method="GET",
            route=api_paths.SEARCH_LIVE_TWITTER_RESULT,
        )
        return await self._cached(self._results, key, descriptor, LiveTwitterSearchResultsPage)

    async def scrape_website(self, url: str, format: Optional[ScrapeFormat] = None) -> WebScrapeResult:
        """Scrape a web page, optionally asking for a specific content format."""
        body: Dict[str, Any] = {"url": url}
        if format:
            body["format"] = format

        key = make_cache_key("scrape_website", url, format)
        descriptor = RequestDescriptor(
            path=api_paths.SEARCH_LIVE_WEB_SCRAPE,
            method="POST",
            body=body,
            route=api_paths.SEARCH_LIVE_WEB_SCRAPE,
        )
        return await self._cached(self._scrapes, key, descriptor, WebScrapeResult)

    async def extract_search_terms(self, user_input: str) -> SearchTermExtractionResult:
        """Turn free-form user input into an optimized search term."""
        key = make_cache_key("extract_search_terms", user_input)
        descriptor = RequestDescriptor(
            path=api_paths.SEARCH_EXTRACTION,
            method="POST",
            body={"userInput": user_input},
            route=api_paths.SEARCH_EXTRACTION,
        )
        return await self._cached(self._extractions, key, descriptor, SearchTermExtractionResult)

    async def analyze_data(self, tweets: Sequence[str], prompt: str) -> DataAnalysisResult:
        """Run an AI analysis over `tweets` guided by `prompt`."""
        tweets = list(tweets)
        key = make_cache_key("analyze_data", tweets, prompt)
        descriptor = RequestDescriptor(
            path=api_paths.SEARCH_ANALYSIS,
            method="POST",
            body={"tweets": tweets, "prompt": prompt},
            route=api_paths.SEARCH_ANALYSIS,
        )
        return await self._cached(self._analyses, key, descriptor, DataAnalysisResult)

    async def search_with_similarity(self,
                                     query: str,
                                     keywords: Sequence[str],
                                     max_results: int) -> SimilaritySearchResult:
        """Search tweets ranked by similarity to `keywords`."""
        keywords = list(keywords)
        key = make_cache_key("search_with_similarity", query, keywords, max_results)
        descriptor = RequestDescriptor(
            path=api_paths.SEARCH_SIMILARITY_TWITTER,
            method="POST",
            body={"query": query, "keywords": keywords, "max_results": max_results},
            route=api_paths.SEARCH_SIMILARITY_TWITTER,
        )
        return await self._cached(self._similarities, key, descriptor, SimilaritySearchResult)

    async def aclose(self):
        await self.http_client.aclose()


def _job_path(template: str, job_id: str) -> str:
    # dots are encoded too so "." or ".." cannot act as a dot segment
    return template.replace("{id}", quote(job_id, safe="").replace(".", "%2E"))
