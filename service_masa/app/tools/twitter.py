"""
Twitter search tools.
"""

from typing import Annotated, Any, Dict, List

from fastmcp import FastMCP
from pydantic import Field

from shared.logging import get_logger
from ..services.factory import ServiceFactory
from .base import run_tool


class TwitterTools:
    """Live search, job polling and similarity search."""

    def __init__(self, factory: ServiceFactory):
        self.factory = factory
        self.logger = get_logger("masa.tools.twitter")

    def register(self, mcp: FastMCP):
        mcp.tool(
            name="start_live_twitter_search",
            description="Initiates a new search on twitter for tweets matching a certain query.",
        )(self.start_live_twitter_search)
        mcp.tool(
            name="get_live_twitter_search_status",
            description="Retrieves the current status of a live Twitter search job.",
        )(self.get_live_twitter_search_status)
        mcp.tool(
            name="get_live_twitter_search_results",
            description="Retrieves the results of a live Twitter search job.",
        )(self.get_live_twitter_search_results)
        mcp.tool(
            name="search_with_similarity",
            description="Searches Twitter content with similarity matching against keywords.",
        )(self.search_with_similarity)

    async def start_live_twitter_search(
        self,
        query: Annotated[str, Field(description="The search query")],
        max_results: Annotated[int, Field(description="Maximum number of results to return", ge=1)],
    ) -> Dict[str, Any]:
        service = self.factory.get_twitter_service()
        return await run_tool(
            "start_live_twitter_search",
            self.logger,
            lambda: service.search_tweets(query, max_results),
            query=query,
            max_results=max_results,
        )

    async def get_live_twitter_search_status(
        self,
        job_id: Annotated[str, Field(description="The ID of the search job")],
    ) -> Dict[str, Any]:
        service = self.factory.get_twitter_service()
        return await run_tool(
            "get_live_twitter_search_status",
            self.logger,
            lambda: service.get_search_status(job_id),
            job_id=job_id,
        )

    async def get_live_twitter_search_results(
        self,
        job_id: Annotated[str, Field(description="The ID of the search job")],
    ) -> Dict[str, Any]:
        service = self.factory.get_twitter_service()
        return await run_tool(
            "get_live_twitter_search_results",
            self.logger,
            lambda: service.get_search_results(job_id),
            job_id=job_id,
        )

    async def search_with_similarity(
        self,
        query: Annotated[str, Field(description="The search query")],
        keywords: Annotated[List[str], Field(description="Keywords to match against")],
        max_results: Annotated[int, Field(description="Maximum number of results to return", ge=1)],
    ) -> Dict[str, Any]:
        service = self.factory.get_twitter_service()
        return await run_tool(
            "search_with_similarity",
            self.logger,
            lambda: service.search_with_similarity(query, keywords, max_results),
            query=query,
            keywords=keywords,
            max_results=max_results,
        )
