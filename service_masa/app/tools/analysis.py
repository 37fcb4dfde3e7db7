"""
AI analysis tools.
"""

from typing import Annotated, Any, Dict, List

from fastmcp import FastMCP
from pydantic import Field

from shared.logging import get_logger
from ..services.factory import ServiceFactory
from .base import run_tool


class TwitterAnalysisTools:
    """Search-term extraction and tweet analysis."""

    def __init__(self, factory: ServiceFactory):
        self.factory = factory
        self.logger = get_logger("masa.tools.analysis")

    def register(self, mcp: FastMCP):
        mcp.tool(
            name="extract_search_terms",
            description="Extracts optimized search terms from user input using AI.",
        )(self.extract_search_terms)
        mcp.tool(
            name="analyze_data",
            description="Analyzes tweet data using AI based on a prompt.",
        )(self.analyze_data)

    async def extract_search_terms(
        self,
        user_input: Annotated[str, Field(description="The user input to extract search terms from")],
    ) -> Dict[str, Any]:
        service = self.factory.get_web_service()
        return await run_tool(
            "extract_search_terms",
            self.logger,
            lambda: service.extract_search_terms(user_input),
            input_length=len(user_input),
        )

    async def analyze_data(
        self,
        tweets: Annotated[List[str], Field(description="The tweets to analyze (array of strings)")],
        prompt: Annotated[str, Field(description="The analysis prompt")],
    ) -> Dict[str, Any]:
        service = self.factory.get_analytics_service()
        return await run_tool(
            "analyze_data",
            self.logger,
            lambda: service.analyze_data(tweets, prompt),
            tweets=len(tweets),
        )
