"""
Web scraping tools.
"""

from typing import Annotated, Any, Dict

from fastmcp import FastMCP
from pydantic import Field

from shared.logging import get_logger
from ..adapters.models import ScrapeFormat
from ..services.factory import ServiceFactory
from .base import run_tool


class WebTools:
    """Page scraping."""

    def __init__(self, factory: ServiceFactory):
        self.factory = factory
        self.logger = get_logger("masa.tools.web")

    def register(self, mcp: FastMCP):
        mcp.tool(
            name="scrape_website",
            description="Retrieve the contents from a web URL and parse them into the specified format.",
        )(self.scrape_website)

    async def scrape_website(
        self,
        url: Annotated[str, Field(description="The url to scrape")],
        format: Annotated[ScrapeFormat, Field(description="The format to parse the content into")] = "html",
    ) -> Dict[str, Any]:
        service = self.factory.get_web_service()
        return await run_tool(
            "scrape_website",
            self.logger,
            lambda: service.scrape_website(url, format),
            url=url,
            format=format,
        )
