"""
Web service: page scraping and search-term extraction.
"""

from typing import Optional

from ..adapters.masa_client import MasaApiClient
from ..adapters.models import ScrapeFormat, SearchTermExtractionResult, WebScrapeResult
from .base import BaseService


class WebService(BaseService):
    """Web scraping and search-term extraction."""

    def __init__(self, api_client: MasaApiClient):
        super().__init__("WebService")
        self.api_client = api_client

    async def scrape_website(self, url: str, format: Optional[ScrapeFormat] = None) -> WebScrapeResult:
        self.log_with_context("info", f"Scraping website: {url}", format=format or "html")
        return await self.api_client.scrape_website(url, format)

    async def extract_search_terms(self, user_input: str) -> SearchTermExtractionResult:
        self.log_with_context("info", "Extracting search terms from user input")
        return await self.api_client.extract_search_terms(user_input)
