"""
Analytics service.
"""

from typing import Sequence

from ..adapters.masa_client import MasaApiClient
from ..adapters.models import DataAnalysisResult
from .base import BaseService


class AnalyticsService(BaseService):
    """AI analysis over collected tweets."""

    def __init__(self, api_client: MasaApiClient):
        super().__init__("AnalyticsService")
        self.api_client = api_client

    async def analyze_data(self, data: Sequence[str], prompt: str) -> DataAnalysisResult:
        preview = prompt[:50] + ("..." if len(prompt) > 50 else "")
        self.log_with_context("info", f'Analyzing {len(data)} data items with prompt: "{preview}"')
        return await self.api_client.analyze_data(data, prompt)
