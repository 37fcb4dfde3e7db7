"""
Service factory.
"""

from typing import Optional

from shared.logging import get_logger
from ..adapters.masa_client import MasaApiClient
from .analytics import AnalyticsService
from .twitter import TwitterService
from .web import WebService


class ServiceFactory:
    """Creates each service once, on first use, around a shared API client."""

    def __init__(self, api_client: MasaApiClient):
        self.logger = get_logger("masa.services.factory")
        self._api_client = api_client
        self._twitter_service: Optional[TwitterService] = None
        self._web_service: Optional[WebService] = None
        self._analytics_service: Optional[AnalyticsService] = None
        self.logger.info("ServiceFactory initialized")

    def get_twitter_service(self) -> TwitterService:
        if self._twitter_service is None:
            self._twitter_service = TwitterService(self._api_client)
            self.logger.debug("TwitterService instance created")
        return self._twitter_service

    def get_web_service(self) -> WebService:
        if self._web_service is None:
            self._web_service = WebService(self._api_client)
            self.logger.debug("WebService instance created")
        return self._web_service

    def get_analytics_service(self) -> AnalyticsService:
        if self._analytics_service is None:
            self._analytics_service = AnalyticsService(self._api_client)
            self.logger.debug("AnalyticsService instance created")
        return self._analytics_service

    def get_api_client(self) -> MasaApiClient:
        return self._api_client

    def set_api_client(self, api_client: MasaApiClient):
        """Swap the API client; services are recreated on next use."""
        self._api_client = api_client
        self._twitter_service = None
        self._web_service = None
        self._analytics_service = None
        self.logger.debug("API client replaced and services reset")
