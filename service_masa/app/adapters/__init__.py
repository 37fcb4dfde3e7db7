"""
Adapters package for the Masa MCP Service.

Contains the HTTP client wrapper for the Masa API and the domain client
built on top of it. These adapters encapsulate:

- Base URL, auth header and request shapes
- Retry policy and request/response logging
- Response validation into typed models

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .http_client import RequestDescriptor, ResilientHttpClient
from .masa_client import MasaApiClient

__all__ = [
    "RequestDescriptor",
    "ResilientHttpClient",
    "MasaApiClient",
]
