"""
Service facade for the Masa MCP Service.

Tool handlers talk to these services rather than to the API client. The
ServiceFactory is built once by the composition root and passed to the
tool modules.
"""

from .base import BaseService
from .twitter import TwitterService
from .web import WebService
from .analytics import AnalyticsService
from .factory import ServiceFactory

__all__ = [
    "BaseService",
    "TwitterService",
    "WebService",
    "AnalyticsService",
    "ServiceFactory",
]
