"""
Masa MCP Service entry point.

`create_app` is the composition root: it builds one instance of each
collaborator and wires them together explicitly. `main` loads settings,
configures logging and serves the tools over stdio.
"""

import asyncio
import sys
from dataclasses import dataclass
from typing import Optional

import httpx
from fastmcp import FastMCP

from shared.config import MasaSettings, load_settings
from shared.errors import ConfigurationError
from shared.logging import configure_logging, get_logger
from shared.metrics import MetricsCollector
from shared.retry import RetryConfig
from .adapters.http_client import ResilientHttpClient
from .adapters.masa_client import MasaApiClient
from .caching.cache_manager import NamespacedCache
from .services.factory import ServiceFactory
from .tools import register_tools

SERVICE_NAME = "masa"
SERVER_NAME = "Masa MCP"
SERVER_VERSION = "0.1.0"

logger = get_logger("masa.main")


@dataclass
class App:
    """Everything built by the composition root."""
    settings: MasaSettings
    metrics: MetricsCollector
    cache: NamespacedCache
    http_client: ResilientHttpClient
    api_client: MasaApiClient
    factory: ServiceFactory
    mcp: FastMCP

    async def aclose(self):
        await self.http_client.aclose()


def create_app(settings: MasaSettings,
               *,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> App:
    """Build the service graph for `settings`."""
    metrics = MetricsCollector(SERVICE_NAME)

    cache = NamespacedCache(
        default_max_size=settings.cache_max_size,
        default_ttl=settings.cache_ttl_seconds,
        metrics=metrics
    )

    http_client = ResilientHttpClient(
        settings.api_url,
        settings.api_key.get_secret_value(),
        timeout=settings.request_timeout,
        retry_config=RetryConfig(
            max_attempts=settings.max_attempts,
            base_delay=settings.retry_base_delay
        ),
        metrics=metrics,
        transport=transport
    )

    api_client = MasaApiClient(
        http_client,
        cache,
        status_ttl=settings.status_cache_ttl_seconds
    )
    factory = ServiceFactory(api_client)

    mcp = FastMCP(SERVER_NAME)
    register_tools(mcp, factory)

    logger.info(
        "Masa MCP server configured",
        version=SERVER_VERSION,
        api_url=settings.api_url,
        env=settings.env
    )
    return App(
        settings=settings,
        metrics=metrics,
        cache=cache,
        http_client=http_client,
        api_client=api_client,
        factory=factory,
        mcp=mcp
    )


async def serve(app: App):
    """Serve tools over stdio until the client disconnects."""
    try:
        logger.info("Masa MCP server running with stdio")
        await app.mcp.run_async(transport="stdio")
    finally:
        await app.aclose()
        logger.info("Server stopped")


def main():
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Failed to start Masa MCP server: {exc.message}", file=sys.stderr)
        sys.exit(1)

    configure_logging(SERVICE_NAME, settings.log_level, json_logs=not settings.is_development())
    app = create_app(settings)

    if settings.metrics_port:
        app.metrics.start_exporter(settings.metrics_port)
        logger.info("Metrics exporter started", port=settings.metrics_port)

    try:
        asyncio.run(serve(app))
    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")


if __name__ == "__main__":
    main()
