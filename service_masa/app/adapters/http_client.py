"""
Resilient HTTP client for the Masa API.

Every call goes through the same pipeline:

    retry loop -> logging wrapper -> httpx send -> raise_for_status

The logging wrapper is a plain function composed around the send
coroutine. It strips credentials from headers before anything is logged.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional
from urllib.parse import urlsplit

import httpx
import structlog

from shared.errors import ValidationError
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from shared.retry import RetryConfig, call_with_retry


SENSITIVE_HEADERS = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
})

DEFAULT_TIMEOUT = 30.0

SendFunc = Callable[[httpx.Request], Awaitable[httpx.Response]]


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound call: relative path, method, JSON body and query."""
    path: str
    method: str = "GET"
    body: Optional[Mapping[str, Any]] = None
    query: Optional[Mapping[str, Any]] = None
    route: Optional[str] = None  # path template, used as a low-cardinality label


def validate_path(path: str) -> str:
    """Reject anything that is not a plain path relative to the base URL."""
    parts = urlsplit(path)
    if (
        not path.startswith("/")
        or path.startswith("//")
        or parts.scheme
        or parts.netloc
        or ".." in parts.path.split("/")
    ):
        raise ValidationError(
            f"Invalid request path: {path!r}",
            details={"path": path}
        )
    return path


def sanitize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Return a copy of `headers` without credentials."""
    return {
        key: value
        for key, value in headers.items()
        if key.lower() not in SENSITIVE_HEADERS
    }


def _request_body(request: httpx.Request) -> Optional[str]:
    if not request.content:
        return None
    return request.content.decode("utf-8", errors="replace")


def with_logging(send: SendFunc,
                 logger: structlog.BoundLogger,
                 metrics: Optional[MetricsCollector] = None) -> SendFunc:
    """Wrap `send` so each request, response and error is logged once."""

    async def logged_send(request: httpx.Request) -> httpx.Response:
        route = request.extensions.get("route") or request.url.path
        url = str(request.url)

        logger.info(
            "API request",
            method=request.method,
            url=url,
            params=dict(request.url.params),
            headers=sanitize_headers(request.headers),
            data=_request_body(request)
        )

        start = time.perf_counter()
        try:
            response = await send(request)
        except httpx.HTTPStatusError as exc:
            duration = time.perf_counter() - start
            logger.error(
                "API error",
                method=request.method,
                url=url,
                status=exc.response.status_code,
                status_text=exc.response.reason_phrase,
                message=str(exc),
                headers=sanitize_headers(request.headers)
            )
            if metrics:
                metrics.record_api_request(request.method, route, str(exc.response.status_code), duration)
            raise
        except Exception as exc:
            duration = time.perf_counter() - start
            logger.error(
                "API error",
                method=request.method,
                url=url,
                status=None,
                message=str(exc) or exc.__class__.__name__,
                error_type=exc.__class__.__name__,
                headers=sanitize_headers(request.headers)
            )
            if metrics:
                metrics.record_api_request(request.method, route, "error", duration)
            raise

        duration = time.perf_counter() - start
        logger.info(
            "API response",
            method=request.method,
            url=url,
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=sanitize_headers(response.headers),
            response_time=response.headers.get("x-response-time", "N/A"),
            duration_ms=round(duration * 1000, 2)
        )
        if metrics:
            metrics.record_api_request(request.method, route, str(response.status_code), duration)
        return response

    return logged_send


class ResilientHttpClient:
    """Authenticated, logged and retried access to the Masa API."""

    def __init__(self,
                 base_url: str,
                 api_key: str,
                 *,
                 timeout: float = DEFAULT_TIMEOUT,
                 retry_config: Optional[RetryConfig] = None,
                 metrics: Optional[MetricsCollector] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        self.base_url = base_url.rstrip("/")
        self.logger = get_logger("masa.http_client")
        self.retry_config = retry_config or RetryConfig(max_attempts=3, base_delay=1.0)
        self.metrics = metrics
        self._sleep = sleep

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            transport=transport,
        )
        self._send = with_logging(self._send_checked, self.logger, metrics)

    async def request(self, descriptor: RequestDescriptor) -> Any:
        """Perform `descriptor` and return the decoded JSON body."""
        validate_path(descriptor.path)

        return await call_with_retry(
            lambda: self._attempt(descriptor),
            self.retry_config,
            name=descriptor.route or descriptor.path,
            sleep=self._sleep,
            on_retry=self._record_retry
        )

    async def _attempt(self, descriptor: RequestDescriptor) -> Any:
        request = self._client.build_request(
            descriptor.method.upper(),
            descriptor.path,
            json=dict(descriptor.body) if descriptor.body is not None else None,
            params=dict(descriptor.query) if descriptor.query else None,
        )
        if descriptor.route:
            request.extensions["route"] = descriptor.route

        response = await self._send(request)
        if not response.content:
            return None
        return response.json()

    async def _send_checked(self, request: httpx.Request) -> httpx.Response:
        response = await self._client.send(request)
        response.raise_for_status()
        return response

    def _record_retry(self, error: BaseException):
        if not self.metrics:
            return
        if isinstance(error, httpx.HTTPStatusError):
            reason = str(error.response.status_code)
        else:
            reason = error.__class__.__name__
        self.metrics.record_retry(reason)

    async def aclose(self):
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "ResilientHttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
