"""
Retry mechanism for resilient operations.
"""

import asyncio
import random
from typing import Any, Callable, Awaitable, Optional

import httpx

from shared.logging import get_logger


def is_transient_error(error: BaseException) -> bool:
    """Return False for HTTP 4xx responses other than 429, True otherwise."""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        if 400 <= status < 500 and status != 429:
            return False
    return True


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(self,
                 max_attempts: int = 3,
                 base_delay: float = 1.0,
                 max_delay: Optional[float] = None,
                 exponential_base: float = 2.0,
                 jitter: bool = False,
                 is_retryable: Callable[[BaseException], bool] = is_transient_error):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.is_retryable = is_retryable

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after failed attempt `attempt` (1-based)."""
        delay = self.base_delay * (self.exponential_base ** (attempt - 1))

        if self.max_delay is not None:
            delay = min(delay, self.max_delay)

        if self.jitter:
            jitter_amount = delay * 0.1  # 10% jitter
            delay += random.uniform(-jitter_amount, jitter_amount)

        return max(0.0, delay)


async def call_with_retry(func: Callable[[], Awaitable[Any]],
                          config: Optional[RetryConfig] = None,
                          *,
                          name: str = "request",
                          sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
                          on_retry: Optional[Callable[[BaseException], None]] = None) -> Any:
    """Run `func` until it succeeds, fails permanently, or attempts run out.

    The last error is re-raised unchanged.
    """
    if config is None:
        config = RetryConfig()

    logger = get_logger(f"retry.{name}")

    for attempt in range(1, config.max_attempts + 1):
        try:
            result = await func()
        except Exception as e:
            if not config.is_retryable(e):
                logger.debug(
                    "Error is not retryable",
                    attempt=attempt,
                    operation=name,
                    error=str(e)
                )
                raise

            if attempt == config.max_attempts:
                logger.error(
                    "All retry attempts exhausted",
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    operation=name,
                    error=str(e)
                )
                raise

            delay = config.delay_for(attempt)

            logger.warning(
                "Request failed, retrying",
                attempt=f"{attempt}/{config.max_attempts}",
                delay=delay,
                operation=name,
                error=str(e)
            )
            if on_retry is not None:
                on_retry(e)

            await sleep(delay)
        else:
            if attempt > 1:
                logger.info(
                    "Retry succeeded",
                    attempt=attempt,
                    operation=name
                )
            return result

    raise AssertionError("unreachable: retry loop exited without result")
