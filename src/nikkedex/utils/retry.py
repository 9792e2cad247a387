# ABOUTME: Retry logic for wiki requests using the tenacity library
# ABOUTME: Converts httpx failures into a fetch error hierarchy and retries only transient ones

import asyncio
import functools
import time
from collections.abc import Callable
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from nikkedex.utils.logging import get_logger

logger = get_logger(__name__)


class FetchError(Exception):
    """Base exception for wiki request failures."""

    pass


class RateLimitError(FetchError):
    """Raised when the wiki answers 429 Too Many Requests."""

    pass


class ServerError(FetchError):
    """Raised when the wiki answers with a 5xx status."""

    pass


class FetchTimeoutError(FetchError):
    """Raised when a request times out."""

    pass


class FetchConnectionError(FetchError):
    """Raised when the connection to the wiki fails."""

    pass


RETRYABLE_ERRORS = (RateLimitError, ServerError, FetchTimeoutError, FetchConnectionError)

# Global rate limiter state
_rate_limiter_state = {
    "calls_per_second": 0.0,
    "last_call_time": 0.0,
}


async def _apply_rate_limiting():
    """Apply rate limiting using simple async sleep."""
    state = _rate_limiter_state

    if state["calls_per_second"] <= 0:
        return

    min_interval = 1.0 / state["calls_per_second"]
    current_time = time.time()
    time_since_last = current_time - state["last_call_time"]

    # Reserve the slot before sleeping so concurrent callers queue behind it
    state["last_call_time"] = max(current_time, state["last_call_time"] + min_interval)

    if time_since_last < min_interval:
        sleep_time = state["last_call_time"] - current_time
        logger.debug("Rate limiting", sleep_time=sleep_time)
        await asyncio.sleep(sleep_time)


def convert_exception(e: Exception) -> FetchError:
    """Convert httpx exceptions to fetch-specific ones for retry decisions."""
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        if status == 429:
            return RateLimitError(f"Rate limit exceeded: {e}")
        if status >= 500:
            return ServerError(f"Server error {status}: {e}")
        return FetchError(f"Request rejected with status {status}: {e}")
    if isinstance(e, httpx.TimeoutException):
        return FetchTimeoutError(f"Request timeout: {e}")
    if isinstance(e, httpx.TransportError):
        return FetchConnectionError(f"Connection failed: {e}")
    return FetchError(f"Wiki request failed: {e}")


def fetch_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
    multiplier: float = 2.0,
    with_rate_limiting: bool = True,
):
    """Retry decorator for async wiki requests."""

    def decorator(func: Callable):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
                reraise=True,
            ):
                with attempt:
                    # Apply rate limiting before each attempt
                    if with_rate_limiting:
                        await _apply_rate_limiting()

                    try:
                        return await func(*args, **kwargs)
                    except FetchError:
                        raise
                    except httpx.HTTPError as e:
                        converted = convert_exception(e)
                        logger.debug(
                            "Wiki request attempt failed",
                            attempt=attempt.retry_state.attempt_number,
                            error=str(converted),
                            error_type=type(converted).__name__,
                        )
                        raise converted from e

        return wrapper

    return decorator


def configure_fetch_retry(rate_limit: float = 0.0) -> None:
    """Configure global fetch rate limiting (requests per second, 0 disables)."""
    _rate_limiter_state["calls_per_second"] = rate_limit
    _rate_limiter_state["last_call_time"] = 0.0

    logger.info("Fetch retry configured", rate_limit=rate_limit)


def get_fetch_retry_status() -> dict[str, Any]:
    """Get current status of fetch rate limiting."""
    return {
        "rate_limiter": {
            "calls_per_second": _rate_limiter_state["calls_per_second"],
            "last_call_time": _rate_limiter_state["last_call_time"],
        },
    }
