"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: fetch/retry.py.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx

from ..errors import InflightError, RetryableResponseError
from .contracts import RetryConfig

T = TypeVar("T")

logger = logging.getLogger("inflight.fetch")


async def await_with_timeout(awaitable: Awaitable[T], timeout_s: float | None) -> T:
    """Await value with optional timeout."""
    if timeout_s is None:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout=timeout_s)


def _is_connection_reset(error: BaseException) -> bool:
    """Match resets raised directly or given as the explicit ``__cause__``."""
    current: BaseException | None = error
    while current is not None:
        if isinstance(current, ConnectionResetError):
            return True
        if isinstance(current, (httpx.ReadError, httpx.RemoteProtocolError)):
            return True
        current = current.__cause__
    return False


def is_retryable(error: BaseException) -> bool:
    """Whether a failed attempt may be retried."""
    if isinstance(error, RetryableResponseError):
        return True
    if isinstance(error, (asyncio.TimeoutError, TimeoutError, httpx.TimeoutException)):
        return True
    return _is_connection_reset(error)


async def fetch_r(
    url: str,
    *,
    method: str = "GET",
    client: httpx.AsyncClient | None = None,
    retry_config: RetryConfig | None = None,
    **request_kwargs: Any,
) -> httpx.Response:
    """
    Send an HTTP request, retrying timeouts, connection resets and
    retryable status codes.

    When every attempt ends in a retryable status code the last response is
    returned. When the last attempt fails with an error, that error is
    raised. Errors that are not retryable are raised immediately.
    """
    config = retry_config or RetryConfig()
    if client is None:
        async with httpx.AsyncClient() as owned:
            return await _fetch_with_retry(owned, method, url, config, request_kwargs)
    return await _fetch_with_retry(client, method, url, config, request_kwargs)


async def _fetch_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    config: RetryConfig,
    request_kwargs: dict[str, Any],
) -> httpx.Response:
    last: BaseException | None = None
    for attempt in range(config.retry_attempts + 1):
        if attempt > 0:
            if config.retry_delay_s > 0:
                await asyncio.sleep(config.retry_delay_s)
            logger.warning(
                "Retrying %s %s (attempt %d of %d): %s",
                method,
                url,
                attempt,
                config.retry_attempts,
                last,
            )
            if config.on_retry_attempt is not None and last is not None:
                config.on_retry_attempt(attempt, last)
        try:
            response = await await_with_timeout(
                client.request(method, url, **request_kwargs),
                config.timeout_s,
            )
            if response.status_code in config.status_codes_to_retry:
                raise RetryableResponseError(response)
            return response
        except Exception as error:
            if not is_retryable(error):
                raise
            last = error

    if isinstance(last, RetryableResponseError):
        return last.response
    if last is not None:
        raise last
    raise InflightError("Retry loop exhausted")
