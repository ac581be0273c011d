"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typed retry configuration for ``fetch_r``.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_STATUS_CODES_TO_RETRY: tuple[int, ...] = (408, 429, 500, 502, 503, 504)


class RetryConfig(BaseModel):
    """
    Retry semantics for one fetch.

    Attributes:
        retry_attempts: Retries after the first attempt.
        retry_delay_s: Fixed delay before each retry, in seconds.
        timeout_s: Optional timeout applied to each attempt, in seconds.
        on_retry_attempt: Called with the attempt number and the previous
            error right before each retry is sent.
        status_codes_to_retry: Response status codes treated as retryable.
    """

    model_config = ConfigDict(frozen=True)

    retry_attempts: int = Field(default=2, ge=0)
    retry_delay_s: float = Field(default=1.0, ge=0)
    timeout_s: float | None = Field(default=None, gt=0)
    on_retry_attempt: Callable[[int, BaseException], None] | None = None
    status_codes_to_retry: tuple[int, ...] = DEFAULT_STATUS_CODES_TO_RETRY
