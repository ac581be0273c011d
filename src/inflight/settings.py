"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Provider settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .durations import Duration
from .fetch.contracts import DEFAULT_STATUS_CODES_TO_RETRY, RetryConfig


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    """Explicit settings used by caching providers and their fetchers."""

    prefetch_period: Duration = field(default_factory=lambda: Duration.of_seconds(30))
    time_remaining: Duration = field(default_factory=lambda: Duration.of_seconds(0))

    retry_attempts: int = 2
    retry_delay_s: float = 1.0
    fetch_timeout_s: float | None = None

    @staticmethod
    def from_env() -> "ProviderSettings":
        """Load settings from environment variables."""
        timeout = os.getenv("INFLIGHT_FETCH_TIMEOUT_S")
        return ProviderSettings(
            prefetch_period=Duration.parse(
                os.getenv("INFLIGHT_PREFETCH_PERIOD", "30s")
            ),
            time_remaining=Duration.parse(os.getenv("INFLIGHT_TIME_REMAINING", "0s")),
            retry_attempts=int(os.getenv("INFLIGHT_RETRY_ATTEMPTS", "2")),
            retry_delay_s=float(os.getenv("INFLIGHT_RETRY_DELAY_S", "1.0")),
            fetch_timeout_s=float(timeout) if timeout else None,
        )

    def to_retry_config(self) -> RetryConfig:
        """Adapt settings into the ``fetch_r`` retry configuration."""
        return RetryConfig(
            retry_attempts=self.retry_attempts,
            retry_delay_s=self.retry_delay_s,
            timeout_s=self.fetch_timeout_s,
            status_codes_to_retry=DEFAULT_STATUS_CODES_TO_RETRY,
        )
