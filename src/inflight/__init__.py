"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Single-flight value caching with proactive refresh ahead of expiry.
"""

from .concurrent import (
    CacheState,
    ExpiringValue,
    SingleInFlight,
    SingleInFlightCachingValueProvider,
    single_in_flight,
)
from .durations import Duration, TimeUnit
from .errors import DurationParseError, InflightError, RetryableResponseError
from .fetch import RetryConfig, fetch_r
from .settings import ProviderSettings

__all__ = [
    "single_in_flight",
    "SingleInFlight",
    "ExpiringValue",
    "CacheState",
    "SingleInFlightCachingValueProvider",
    "Duration",
    "TimeUnit",
    "RetryConfig",
    "fetch_r",
    "ProviderSettings",
    "InflightError",
    "DurationParseError",
    "RetryableResponseError",
]
