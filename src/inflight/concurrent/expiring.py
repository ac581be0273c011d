"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: concurrent/expiring.py.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

from ..durations import Duration, as_seconds
from .coalescing import single_in_flight

if TYPE_CHECKING:
    from ..settings import ProviderSettings

T = TypeVar("T")

logger = logging.getLogger("inflight.concurrent")


@dataclass(frozen=True)
class ExpiringValue(Generic[T]):
    """A fetched value and the absolute time (epoch seconds) it expires at."""

    value: T
    expiry_time: float


class CacheState(str, Enum):
    """Classification of the cached value relative to a point in time."""

    ABSENT = "absent"
    EXPIRED = "expired"
    FRESH = "fresh"
    STALE = "stale"


class SingleInFlightCachingValueProvider(Generic[T]):
    """
    Cache one expiring value and refresh it ahead of expiry.

    The value is considered usable until ``expiry_time - time_remaining``.
    Inside the last ``prefetch_period`` of that window the first caller
    refreshes the value and waits for it, while concurrent callers keep
    receiving the cached value. Past the usable window every caller waits
    for the fetch. The fetcher is wrapped with ``single_in_flight`` so at
    most one fetch is outstanding.

    Args:
        fetcher: Zero-argument coroutine function returning ``ExpiringValue``.
        prefetch_period: Lead time before the usable deadline to refresh at.
        time_remaining: Minimum validity a returned value must still have.
        clock: Time source in the same domain as ``expiry_time``.
    """

    def __init__(
        self,
        fetcher: Callable[[], Awaitable[ExpiringValue[T]]],
        prefetch_period: Duration | float,
        time_remaining: Duration | float = 0.0,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._fetcher = fetcher
        self._fetch = single_in_flight(self._fetch_and_store)
        self._prefetch_period_s = as_seconds(prefetch_period)
        self._time_remaining_s = as_seconds(time_remaining)
        self._clock = clock
        self._cached: ExpiringValue[T] | None = None
        self._refresh_in_progress = False

    @classmethod
    def from_settings(
        cls,
        fetcher: Callable[[], Awaitable[ExpiringValue[T]]],
        settings: ProviderSettings,
        *,
        clock: Callable[[], float] = time.time,
    ) -> SingleInFlightCachingValueProvider[T]:
        return cls(
            fetcher,
            settings.prefetch_period,
            settings.time_remaining,
            clock=clock,
        )

    async def _fetch_and_store(self) -> ExpiringValue[T]:
        # Stored by the shared fetch so a cancelled caller does not drop it.
        fresh = await self._fetcher()
        self._cached = fresh
        return fresh

    @property
    def cached(self) -> ExpiringValue[T] | None:
        return self._cached

    @property
    def refresh_in_progress(self) -> bool:
        return self._refresh_in_progress

    def state(self, now: float | None = None) -> CacheState:
        """Classify the cached value at ``now`` (defaults to the clock)."""
        cached = self._cached
        if cached is None:
            return CacheState.ABSENT
        if now is None:
            now = self._clock()
        hard_deadline = cached.expiry_time - self._time_remaining_s
        if now > hard_deadline:
            return CacheState.EXPIRED
        if now < hard_deadline - self._prefetch_period_s:
            return CacheState.FRESH
        return CacheState.STALE

    async def get(self) -> T:
        """Return the cached value, fetching or refreshing it as needed."""
        state = self.state(self._clock())
        if state in (CacheState.ABSENT, CacheState.EXPIRED):
            logger.debug("Cached value %s, fetching", state.value)
            fresh = await self._fetch()
            return fresh.value

        if state is CacheState.FRESH or self._refresh_in_progress:
            return self._cached.value  # type: ignore[union-attr]

        logger.debug("Cached value stale, refreshing ahead of expiry")
        self._refresh_in_progress = True
        try:
            fresh = await self._fetch()
        finally:
            self._refresh_in_progress = False
        return fresh.value
