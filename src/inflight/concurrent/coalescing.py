"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: concurrent/coalescing.py.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger("inflight.concurrent")


class SingleInFlight(Generic[T]):
    """
    Allow one outstanding call at a time to the wrapped producer.

    Callers arriving while a call is outstanding join it and observe the
    same result or exception. The marker is cleared when the call settles,
    so the next invocation always starts a new call.
    """

    def __init__(self, fn: Callable[[], Awaitable[T]]) -> None:
        self._fn = fn
        self._task: asyncio.Task[T] | None = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None

    def __call__(self) -> Awaitable[T]:
        # No await between the check and the assignment below.
        task = self._task
        if task is None:
            task = asyncio.create_task(self._run())
            self._task = task
            logger.debug("Started in-flight call to %r", self._fn)
        else:
            logger.debug("Joined in-flight call to %r", self._fn)
        return self._wait(task)

    async def _run(self) -> T:
        try:
            return await self._fn()
        finally:
            self._task = None

    @staticmethod
    async def _wait(task: asyncio.Task[T]) -> T:
        # A cancelled waiter must not cancel the call shared with the others.
        return await asyncio.shield(task)


def single_in_flight(fn: Callable[[], Awaitable[T]]) -> SingleInFlight[T]:
    """Wrap ``fn`` so concurrent invocations share one outstanding call."""
    return SingleInFlight(fn)
