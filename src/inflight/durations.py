"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Immutable durations and the compact duration string format (``30s``,
``5m``, ``-40M``, ``20ms``) used to configure refresh periods.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from .errors import DurationParseError

_DURATION_RE = re.compile(r"\s*(-?\d+)\s*(ms|[dhms])\s*", re.IGNORECASE)


class TimeUnit(str, Enum):
    """Unit designators accepted by ``Duration.parse``."""

    DAYS = "d"
    HOURS = "h"
    MINUTES = "m"
    SECONDS = "s"
    MILLIS = "ms"


_UNIT_MILLIS: dict[TimeUnit, int] = {
    TimeUnit.DAYS: 24 * 60 * 60 * 1000,
    TimeUnit.HOURS: 60 * 60 * 1000,
    TimeUnit.MINUTES: 60 * 1000,
    TimeUnit.SECONDS: 1000,
    TimeUnit.MILLIS: 1,
}


@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """A length of time with millisecond precision."""

    duration_ms: int

    def millis(self) -> int:
        return self.duration_ms

    def seconds(self) -> float:
        return self.duration_ms / 1000

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.duration_ms)

    def is_greater_than(self, other: Duration) -> bool:
        return self.duration_ms > other.duration_ms

    def is_less_than(self, other: Duration) -> bool:
        return self.duration_ms < other.duration_ms

    @staticmethod
    def parse(text: str) -> Duration:
        """
        Parse a duration string.

        The string is an optionally negative integer followed by one unit
        designator: ``d`` days, ``h`` hours, ``m`` minutes, ``s`` seconds
        or ``ms`` milliseconds. Designators are case-insensitive, so
        ``2H`` and ``2h`` are equal.

        Raises:
            DurationParseError: If ``text`` is not exactly one such term.
        """
        match = _DURATION_RE.fullmatch(text)
        if match is None:
            raise DurationParseError(f"Failed to parse duration string: '{text}'")
        amount = int(match.group(1))
        unit = TimeUnit(match.group(2).lower())
        return Duration.of_unit(amount, unit)

    @staticmethod
    def of_unit(amount: int, unit: TimeUnit) -> Duration:
        return Duration(amount * _UNIT_MILLIS[TimeUnit(unit)])

    @staticmethod
    def of_days(amount: int) -> Duration:
        return Duration.of_unit(amount, TimeUnit.DAYS)

    @staticmethod
    def of_hours(amount: int) -> Duration:
        return Duration.of_unit(amount, TimeUnit.HOURS)

    @staticmethod
    def of_minutes(amount: int) -> Duration:
        return Duration.of_unit(amount, TimeUnit.MINUTES)

    @staticmethod
    def of_seconds(amount: int) -> Duration:
        return Duration.of_unit(amount, TimeUnit.SECONDS)

    @staticmethod
    def of_millis(amount: int) -> Duration:
        return Duration(amount)


def as_seconds(period: Duration | float) -> float:
    """Normalize a period given as ``Duration`` or seconds."""
    if isinstance(period, Duration):
        return period.seconds()
    return float(period)
