"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: concurrent/__init__.py.
"""

from .coalescing import SingleInFlight, single_in_flight
from .expiring import CacheState, ExpiringValue, SingleInFlightCachingValueProvider

__all__ = [
    "SingleInFlight",
    "single_in_flight",
    "ExpiringValue",
    "CacheState",
    "SingleInFlightCachingValueProvider",
]
