"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error hierarchy for inflight.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class InflightError(RuntimeError):
    """Base inflight error."""


class DurationParseError(InflightError, ValueError):
    """Raised when a duration string cannot be parsed."""


class RetryableResponseError(InflightError):
    """Raised internally when a response status code should be retried."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"Retryable response status {response.status_code}")
        self.response = response
