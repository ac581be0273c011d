"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: fetch/__init__.py.
"""

from .contracts import DEFAULT_STATUS_CODES_TO_RETRY, RetryConfig
from .retry import fetch_r, is_retryable

__all__ = [
    "RetryConfig",
    "DEFAULT_STATUS_CODES_TO_RETRY",
    "fetch_r",
    "is_retryable",
]
