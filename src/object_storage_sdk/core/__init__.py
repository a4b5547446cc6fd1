"""Core components for the Object Storage SDK.

Token state, error classification and request execution used by the
authenticated client.
"""

from __future__ import annotations

from .errors import ErrorFactory
from .http_executor import AsyncHTTPExecutor
from .token_ops import TokenOperations

__all__ = [
    "ErrorFactory",
    "TokenOperations",
    "AsyncHTTPExecutor",
]
