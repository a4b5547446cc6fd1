"""Centralized error factory for the Object Storage SDK.

Maps response status codes and transport exceptions onto the SDK error
taxonomy.
"""

from __future__ import annotations

import httpx

from ..errors import (
    BadRequestError,
    DeleteConflictError,
    ObjectStorageError,
    ResourceNotFoundError,
    ServerError,
    TimeoutError,
    TransportError,
)

SUCCESS_STATUSES = frozenset({200, 201, 204})
BAD_REQUEST_STATUSES = frozenset({411, 416, 422})


class ErrorFactory:
    """Centralized error creation with consistent structure."""

    @staticmethod
    def is_success(status_code: int) -> bool:
        """Check whether ``status_code`` resolves a request successfully."""
        return status_code in SUCCESS_STATUSES

    @staticmethod
    def from_status(status_code: int, *, url: str | None = None) -> ObjectStorageError:
        """Create SDK error from a non-success status code.

        Args:
            status_code: HTTP status code of the response.
            url: Optional resource URL, recorded on not-found errors.

        Returns:
            Appropriate ObjectStorageError subclass; ServerError when the
            status has no dedicated kind.
        """
        if status_code == 404:
            return ResourceNotFoundError(resource=url)

        if status_code == 408:
            return TimeoutError()

        if status_code == 409:
            return DeleteConflictError()

        if status_code in BAD_REQUEST_STATUSES:
            return BadRequestError(status_code=status_code)

        return ServerError(status_code=status_code)

    @staticmethod
    def from_exception(exc: Exception) -> ObjectStorageError:
        """Create SDK error from an exception raised while sending a request.

        Args:
            exc: Original exception.

        Returns:
            The exception itself if it already is an SDK error, otherwise a
            TransportError chained to it.
        """
        if isinstance(exc, ObjectStorageError):
            return exc

        if isinstance(exc, httpx.TimeoutException):
            return TransportError(f"Request timed out: {exc}", cause=exc)

        if isinstance(exc, httpx.ConnectError):
            return TransportError(f"Connection failed: {exc}", cause=exc)

        if isinstance(exc, httpx.HTTPError):
            return TransportError(f"HTTP error: {exc}", cause=exc)

        return TransportError(f"Unexpected error: {exc}", cause=exc)
